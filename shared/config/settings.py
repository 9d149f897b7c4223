"""
Runtime configuration for the order service.

Everything is read from the environment (a local .env file is loaded first).
There are no hard-coded secret fallbacks: an unset DB password or API key
stays empty, and an empty API key refuses every protected request.
"""
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from sqlalchemy.engine import URL

load_dotenv()

# Credential scopes, one per protected endpoint
SCOPE_LIST = "orders:list"
SCOPE_UPDATE = "orders:update"


def _database_url_from_parts() -> str:
    url = URL.create(
        drivername=os.getenv("DB_DRIVER", "postgresql+asyncpg"),
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASS") or None,
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "orders"),
    )
    return url.render_as_string(hide_password=False)


class Settings(BaseModel):
    database_url: str
    db_echo: bool = False
    db_create_tables: bool = True

    api_key: str = ""
    scoped_api_keys: dict[str, str] = Field(default_factory=dict)

    orders_list_limit: int = Field(default=50, ge=1, le=500)
    order_rate_limit: str = "30/minute"

    log_level: str = "INFO"
    metrics_enabled: bool = True
    tracing_enabled: bool = False
    otlp_endpoint: str = "http://localhost:4317"

    def credential_for(self, scope: str) -> str:
        """Scoped key when one is configured, otherwise the shared key."""
        return self.scoped_api_keys.get(scope) or self.api_key

    @classmethod
    def from_env(cls) -> "Settings":
        scoped = {
            SCOPE_LIST: os.getenv("ORDERS_LIST_API_KEY", ""),
            SCOPE_UPDATE: os.getenv("ORDERS_UPDATE_API_KEY", ""),
        }
        return cls(
            database_url=os.getenv("DATABASE_URL") or _database_url_from_parts(),
            db_echo=os.getenv("DB_ECHO", "false"),
            db_create_tables=os.getenv("DB_CREATE_TABLES", "true"),
            api_key=os.getenv("ORDERS_API_KEY", ""),
            scoped_api_keys={scope: key for scope, key in scoped.items() if key},
            orders_list_limit=os.getenv("ORDERS_LIST_LIMIT", "50"),
            order_rate_limit=os.getenv("ORDER_RATE_LIMIT", "30/minute"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            metrics_enabled=os.getenv("METRICS_ENABLED", "true"),
            tracing_enabled=os.getenv("TRACING_ENABLED", "false"),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT", "http://localhost:4317"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
