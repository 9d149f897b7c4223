from .setup import setup_observability
from .metrics import (
    orders_created_total,
    orders_processed_total,
    orders_auth_failures_total,
    orders_storage_failures_total
)
