import enum

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from shared.config.database import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSED = "processed" # terminal, reached only from pending


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    product = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=False, default="")
    comment = Column(Text, nullable=False, default="")
    status = Column(
        String(16),
        nullable=False,
        index=True,
        default=OrderStatus.PENDING.value,
        server_default=OrderStatus.PENDING.value,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
