from datetime import datetime

from pydantic import BaseModel


class OrderCreate(BaseModel):
    name: str = ""
    email: str = ""
    product: str = ""
    phone: str = ""
    comment: str = ""

    class Config:
        str_strip_whitespace = True


class OrderCreated(BaseModel):
    success: bool = True
    id: int


class OrderSummary(BaseModel):
    id: int
    name: str
    email: str
    product: str
    phone: str
    comment: str
    created_at: datetime | None

    class Config:
        from_attributes = True


class OrderList(BaseModel):
    success: bool = True
    orders: list[OrderSummary] = []


class ActionResult(BaseModel):
    success: bool = True
