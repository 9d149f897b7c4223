from fastapi import APIRouter, Depends, Form, Request
from slowapi import Limiter
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import verify_list_key, verify_update_key
from .schemas import ActionResult, OrderCreate, OrderCreated, OrderList
from .service import OrderService, parse_order_id

router = APIRouter(prefix="/api")
public_router = APIRouter()

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}

# --- PUBLIC INTAKE (form post from the storefront) ---
async def insert_order(
    request: Request,                          # REQUIRED: slowapi keys the limit on the client IP
    name: str = Form(""),
    email: str = Form(""),
    product: str = Form(""),
    phone: str = Form(""),
    comment: str = Form(""),
    db: AsyncSession = Depends(get_db)
):
    data = OrderCreate(name=name, email=email, product=product, phone=phone, comment=comment)
    order = await OrderService.create_order(db, data)
    return OrderCreated(id=order.id)

def build_intake_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """Intake route rate limited by the given app's own limiter."""
    intake_router = APIRouter()
    intake_router.add_api_route(
        "/insert_order",
        limiter.limit(rate_limit)(insert_order),
        methods=["POST"],
        response_model=OrderCreated,
    )
    return intake_router

# --- REVIEW ENDPOINTS (shared-secret protected) ---
@router.get("/get_orders", response_model=OrderList, dependencies=[Depends(verify_list_key)])
async def get_orders(request: Request, db: AsyncSession = Depends(get_db)):
    limit = request.app.state.settings.orders_list_limit
    return OrderList(orders=await OrderService.list_pending(db, limit))

@router.post("/mark_processed", response_model=ActionResult, dependencies=[Depends(verify_update_key)])
async def mark_processed(
    order_id: str = Form("", alias="id"),
    db: AsyncSession = Depends(get_db)
):
    await OrderService.mark_processed(db, parse_order_id(order_id))
    return ActionResult()
