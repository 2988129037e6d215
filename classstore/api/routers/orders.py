# classstore/api/routers/orders.py
from fastapi import APIRouter, Depends

from classstore.api.deps import get_order_service
from classstore.api.errors import http_error
from classstore.domain.errors import MarketplaceError
from classstore.domain.schemas import OrderCreate, OrderCreatedOut
from classstore.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreatedOut, status_code=201)
def create_order(
    payload: OrderCreate,
    svc: OrderService = Depends(get_order_service),
):
    """
    Places an order. The stored amount is always the product's current price;
    a different submitted amount is rejected.
    """
    try:
        order = svc.create_order(payload)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Order placed successfully", "order_id": order["id"]}
