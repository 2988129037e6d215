# classstore/api/routers/customers.py
from typing import List

from fastapi import APIRouter, Depends

from classstore.api.deps import get_order_service
from classstore.api.errors import http_error
from classstore.domain.errors import MarketplaceError
from classstore.domain.schemas import CancelIn, OrderOut, OrderStatusOut
from classstore.services.order_service import OrderService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/{buyer_id}/orders", response_model=List[OrderOut])
def list_customer_orders(
    buyer_id: str,
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_buyer_orders(buyer_id)


@router.post("/orders/{order_id}/cancel", response_model=OrderStatusOut)
def cancel_order(
    order_id: str,
    payload: CancelIn,
    svc: OrderService = Depends(get_order_service),
):
    try:
        order = svc.cancel_by_buyer(order_id, payload.reason)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Order cancelled successfully", "order": order}
