# classstore/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from classstore.api.deps import (
    get_auth_service,
    get_order_service,
    get_product_service,
    require_admin,
)
from classstore.api.errors import http_error
from classstore.domain.errors import AuthRequiredError, MarketplaceError
from classstore.domain.schemas import (
    AdminLoginIn,
    CancelIn,
    MessageOut,
    OrderOut,
    OrderStatusOut,
    ProductCreatedOut,
    ProductIn,
    ProductOut,
    ProductRejectIn,
    ProductStatusUpdate,
    ProductUpdate,
    StatsOut,
)
from classstore.services.auth_service import AuthService
from classstore.services.order_service import OrderService
from classstore.services.product_service import ProductService

router = APIRouter(prefix="/admin", tags=["admin"])


# =====================================================
# SESSION
# =====================================================
@router.post("/login", response_model=MessageOut)
def login(
    payload: AdminLoginIn,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
):
    admin = auth.authenticate(payload.username, payload.password)
    if not admin:
        raise http_error(AuthRequiredError("Invalid credentials"))

    request.session.clear()
    request.session["admin_id"] = admin.id
    return {"message": "Authentication successful"}


@router.post("/logout", response_model=MessageOut)
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}


# =====================================================
# ORDERS
# =====================================================
@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders()


@router.post("/orders/{order_id}/confirm", response_model=OrderStatusOut)
def confirm_order(
    order_id: str,
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        order = svc.confirm_order(order_id)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Order confirmed successfully", "order": order}


@router.post("/orders/{order_id}/deliver", response_model=OrderStatusOut)
def deliver_order(
    order_id: str,
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        order = svc.deliver_order(order_id)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Order marked as delivered", "order": order}


@router.post("/orders/{order_id}/cancel", response_model=OrderStatusOut)
def cancel_order(
    order_id: str,
    payload: CancelIn | None = None,
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        order = svc.cancel_by_admin(order_id, payload.reason if payload else None)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Order cancelled successfully", "order": order}


@router.get("/orders/{order_id}/invoice")
def download_invoice(
    order_id: str,
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        path = svc.get_invoice(order_id)
    except MarketplaceError as e:
        raise http_error(e)
    return FileResponse(
        path,
        media_type="application/pdf",
        filename=f"invoice-{order_id}.pdf",
    )


@router.get("/stats", response_model=StatsOut)
def stats(
    _: str = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_stats()


# =====================================================
# PRODUCTS (moderation)
# =====================================================
@router.get("/products", response_model=List[ProductOut])
def list_all_products(
    _: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    return svc.list_all_products()


@router.get("/products/pending", response_model=List[ProductOut])
def list_pending_products(
    _: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    return svc.list_pending_products()


@router.post("/products", response_model=ProductCreatedOut, status_code=201)
def add_product(
    payload: ProductIn,
    admin_id: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        product = svc.add_product(payload, admin_id)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Product added successfully", "product_id": product["id"]}


@router.post("/products/{product_id}/approve", response_model=ProductOut)
def approve_product(
    product_id: str,
    admin_id: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.approve_product(product_id, admin_id)
    except MarketplaceError as e:
        raise http_error(e)


@router.post("/products/{product_id}/reject", response_model=ProductOut)
def reject_product(
    product_id: str,
    payload: ProductRejectIn | None = None,
    admin_id: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.reject_product(product_id, admin_id, payload.reason if payload else None)
    except MarketplaceError as e:
        raise http_error(e)


@router.patch("/products/{product_id}/status", response_model=ProductOut)
def update_product_status(
    product_id: str,
    payload: ProductStatusUpdate,
    _: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product_status(product_id, payload.is_active, payload.is_sold_out)
    except MarketplaceError as e:
        raise http_error(e)


@router.patch("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    _: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product_details(product_id, payload)
    except MarketplaceError as e:
        raise http_error(e)


@router.delete("/products/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: str,
    _: str = Depends(require_admin),
    svc: ProductService = Depends(get_product_service),
):
    try:
        svc.delete_product(product_id)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Product deleted successfully"}
