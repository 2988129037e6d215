# classstore/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from classstore.api.errors import http_error
from classstore.data.database import get_db
from classstore.domain.errors import AuthRequiredError
from classstore.repos.admin_repo import AdminRepo
from classstore.repos.memory import (
    memory_store,
    InMemoryAdminRepo,
    InMemoryOrderRepo,
    InMemoryProductRepo,
)
from classstore.repos.order_repo import OrderRepo
from classstore.repos.product_repo import ProductRepo
from classstore.services.auth_service import AuthService
from classstore.services.invoice_service import InvoiceService
from classstore.services.notification_service import NotificationService
from classstore.services.order_service import OrderService
from classstore.services.product_service import ProductService
from classstore.utils import settings


def _use_memory() -> bool:
    return settings.STORAGE_BACKEND == "memory"


def get_product_store(db: Session = Depends(get_db)):
    return InMemoryProductRepo(memory_store) if _use_memory() else ProductRepo(db)


def get_order_store(db: Session = Depends(get_db)):
    return InMemoryOrderRepo(memory_store) if _use_memory() else OrderRepo(db)


def get_admin_store(db: Session = Depends(get_db)):
    return InMemoryAdminRepo(memory_store) if _use_memory() else AdminRepo(db)


def get_notification_service():
    return NotificationService()


def get_invoice_service():
    return InvoiceService()


def get_order_service(
    order_store=Depends(get_order_store),
    product_store=Depends(get_product_store),
    notification_service=Depends(get_notification_service),
    invoice_service=Depends(get_invoice_service),
):
    return OrderService(
        order_store=order_store,
        product_store=product_store,
        notification_service=notification_service,
        invoice_service=invoice_service,
    )


def get_product_service(
    product_store=Depends(get_product_store),
    order_store=Depends(get_order_store),
):
    return ProductService(product_store, order_store)


def get_auth_service(admin_store=Depends(get_admin_store)):
    return AuthService(admin_store)


def require_admin(request: Request, auth: AuthService = Depends(get_auth_service)) -> str:
    """Returns the logged-in admin id, 401 otherwise."""
    admin_id = request.session.get("admin_id")
    if not admin_id or not auth.get_admin(admin_id):
        request.session.clear()
        raise http_error(AuthRequiredError("Admin authentication required"))
    return admin_id
