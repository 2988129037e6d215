"""
Shared fixtures for the ClassStore test suite.

Settings are read from the environment at import time, so the environment
is prepared here before anything from classstore is imported.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["RATE_LIMIT_PER_MINUTE"] = "0"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["BREVO_API_KEY"] = ""
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["INVOICES_DIR"] = tempfile.mkdtemp(prefix="classstore-invoices-")

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import classstore.data.models  # noqa: F401
from classstore.api.deps import get_invoice_service, get_notification_service
from classstore.data.database import Base, SessionLocal, engine
from classstore.data.models.order import OrderModel
from classstore.data.models.product import ProductModel
from classstore.domain.errors import DownstreamError
from classstore.domain.schemas import OrderCreate
from classstore.main import app
from classstore.repos.memory import MemoryStore, InMemoryOrderRepo, InMemoryProductRepo
from classstore.services.invoice_service import InvoiceService
from classstore.services.order_service import OrderService

ADMIN_CREDENTIALS = {"username": "admin", "password": "s3cret-pass"}


# ============================================================================
# Fakes
# ============================================================================


class RecordingNotifier:
    """Stands in for NotificationService; can be told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.created = []
        self.cancelled = []

    def notify_order_created(self, order, product):
        if self.fail:
            raise DownstreamError("smtp down")
        self.created.append((order, product))

    def notify_order_cancelled(self, order, product, reason):
        if self.fail:
            raise DownstreamError("smtp down")
        self.cancelled.append((order, product, reason))


class RecordingInvoices(InvoiceService):
    """Real InvoiceService that counts renders; optionally fails."""

    def __init__(self, invoices_dir, fail: bool = False):
        super().__init__(invoices_dir)
        self.fail = fail
        self.renders = 0

    def _render(self, path, order_id, product, order):
        if self.fail:
            raise OSError("disk full")
        self.renders += 1
        super()._render(path, order_id, product, order)


# ============================================================================
# Builders
# ============================================================================


def build_product(**overrides) -> ProductModel:
    data = dict(
        id=str(uuid.uuid4()),
        name="Advanced Mathematics Textbook",
        description="Grade 10 textbook",
        price=Decimal("45.00"),
        class_num=10,
        section="A",
        image_url=None,
        seller_id="seller_001",
        seller_name="Sarah Wilson",
        seller_phone="+1234567890",
        seller_email="sarah.wilson@school.edu",
        likes=0,
        is_active=True,
        is_sold_out=False,
        category="Textbooks",
        condition="Good",
        approval_status="approved",
        approved_at=None,
        approved_by=None,
        rejection_reason=None,
        created_at=datetime.now(timezone.utc),
    )
    data.update(overrides)
    return ProductModel(**data)


def order_payload(product_id: str, **overrides) -> dict:
    data = {
        "productId": product_id,
        "buyerName": "Ravi Kumar",
        "buyerClass": "9",
        "buyerSection": "B",
        "buyerEmail": "ravi.kumar@school.edu",
        "buyerPhone": "9876543210",
        "buyerId": "customer_abc123",
        "pickupLocation": "School Main Gate",
        "pickupTime": "Monday 3pm",
        "additionalNotes": "",
        "amount": "45.00",
    }
    data.update(overrides)
    return data


def order_submission(product_id: str, **overrides) -> OrderCreate:
    return OrderCreate.model_validate(order_payload(product_id, **overrides))


# ============================================================================
# In-memory stores / services
# ============================================================================


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def product_store(store):
    return InMemoryProductRepo(store)


@pytest.fixture
def order_store(store):
    return InMemoryOrderRepo(store)


@pytest.fixture
def product(product_store):
    return product_store.create_product(build_product())


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def invoices(tmp_path):
    return RecordingInvoices(str(tmp_path / "invoices"))


@pytest.fixture
def order_service(order_store, product_store, notifier, invoices):
    return OrderService(order_store, product_store, notifier, invoices)


# ============================================================================
# SQL / HTTP
# ============================================================================


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db, notifier, invoices):
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_invoice_service] = lambda: invoices
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    resp = client.post("/admin/login", json=ADMIN_CREDENTIALS)
    assert resp.status_code == 200
    return client


@pytest.fixture
def sql_product(db):
    product = build_product()
    db.add(product)
    db.commit()
    return product


@pytest.fixture
def sql_order(db, sql_product):
    now = datetime.now(timezone.utc)
    order = OrderModel(
        id=str(uuid.uuid4()),
        product_id=sql_product.id,
        buyer_name="Ravi Kumar",
        buyer_class=9,
        buyer_section="B",
        buyer_email="ravi.kumar@school.edu",
        buyer_phone="9876543210",
        buyer_id="customer_abc123",
        pickup_location="School Main Gate",
        pickup_time="Monday 3pm",
        additional_notes=None,
        amount=Decimal("45.00"),
        status="pending",
        invoice_generated=False,
        created_at=now,
        updated_at=now,
    )
    db.add(order)
    db.commit()
    return order
