from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, Numeric, Boolean
from datetime import datetime, timezone

from classstore.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)

    buyer_name = Column(String, nullable=False)
    buyer_class = Column(Integer, nullable=False)
    buyer_section = Column(String, nullable=False)
    buyer_email = Column(String, nullable=False)
    buyer_phone = Column(String, nullable=False)
    buyer_id = Column(String, nullable=True, index=True)

    pickup_location = Column(String, nullable=False)
    pickup_time = Column(String, nullable=False)
    additional_notes = Column(Text, nullable=True)

    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, confirmed, delivered, cancelled
    cancelled_by = Column(String, nullable=True)  # buyer, admin
    cancellation_reason = Column(Text, nullable=True)
    delivery_confirmed_at = Column(DateTime(timezone=True), nullable=True)
    invoice_generated = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
