# classstore/data/models/product.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, Boolean
from datetime import datetime, timezone

from classstore.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    class_num = Column("class", Integer, nullable=False)
    section = Column(String, nullable=False)
    image_url = Column(String, nullable=True)

    seller_id = Column(String, nullable=True, index=True)
    seller_name = Column(String, nullable=False)
    seller_phone = Column(String, nullable=False)
    seller_email = Column(String, nullable=True)

    likes = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_sold_out = Column(Boolean, nullable=False, default=False)
    category = Column(String, nullable=False, default="General")
    condition = Column(String, nullable=False, default="Good")

    approval_status = Column(String, nullable=False, default="pending")  # pending, approved, rejected
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(String, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
