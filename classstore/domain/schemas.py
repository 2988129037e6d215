from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """JSON uses camelCase keys; snake_case is accepted on input as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageOut(CamelModel):
    message: str


# =====================================================
# PRODUCTS
# =====================================================
class ProductIn(CamelModel):
    """Schema for a seller submission / admin listing."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: str = Field(..., description="Price as a string, e.g. 45.00")
    class_num: int = Field(..., alias="class")
    section: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    seller_id: Optional[str] = None
    seller_name: str = Field(..., min_length=1)
    seller_phone: str = Field(..., min_length=1)
    seller_email: Optional[str] = None
    category: Optional[str] = None
    condition: Optional[str] = None


class ProductUpdate(CamelModel):
    """Partial update of product details (admin)."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    class_num: Optional[int] = Field(None, alias="class")
    section: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    condition: Optional[str] = None


class ProductStatusUpdate(CamelModel):
    is_active: Optional[bool] = None
    is_sold_out: Optional[bool] = None


class ProductRejectIn(CamelModel):
    reason: Optional[str] = None


class ProductOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: str
    class_num: int = Field(..., alias="class")
    section: str
    image_url: Optional[str] = None
    seller_id: Optional[str] = None
    seller_name: str
    seller_phone: str
    seller_email: Optional[str] = None
    likes: int
    is_active: bool
    is_sold_out: bool
    category: str
    condition: str
    approval_status: str
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime


class ProductCreatedOut(CamelModel):
    message: str
    product_id: str


class LikesOut(CamelModel):
    likes: int


# =====================================================
# ORDERS
# =====================================================
class OrderCreate(CamelModel):
    """
    Raw purchase submission. Field rules (class range, email, phone,
    pickup fields, amount format) are enforced by OrderValidator so they
    map onto the service error taxonomy.
    """

    product_id: str = Field(..., min_length=1)
    buyer_name: str = ""
    buyer_class: Optional[int | str] = None
    buyer_section: str = ""
    buyer_email: str = ""
    buyer_phone: str = ""
    buyer_id: Optional[str] = None
    pickup_location: str = ""
    pickup_time: str = ""
    additional_notes: Optional[str] = None
    amount: Optional[str] = None


class OrderCreatedOut(CamelModel):
    message: str
    order_id: str


class CancelIn(CamelModel):
    reason: Optional[str] = None


class OrderOut(CamelModel):
    id: str
    product_id: str
    buyer_name: str
    buyer_class: int
    buyer_section: str
    buyer_email: str
    buyer_phone: str
    buyer_id: Optional[str] = None
    pickup_location: str
    pickup_time: str
    additional_notes: Optional[str] = None
    amount: str
    status: str
    cancelled_by: Optional[str] = None
    cancellation_reason: Optional[str] = None
    delivery_confirmed_at: Optional[datetime] = None
    invoice_generated: bool
    created_at: datetime
    updated_at: datetime
    product: Optional[ProductOut] = None


class OrderStatusOut(CamelModel):
    message: str
    order: OrderOut


# =====================================================
# ADMIN
# =====================================================
class AdminLoginIn(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TopProductOut(CamelModel):
    name: str
    sales: int


class ActivityOut(CamelModel):
    action: str
    time: datetime
    user: str


class StatsOut(CamelModel):
    total_orders: int
    pending_orders: int
    revenue: str
    active_products: int
    total_users: int
    daily_revenue: str
    weekly_growth: float
    conversion_rate: float
    average_order_value: str
    top_selling_products: List[TopProductOut]
    recent_activity: List[ActivityOut]
