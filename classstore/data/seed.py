# classstore/data/seed.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from classstore.data.models.product import ProductModel
from classstore.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    # name, description, price, class, section, seller, phone, email, likes, category, condition, active, sold out
    ("Advanced Mathematics Textbook", "Grade 10 mathematics textbook in excellent condition",
     "45.00", 10, "A", "Sarah Wilson", "+1234567890", "sarah.wilson@school.edu", 15, "Textbooks", "Excellent", True, False),
    ("Complete Stationery Set", "Brand new stationery set with pens, pencils, ruler, and notebooks",
     "25.00", 8, "B", "Mike Johnson", "+1234567891", "mike.johnson@school.edu", 8, "Stationery", "New", True, False),
    ("Scientific Calculator TI-84", "Barely used TI-84 calculator perfect for advanced mathematics",
     "120.00", 11, "C", "Emma Davis", "+1234567892", "emma.davis@school.edu", 23, "Electronics", "Like New", True, False),
    ("Chemistry Lab Kit", "Complete chemistry lab equipment set",
     "85.00", 12, "A", "Alex Chen", "+1234567893", "alex.chen@school.edu", 12, "Lab Equipment", "Good", True, False),
    ("Old Physics Textbook (SOLD)", "Physics textbook - already sold to another student",
     "35.00", 11, "B", "John Smith", "+1234567894", "john.smith@school.edu", 5, "Textbooks", "Good", False, True),
]


def seed_demo_products(product_store):
    """Adds the demo catalogue, only if the store is empty."""
    if product_store.list_products():
        return 0

    now = datetime.now(timezone.utc)
    for i, row in enumerate(DEMO_PRODUCTS, start=1):
        (name, description, price, class_num, section, seller, phone, email,
         likes, category, condition, active, sold_out) = row
        product_store.create_product(ProductModel(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            price=Decimal(price),
            class_num=class_num,
            section=section,
            image_url=None,
            seller_id=f"seller_{i:03d}",
            seller_name=seller,
            seller_phone=phone,
            seller_email=email,
            likes=likes,
            is_active=active,
            is_sold_out=sold_out,
            category=category,
            condition=condition,
            approval_status="approved",
            approved_at=now,
            approved_by="seed",
            rejection_reason=None,
            created_at=now,
        ))

    logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)
