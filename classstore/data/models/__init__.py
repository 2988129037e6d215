#import all models so SQLAlchemy registers them in Base.metadata

from classstore.data.models.product import ProductModel
from classstore.data.models.order import OrderModel
from classstore.data.models.admin import AdminModel

__all__ = ["ProductModel", "OrderModel", "AdminModel"]
