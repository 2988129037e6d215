from typing import List, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from classstore.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(
        self,
        active_only: bool = False,
        approval_status: Optional[str] = None,
        class_num: Optional[int] = None,
        seller_id: Optional[str] = None,
    ) -> List[ProductModel]:
        stmt = select(ProductModel)
        if active_only:
            stmt = stmt.where(ProductModel.is_active.is_(True))
        if approval_status:
            stmt = stmt.where(ProductModel.approval_status == approval_status)
        if class_num is not None:
            stmt = stmt.where(ProductModel.class_num == class_num)
        if seller_id:
            stmt = stmt.where(ProductModel.seller_id == seller_id)
        return list(self.db.execute(stmt.order_by(ProductModel.created_at)).scalars().all())

    def update_product(self, product_id: str, new_data: dict) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(**new_data)
        )
        self.db.commit()
        return result.rowcount

    def increment_likes(self, product_id: str) -> int | None:
        # UPDATE ... SET likes = likes + 1, no read-modify-write in python
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(likes=ProductModel.likes + 1)
        )
        self.db.commit()
        if result.rowcount == 0:
            return None
        product = self.get_product(product_id)
        self.db.refresh(product)
        return product.likes

    def delete_product(self, product_id: str) -> int:
        result = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.db.commit()
        return result.rowcount
