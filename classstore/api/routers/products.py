# classstore/api/routers/products.py
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from classstore.api.deps import get_product_service
from classstore.api.errors import http_error
from classstore.domain.errors import MarketplaceError
from classstore.domain.schemas import LikesOut, ProductOut
from classstore.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    class_filter: Optional[int] = Query(None, alias="class", ge=6, le=12),
    sort: Literal["newest", "price-low", "price-high", "popular"] = Query("popular"),
    svc: ProductService = Depends(get_product_service),
):
    return svc.list_products(class_filter=class_filter, sort=sort)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.get_product(product_id)
    except MarketplaceError as e:
        raise http_error(e)


@router.post("/{product_id}/like", response_model=LikesOut)
def like_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        return {"likes": svc.like_product(product_id)}
    except MarketplaceError as e:
        raise http_error(e)
