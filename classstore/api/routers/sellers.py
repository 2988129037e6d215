from typing import List

from fastapi import APIRouter, Depends

from classstore.api.deps import get_product_service
from classstore.api.errors import http_error
from classstore.domain.errors import MarketplaceError
from classstore.domain.schemas import ProductCreatedOut, ProductIn, ProductOut
from classstore.services.product_service import ProductService

router = APIRouter(prefix="/sellers", tags=["sellers"])


@router.post("/products", response_model=ProductCreatedOut, status_code=201)
def submit_product(payload: ProductIn, svc: ProductService = Depends(get_product_service)):
    """Seller listing, hidden from the storefront until an admin approves it."""
    try:
        product = svc.submit_product(payload)
    except MarketplaceError as e:
        raise http_error(e)
    return {"message": "Product submitted for approval", "product_id": product["id"]}


@router.get("/{seller_id}/products", response_model=List[ProductOut])
def list_seller_products(seller_id: str, svc: ProductService = Depends(get_product_service)):
    return svc.list_seller_products(seller_id)
