from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.messages import resolve_message
from app.database.connection import get_db
from app.dependencies.locale import get_locale
from app.schemas.api_response import ApiResponse
from app.schemas.product import ProductCreate, ProductPage, ProductResponse, ProductUpdate
from app.services.product_service import (
    create_product, get_product, list_products,
    update_product, delete_product, total_pages,
)


router = APIRouter(prefix="/products", tags=["Products"])

# CREATE
@router.post(
    "/",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create(data: ProductCreate, db: Session = Depends(get_db), locale: str = Depends(get_locale)):
    product = create_product(db, data)
    return ApiResponse.ok(
        resolve_message("product.created.success", locale=locale),
        ProductResponse.model_validate(product),
    )

# LIST (active only, 0-based pages)
@router.get("/", response_model=ApiResponse[ProductPage], response_model_exclude_none=True)
def list_all(
    page: int = Query(0, ge=0),
    size: int = Query(None, ge=1),
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    items, page, size, total = list_products(db, page=page, size=size)
    payload = ProductPage(
        items=[ProductResponse.model_validate(p) for p in items],
        page=page,
        size=size,
        total=total,
        total_pages=total_pages(total, size),
    )
    return ApiResponse.ok(resolve_message("api.response.success", locale=locale), payload)

# GET BY ID
@router.get("/{product_id}", response_model=ApiResponse[ProductResponse], response_model_exclude_none=True)
def get(product_id: int, db: Session = Depends(get_db), locale: str = Depends(get_locale)):
    product = get_product(db, product_id)
    return ApiResponse.ok(
        resolve_message("api.response.success", locale=locale),
        ProductResponse.model_validate(product),
    )

# UPDATE
@router.put("/{product_id}", response_model=ApiResponse[ProductResponse], response_model_exclude_none=True)
def update(
    product_id: int,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    product = update_product(db, product_id, data)
    return ApiResponse.ok(
        resolve_message("product.updated.success", locale=locale),
        ProductResponse.model_validate(product),
    )

# DELETE (soft, stock must be zero)
@router.delete("/{product_id}", response_model=ApiResponse[ProductResponse], response_model_exclude_none=True)
def delete(product_id: int, db: Session = Depends(get_db), locale: str = Depends(get_locale)):
    product = delete_product(db, product_id)
    return ApiResponse.ok(
        resolve_message("product.deleted.success", locale=locale),
        ProductResponse.model_validate(product),
    )
