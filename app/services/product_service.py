from decimal import Decimal
import math
from typing import List, Tuple

import structlog
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import BusinessRuleError, DuplicateResourceError, ResourceNotFoundError
from app.database.transaction import run_in_transaction
from app.enums.order_status import OrderStatus
from app.enums.product_category import ProductCategory
from app.models.product import Product
from app.repositories import product_store
from app.schemas.product import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

FOOD_MAX_PRICE = Decimal("1000000")


def _check_food_price(category: ProductCategory, price: Decimal) -> None:
    if category == ProductCategory.FOOD and price > FOOD_MAX_PRICE:
        logger.warning("food_price_exceeded", price=str(price), limit=str(FOOD_MAX_PRICE))
        raise BusinessRuleError("product.food.price.exceeded")


# --------------------------
# GET PRODUCT
# --------------------------
def get_product(db: Session, product_id: int) -> Product:
    product = product_store.find_by_id(db, product_id)
    if product is None:
        logger.warning("product_not_found", product_id=product_id)
        raise ResourceNotFoundError("product.not.found", product_id)
    return product

# --------------------------
# CREATE PRODUCT
# --------------------------
def create_product(db: Session, data: ProductCreate) -> Product:
    def work() -> Product:
        if product_store.exists_by_name(db, data.name):
            logger.warning("duplicate_product_name", name=data.name)
            raise DuplicateResourceError("product.name.duplicate", data.name)

        _check_food_price(data.category, data.price)

        product = Product(
            name=data.name,
            category=data.category,
            price=data.price,
            stock=data.stock,
            active=True,
        )
        return product_store.save(db, product)

    product = run_in_transaction(db, work, operation="create_product", retries=0)
    logger.info(
        "product_created",
        product_id=product.id,
        name=product.name,
        category=product.category.value,
        stock=product.stock,
    )
    return product

# --------------------------
# LIST PRODUCTS
# --------------------------
def list_products(db: Session, page: int = 0, size: int = None) -> Tuple[List[Product], int, int, int]:
    """
    Active products only, ordered by id.
    Returns (items, page, size, total); page is 0-based.
    """
    if page < 0:
        page = 0
    if size is None:
        size = settings.PRODUCT_PAGE_SIZE
    if size < 1:
        size = 1
    if size > settings.MAX_PAGE_SIZE:
        size = settings.MAX_PAGE_SIZE

    items, total = product_store.list_active(db, offset=page * size, limit=size)
    logger.debug("products_listed", page=page, size=size, returned=len(items), total=total)
    return items, page, size, total


def total_pages(total: int, size: int) -> int:
    return math.ceil(total / size) if size > 0 else 0

# --------------------------
# UPDATE PRODUCT
# --------------------------
def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    def work() -> Product:
        product = product_store.find_by_id(db, product_id, for_update=True)
        if product is None:
            logger.warning("product_not_found", product_id=product_id)
            raise ResourceNotFoundError("product.not.found", product_id)

        if product_store.exists_by_name(db, data.name, exclude_id=product_id):
            logger.warning("duplicate_product_name", name=data.name, product_id=product_id)
            raise DuplicateResourceError("product.name.duplicate", data.name)

        _check_food_price(data.category, data.price)

        if Decimal(data.price) != Decimal(product.price):
            # price-at-purchase of paid orders must stay consistent with the catalog
            if product_store.has_orders_with_status(db, product_id, OrderStatus.PAID):
                logger.warning("price_change_blocked", product_id=product_id)
                raise BusinessRuleError("product.price.update.completed.orders")

        if product.active and not data.active:
            if product_store.has_orders_with_status(db, product_id, OrderStatus.CREATED):
                logger.warning("deactivation_blocked", product_id=product_id)
                raise BusinessRuleError("product.deactivate.pending.orders")

        product.name = data.name
        product.category = data.category
        product.price = data.price
        product.stock = data.stock
        product.active = data.active
        return product_store.save(db, product)

    product = run_in_transaction(db, work, operation="update_product", retries=0)
    logger.info(
        "product_updated",
        product_id=product.id,
        name=product.name,
        price=str(product.price),
        active=product.active,
    )
    return product

# --------------------------
# DELETE PRODUCT (soft)
# --------------------------
def delete_product(db: Session, product_id: int) -> Product:
    def work() -> Product:
        product = product_store.find_by_id(db, product_id, for_update=True)
        if product is None:
            logger.warning("product_not_found", product_id=product_id)
            raise ResourceNotFoundError("product.not.found", product_id)

        if product.stock != 0:
            logger.warning("delete_blocked_stock", product_id=product_id, stock=product.stock)
            raise BusinessRuleError("product.delete.stock.not.zero", product.stock)

        product.active = False
        return product_store.save(db, product)

    product = run_in_transaction(db, work, operation="delete_product", retries=0)
    logger.info("product_soft_deleted", product_id=product.id)
    return product
