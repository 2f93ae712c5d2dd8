import structlog

from app.core.exceptions import InsufficientStockError, ProductInactiveError
from app.models.product import Product

logger = structlog.get_logger(__name__)


def reserve(product: Product, quantity: int) -> Product:
    """
    Debit `quantity` units from the product's stock.

    Raises ProductInactiveError for a soft-deleted product and
    InsufficientStockError when stock cannot cover the request; in both cases
    the product is left untouched.
    """
    if not product.active:
        logger.warning("reserve_inactive_product", product_id=product.id, name=product.name)
        raise ProductInactiveError(product.id, product.name)

    available = int(product.stock or 0)
    if available < quantity:
        logger.warning(
            "reserve_insufficient_stock",
            product_id=product.id,
            available=available,
            requested=quantity,
        )
        raise InsufficientStockError(product.name, available, quantity)

    product.stock = available - quantity
    logger.debug("stock_reserved", product_id=product.id, quantity=quantity, stock=product.stock)
    return product


def release(product: Product, quantity: int) -> Product:
    """Credit back units from an earlier reservation."""
    product.stock = int(product.stock or 0) + quantity
    logger.debug("stock_released", product_id=product.id, quantity=quantity, stock=product.stock)
    return product
