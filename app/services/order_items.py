from typing import Dict, Iterable, Tuple

import structlog

logger = structlog.get_logger(__name__)


def consolidate_items(requests: Iterable[Tuple[int, int]]) -> Dict[int, int]:
    """
    Merge repeated products into one quantity each.

    Keys keep the order in which each product first appeared:
    [(7, 3), (2, 1), (7, 2)] -> {7: 5, 2: 1}
    """
    merged: Dict[int, int] = {}
    count = 0
    for product_id, quantity in requests:
        merged[product_id] = merged.get(product_id, 0) + quantity
        count += 1

    logger.debug("order_items_consolidated", requested=count, unique=len(merged))
    return merged
