from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

import structlog

logger = structlog.get_logger(__name__)


# ===================== DISCOUNT POLICY =====================

EXTRA_DISCOUNT_THRESHOLD = Decimal("5000000")
EXTRA_DISCOUNT_RATE = Decimal("0.05")
MAX_DISCOUNT_RATE = Decimal("0.30")

CENT = Decimal("0.01")


class OrderPricing(NamedTuple):
    total_amount: Decimal
    discount_rate: Decimal
    discount_amount: Decimal
    final_amount: Decimal


def round_currency(amount: Decimal) -> Decimal:
    """Round half-up to two decimals: 10.005 -> 10.01"""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_discount_rate(total_amount: Decimal, tier_rate: Decimal) -> Decimal:
    """
    Order-level discount rate.

    Business rules:
    - Start from the customer's membership tier rate.
    - Orders strictly above 5,000,000 get an extra 5%.
    - The combined rate never exceeds 30%.
    """
    rate = Decimal(tier_rate)

    if total_amount > EXTRA_DISCOUNT_THRESHOLD:
        rate = rate + EXTRA_DISCOUNT_RATE
        logger.debug(
            "extra_discount_applied",
            total_amount=str(total_amount),
            threshold=str(EXTRA_DISCOUNT_THRESHOLD),
        )

    if rate > MAX_DISCOUNT_RATE:
        logger.debug("discount_rate_capped", requested=str(rate), cap=str(MAX_DISCOUNT_RATE))
        rate = MAX_DISCOUNT_RATE

    return rate


def calculate_order_pricing(total_amount: Decimal, tier_rate: Decimal) -> OrderPricing:
    total_amount = Decimal(total_amount)
    rate = calculate_discount_rate(total_amount, tier_rate)

    discount_amount = round_currency(total_amount * rate)
    final_amount = round_currency(total_amount - discount_amount)

    return OrderPricing(
        total_amount=total_amount,
        discount_rate=rate,
        discount_amount=discount_amount,
        final_amount=final_amount,
    )
