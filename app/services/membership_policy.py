from decimal import Decimal

import structlog

from app.enums.membership_tiers import MembershipTier
from app.models.customer import Customer

logger = structlog.get_logger(__name__)

GOLD_THRESHOLD = Decimal("10000000")
PLATINUM_THRESHOLD = Decimal("50000000")


def tier_for(total_spent: Decimal) -> MembershipTier:
    """
    Tier implied by cumulative spend:
    - total_spent >= 50,000,000 -> PLATINUM
    - total_spent >= 10,000,000 -> GOLD
    - otherwise                 -> REGULAR
    """
    if total_spent >= PLATINUM_THRESHOLD:
        return MembershipTier.PLATINUM
    if total_spent >= GOLD_THRESHOLD:
        return MembershipTier.GOLD
    return MembershipTier.REGULAR


def higher_tier(current: MembershipTier, candidate: MembershipTier) -> MembershipTier:
    return candidate if candidate.rank > current.rank else current


def apply_payment(customer: Customer, amount: Decimal) -> Customer:
    """Accrue a settled payment and upgrade the tier if earned. Never downgrades."""
    previous_tier = MembershipTier(customer.membership_tier)
    customer.total_spent = Decimal(customer.total_spent or 0) + Decimal(amount)
    customer.membership_tier = higher_tier(previous_tier, tier_for(customer.total_spent))

    if customer.membership_tier != previous_tier:
        logger.info(
            "membership_upgraded",
            customer_id=customer.id,
            previous_tier=previous_tier.value,
            new_tier=customer.membership_tier.value,
            total_spent=str(customer.total_spent),
        )
    return customer
