from decimal import Decimal
from enum import Enum

class MembershipTier(str, Enum):
    REGULAR = "REGULAR"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"

    @property
    def discount_rate(self) -> Decimal:
        return TIER_DISCOUNT_RATES[self]

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)


# lowest to highest discount
TIER_ORDER = (MembershipTier.REGULAR, MembershipTier.GOLD, MembershipTier.PLATINUM)

TIER_DISCOUNT_RATES = {
    MembershipTier.REGULAR: Decimal("0.00"),
    MembershipTier.GOLD: Decimal("0.10"),
    MembershipTier.PLATINUM: Decimal("0.20"),
}
