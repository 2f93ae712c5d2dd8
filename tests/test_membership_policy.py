from decimal import Decimal

import pytest

from app.enums.membership_tiers import MembershipTier
from app.models.customer import Customer
from app.services.membership_policy import apply_payment, higher_tier, tier_for


def _customer(tier=MembershipTier.REGULAR, total_spent="0.00"):
    return Customer(
        name="Policy Customer",
        email="policy@example.com",
        membership_tier=tier,
        total_spent=Decimal(total_spent),
    )


@pytest.mark.parametrize(
    "spent, expected",
    [
        ("0", MembershipTier.REGULAR),
        ("9999999.99", MembershipTier.REGULAR),
        ("10000000", MembershipTier.GOLD),
        ("49999999.99", MembershipTier.GOLD),
        ("50000000", MembershipTier.PLATINUM),
        ("75000000", MembershipTier.PLATINUM),
    ],
)
def test_tier_for_thresholds(spent, expected):
    assert tier_for(Decimal(spent)) == expected


def test_tier_discount_rates():
    assert MembershipTier.REGULAR.discount_rate == Decimal("0.00")
    assert MembershipTier.GOLD.discount_rate == Decimal("0.10")
    assert MembershipTier.PLATINUM.discount_rate == Decimal("0.20")


def test_higher_tier_keeps_the_better_one():
    assert higher_tier(MembershipTier.GOLD, MembershipTier.REGULAR) == MembershipTier.GOLD
    assert higher_tier(MembershipTier.GOLD, MembershipTier.PLATINUM) == MembershipTier.PLATINUM


def test_apply_payment_accumulates_spend():
    customer = _customer(total_spent="1000.00")

    apply_payment(customer, Decimal("250.50"))

    assert customer.total_spent == Decimal("1250.50")
    assert customer.membership_tier == MembershipTier.REGULAR


def test_apply_payment_upgrades_when_threshold_crossed():
    customer = _customer(total_spent="9000000.00")

    apply_payment(customer, Decimal("1000000.00"))

    assert customer.membership_tier == MembershipTier.GOLD


def test_apply_payment_can_skip_straight_to_platinum():
    customer = _customer()

    apply_payment(customer, Decimal("60000000.00"))

    assert customer.membership_tier == MembershipTier.PLATINUM


def test_apply_payment_never_downgrades():
    customer = _customer(tier=MembershipTier.PLATINUM, total_spent="0.00")

    apply_payment(customer, Decimal("100.00"))

    assert customer.membership_tier == MembershipTier.PLATINUM
    assert customer.total_spent == Decimal("100.00")
