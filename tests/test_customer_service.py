from decimal import Decimal

import pytest

from app.core.exceptions import DuplicateResourceError, ResourceNotFoundError
from app.enums.membership_tiers import MembershipTier
from app.schemas.customer import CustomerCreate
from app.services.customer_service import create_customer, get_customer


def test_new_customer_starts_regular_with_zero_spend(db):
    customer = create_customer(db, CustomerCreate(name="Budi", email="budi@example.com"))

    fetched = get_customer(db, customer.id)
    assert fetched.membership_tier == MembershipTier.REGULAR
    assert fetched.total_spent == Decimal("0.00")
    assert fetched.active is True
    assert fetched.version == 1


def test_duplicate_email_is_rejected(db):
    create_customer(db, CustomerCreate(name="Budi", email="budi@example.com"))

    with pytest.raises(DuplicateResourceError) as exc:
        create_customer(db, CustomerCreate(name="Another Budi", email="budi@example.com"))

    assert exc.value.message_key == "customer.email.duplicate"


def test_get_unknown_customer(db):
    with pytest.raises(ResourceNotFoundError) as exc:
        get_customer(db, 55)

    assert exc.value.message_args == (55,)
