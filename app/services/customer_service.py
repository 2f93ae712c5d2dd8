import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateResourceError, ResourceNotFoundError
from app.database.transaction import run_in_transaction
from app.enums.membership_tiers import MembershipTier
from app.models.customer import Customer
from app.repositories import customer_store
from app.schemas.customer import CustomerCreate

logger = structlog.get_logger(__name__)


def create_customer(db: Session, data: CustomerCreate) -> Customer:
    def work() -> Customer:
        if customer_store.exists_by_email(db, data.email):
            logger.warning("duplicate_customer_email", email=data.email)
            raise DuplicateResourceError("customer.email.duplicate", data.email)

        customer = Customer(
            name=data.name,
            email=data.email,
            membership_tier=MembershipTier.REGULAR,
            active=True,
        )
        return customer_store.save(db, customer)

    customer = run_in_transaction(db, work, operation="create_customer", retries=0)
    logger.info("customer_created", customer_id=customer.id, email=customer.email)
    return customer


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = customer_store.find_by_id(db, customer_id)
    if customer is None:
        logger.warning("customer_not_found", customer_id=customer_id)
        raise ResourceNotFoundError("customer.not.found", customer_id)
    return customer
