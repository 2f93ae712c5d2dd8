from typing import Optional

from sqlalchemy.orm import Session

from app.models.customer import Customer


def find_by_id(db: Session, customer_id: int, for_update: bool = False) -> Optional[Customer]:
    query = db.query(Customer).filter(Customer.id == customer_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def save(db: Session, customer: Customer) -> Customer:
    db.add(customer)
    db.flush()
    return customer


def exists_by_email(db: Session, email: str) -> bool:
    query = db.query(Customer.id).filter(Customer.email == email)
    return db.query(query.exists()).scalar()
