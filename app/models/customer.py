from decimal import Decimal
from datetime import datetime
from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime, Enum
from app.database.connection import Base
from app.enums.membership_tiers import MembershipTier


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    membership_tier = Column(
        Enum(MembershipTier, native_enum=False, length=20),
        nullable=False,
        default=MembershipTier.REGULAR,
    )
    total_spent = Column(Numeric(19, 2), nullable=False, default=Decimal("0.00"))
    active = Column(Boolean, nullable=False, default=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}
