from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, EmailStr, Field

from app.enums.membership_tiers import MembershipTier


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr


class CustomerResponse(BaseModel):
    id: int
    name: str
    email: str
    membership_tier: MembershipTier
    total_spent: Decimal
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True
