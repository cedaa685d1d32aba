from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

class PaymentCreate(BaseModel):
    group_id: int
    to_member_id: int
    amount: Decimal = Field(..., gt=0, le=1000000, decimal_places=2)
    currency: str = Field("USD", min_length=1, max_length=3)
    description: Optional[str] = Field(None, max_length=500)
    payment_date: Optional[date] = None

class PaymentUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, le=1000000, decimal_places=2)
    description: Optional[str] = Field(None, max_length=500)
    payment_date: Optional[date] = None

class PaymentOut(BaseModel):
    id: int
    group_id: int
    from_member_id: int
    to_member_id: int
    amount: Decimal
    currency: str
    description: Optional[str] = None
    payment_date: date
    created_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
