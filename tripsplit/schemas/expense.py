from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

ExpenseCategory = Literal["transport", "accommodation", "food", "activity", "shopping", "other"]
SplitType = Literal["equal", "percentage", "custom"]
# every currency, JPY included, is stored in hundredths
Currency = Literal["USD", "EUR", "GBP", "JPY", "ARS", "BRL", "MXN"]

class SplitInput(BaseModel):
    member_id: int
    amount_owed: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)

class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=3, max_length=200)
    amount: Decimal = Field(..., gt=0, le=1000000, decimal_places=2)
    currency: Currency = "USD"
    category: ExpenseCategory = "other"
    paid_by: int
    split_type: SplitType
    splits: List[SplitInput] = Field(..., min_length=1)

class ExpenseUpdate(ExpenseCreate):
    pass

class SplitOut(BaseModel):
    id: int
    member_id: int
    amount_owed: Decimal
    percentage: Optional[float] = None
    is_settled: bool
    settled_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    description: str
    amount: Decimal
    currency: str
    category: str
    paid_by: int
    split_type: str
    created_at: Optional[datetime] = None
    splits: List[SplitOut]

    class Config:
        from_attributes = True
