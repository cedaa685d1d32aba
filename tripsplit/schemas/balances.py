from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional

class MemberBalance(BaseModel):
    member_id: int
    name: Optional[str] = None
    paid: Decimal
    owed: Decimal
    sent: Decimal
    received: Decimal
    net: Decimal
    settled: bool

class Settlement(BaseModel):
    from_id: int
    from_name: Optional[str] = None
    to_id: int
    to_name: Optional[str] = None
    amount: Decimal

class CurrencyBalances(BaseModel):
    currency: str
    balances: List[MemberBalance]
    settlements: List[Settlement]

class GroupBalanceOut(BaseModel):
    group_id: int
    currencies: List[CurrencyBalances]
