from sqlalchemy import Column, Integer, BigInteger, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tripsplit.db.session import Base
from tripsplit.core.money import from_cents

class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_expense_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(String, nullable=False, default="other")
    paid_by = Column(Integer, ForeignKey("group_members.id"), nullable=False)
    split_type = Column(String, nullable=False)  # equal | percentage | custom
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    splits = relationship(
        "ExpenseSplit",
        back_populates="expense",
        order_by="ExpenseSplit.id",
        passive_deletes=True
    )

    @property
    def amount(self):
        return from_cents(self.amount_cents)
