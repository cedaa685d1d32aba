from sqlalchemy import Column, Integer, BigInteger, Float, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from tripsplit.db.session import Base
from tripsplit.core.money import from_cents

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"
    __table_args__ = (
        UniqueConstraint("expense_id", "member_id", name="uq_expense_split_member"),
        CheckConstraint("amount_owed_cents >= 0", name="ck_split_amount_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False)
    amount_owed_cents = Column(BigInteger, nullable=False)
    percentage = Column(Float, nullable=True)
    is_settled = Column(Boolean, nullable=False, default=False)
    settled_at = Column(DateTime(timezone=True), nullable=True)

    expense = relationship("Expense", back_populates="splits")

    @property
    def amount_owed(self):
        return from_cents(self.amount_owed_cents)
