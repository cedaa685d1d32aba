from sqlalchemy import Column, Integer, BigInteger, String, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from tripsplit.db.session import Base
from tripsplit.core.money import from_cents

class Payment(Base):
    __tablename__ = "expense_payments"
    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_payment_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    from_member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False)
    to_member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    description = Column(String, nullable=True)
    payment_date = Column(Date, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def amount(self):
        return from_cents(self.amount_cents)
