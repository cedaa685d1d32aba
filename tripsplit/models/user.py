from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from tripsplit.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    full_name = Column(String, nullable=False)
    avatar_url = Column(String, nullable=True)
    role = Column(String, nullable=False, default="user")  # user | admin
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self):
        return self.role == "admin"
