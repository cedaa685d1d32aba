from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tripsplit.db.session import Base

class TravelPackage(Base):
    __tablename__ = "travel_packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    destination = Column(String, nullable=False)
    duration_days = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    itinerary_items = relationship(
        "PackageItineraryItem",
        back_populates="package",
        order_by=lambda: [PackageItineraryItem.day_number, PackageItineraryItem.order_index],
        passive_deletes=True
    )


class PackageItineraryItem(Base):
    __tablename__ = "package_itinerary_items"

    id = Column(Integer, primary_key=True, index=True)
    package_id = Column(Integer, ForeignKey("travel_packages.id", ondelete="CASCADE"), nullable=False)
    day_number = Column(Integer, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    start_time = Column(String, nullable=True)  # HH:MM
    end_time = Column(String, nullable=True)
    location = Column(String, nullable=True)
    category = Column(String, nullable=False, default="other")
    order_index = Column(Integer, nullable=False, default=0)

    package = relationship("TravelPackage", back_populates="itinerary_items")
