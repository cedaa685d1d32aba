# Import every model so Base.metadata knows all tables (Alembic, tests).
from tripsplit.db.session import Base
from tripsplit.models.user import User
from tripsplit.models.group import Group
from tripsplit.models.group_member import GroupMember
from tripsplit.models.expense import Expense
from tripsplit.models.expense_split import ExpenseSplit
from tripsplit.models.payment import Payment
from tripsplit.models.document import TravelDocument
from tripsplit.models.photo import Photo
from tripsplit.models.package import TravelPackage, PackageItineraryItem
from tripsplit.models.itinerary_item import ItineraryItem

__all__ = [
    "Base",
    "User",
    "Group",
    "GroupMember",
    "Expense",
    "ExpenseSplit",
    "Payment",
    "TravelDocument",
    "Photo",
    "TravelPackage",
    "PackageItineraryItem",
    "ItineraryItem",
]
