from datetime import date
from pydantic import BaseModel

class AssignPackage(BaseModel):
    group_id: int
    start_date: date

class AssignPackageOut(BaseModel):
    group_id: int
    package_id: int
    start_date: date
    end_date: date
    itinerary_items: int
