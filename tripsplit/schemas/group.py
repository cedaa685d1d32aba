from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

class GroupCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    destination: Optional[str] = Field(None, max_length=200)

class GroupOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    source_package_id: Optional[int] = None
    created_by: int

    class Config:
        from_attributes = True

class GroupMemberOut(BaseModel):
    id: int
    user_id: int
    group_id: int
    role: str

    class Config:
        from_attributes = True
