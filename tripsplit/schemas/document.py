from datetime import datetime
from pydantic import BaseModel
from typing import List, Literal, Optional

DocumentType = Literal["flight", "bus", "train", "hotel", "activity", "other"]

class DocumentOut(BaseModel):
    id: int
    group_id: int
    title: str
    document_type: str
    file_url: str
    uploaded_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PhotoOut(BaseModel):
    id: int
    group_id: int
    file_url: str
    caption: Optional[str] = None
    uploaded_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PhotoUploadOut(BaseModel):
    photos: List[PhotoOut]
    errors: List[str] = []
