from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from tripsplit.core.dependencies import get_current_user, get_photo_blobs, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.document import PhotoUploadOut
from tripsplit.services.photo_services import delete_photo, upload_photos

router = APIRouter()

@router.post("/{group_id}", response_model=PhotoUploadOut)
async def upload(
    group_id: int,
    files: List[UploadFile] = File(...),
    caption: Optional[str] = Form(None),
    store: RecordStore = Depends(get_store),
    blobs = Depends(get_photo_blobs),
    current_user = Depends(get_current_user),
):
    payload = [
        (f.filename or "photo", f.content_type or "application/octet-stream", await f.read())
        for f in files
    ]
    return await upload_photos(store, blobs, current_user.id, group_id, caption, payload)

@router.delete("/item/{photo_id}")
async def remove(
    photo_id: int,
    store: RecordStore = Depends(get_store),
    blobs = Depends(get_photo_blobs),
    current_user = Depends(get_current_user),
):
    return await delete_photo(store, blobs, photo_id, current_user)
