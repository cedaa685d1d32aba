from typing import List
from fastapi import APIRouter, Depends, File, Form, UploadFile
from tripsplit.core.dependencies import get_current_user, get_document_blobs, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.document import DocumentOut
from tripsplit.services.document_services import delete_document, get_group_documents, upload_document

router = APIRouter()

@router.post("/{group_id}", response_model=DocumentOut)
async def upload(
    group_id: int,
    title: str = Form(...),
    document_type: str = Form(...),
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
    blobs = Depends(get_document_blobs),
    current_user = Depends(get_current_user),
):
    data = await file.read()
    return await upload_document(
        store,
        blobs,
        current_user.id,
        group_id,
        title,
        document_type,
        file.filename or "upload",
        file.content_type or "application/octet-stream",
        data,
    )

@router.get("/{group_id}", response_model=List[DocumentOut])
async def list_documents(group_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await get_group_documents(store, group_id, current_user.id)

@router.delete("/item/{document_id}")
async def remove(
    document_id: int,
    store: RecordStore = Depends(get_store),
    blobs = Depends(get_document_blobs),
    current_user = Depends(get_current_user),
):
    return await delete_document(store, blobs, document_id, current_user)
