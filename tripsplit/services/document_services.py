from typing import get_args

from fastapi import HTTPException
from sqlalchemy import select

from tripsplit.core.dependencies import check_group_membership
from tripsplit.core.errors import ValidationError
from tripsplit.db.store import RecordStore
from tripsplit.models.document import TravelDocument
from tripsplit.models.user import User
from tripsplit.schemas.document import DocumentType
from tripsplit.services.file_services import (
    build_object_key,
    check_upload,
    remove_file_with_record,
    store_file_with_record,
)

DOCUMENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


async def upload_document(
    store: RecordStore,
    blobs,
    user_id: int,
    group_id: int,
    title: str,
    document_type: str,
    filename: str,
    content_type: str,
    data: bytes,
):
    await check_group_membership(store.db, group_id, user_id)

    if not 3 <= len(title or "") <= 200:
        raise ValidationError("title", "Title must be between 3 and 200 characters")

    if document_type not in get_args(DocumentType):
        raise ValidationError("document_type", "Invalid document type")

    check_upload(
        content_type,
        data,
        DOCUMENT_TYPES,
        "File must be PDF, image (JPG, PNG, WEBP), or Word document",
    )

    key = build_object_key(user_id, group_id, filename)

    return await store_file_with_record(
        store,
        blobs,
        key,
        data,
        content_type,
        lambda url: TravelDocument(
            group_id=group_id,
            title=title,
            document_type=document_type,
            file_url=url,
            uploaded_by=user_id,
        ),
    )


async def delete_document(store: RecordStore, blobs, document_id: int, user: User):
    rows = await store.query(select(TravelDocument).where(TravelDocument.id == document_id))

    if not rows:
        raise HTTPException(404, "Document not found")

    document = rows[0]

    if document.uploaded_by != user.id and not user.is_admin:
        raise HTTPException(403, "You do not have permission to delete this document")

    await remove_file_with_record(store, blobs, document)
    return {"status": "deleted"}


async def get_group_documents(store: RecordStore, group_id: int, user_id: int):
    await check_group_membership(store.db, group_id, user_id)

    q = (
        select(TravelDocument)
        .where(TravelDocument.group_id == group_id)
        .order_by(TravelDocument.created_at.desc(), TravelDocument.id.desc())
    )
    return await store.query(q)
