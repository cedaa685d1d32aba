import logging

from fastapi import HTTPException
from sqlalchemy import select

from tripsplit.core.dependencies import check_group_membership
from tripsplit.core.errors import StorageError, ValidationError
from tripsplit.db.store import RecordStore
from tripsplit.models.photo import Photo
from tripsplit.models.user import User
from tripsplit.services.file_services import (
    build_object_key,
    check_upload,
    remove_file_with_record,
    store_file_with_record,
)

logger = logging.getLogger(__name__)

PHOTO_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}


async def upload_photos(store: RecordStore, blobs, user_id: int, group_id: int, caption, files):
    """
    Store several photos, each blob+row pair on its own.

    ``files`` is a list of ``(filename, content_type, data)``. A failing file
    is reported in ``errors`` and does not affect the others; the call fails
    only when nothing was stored.
    """
    await check_group_membership(store.db, group_id, user_id)

    if not files:
        raise ValidationError("no_files", "Missing required fields")

    photos = []
    errors = []

    for filename, content_type, data in files:
        try:
            check_upload(content_type, data, PHOTO_TYPES, "File must be an image (JPG, PNG, WEBP)")
            photo = await store_file_with_record(
                store,
                blobs,
                build_object_key(user_id, group_id, filename),
                data,
                content_type,
                lambda url: Photo(
                    group_id=group_id,
                    file_url=url,
                    caption=caption or None,
                    uploaded_by=user_id,
                ),
            )
        except ValidationError as e:
            errors.append(f"{filename}: {e.message}")
            continue
        except StorageError as e:
            logger.error("Photo %s not stored: %s", filename, e)
            errors.append(f"{filename}: Failed to upload")
            continue

        photos.append(photo)

    if not photos:
        raise ValidationError("upload_failed", ", ".join(errors) or "Failed to upload photos")

    return {"photos": photos, "errors": errors}


async def delete_photo(store: RecordStore, blobs, photo_id: int, user: User):
    rows = await store.query(select(Photo).where(Photo.id == photo_id))

    if not rows:
        raise HTTPException(404, "Photo not found")

    photo = rows[0]

    if photo.uploaded_by != user.id and not user.is_admin:
        raise HTTPException(403, "You do not have permission to delete this photo")

    await remove_file_with_record(store, blobs, photo)
    return {"status": "deleted"}
