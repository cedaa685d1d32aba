import logging
import secrets
import time
from functools import partial

from tripsplit.core.config import settings
from tripsplit.core.errors import ValidationError
from tripsplit.core.saga import WriteCoordinator
from tripsplit.db.store import RecordStore, snapshot

logger = logging.getLogger(__name__)


def build_object_key(user_id: int, group_id: int, filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{user_id}/{group_id}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


def check_upload(content_type: str, data: bytes, allowed_types, type_message: str):
    if len(data) > settings.MAX_UPLOAD_BYTES:
        limit_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise ValidationError("file_too_large", f"File size must be less than {limit_mb}MB")

    if content_type not in allowed_types:
        raise ValidationError("file_type", type_message)


async def store_file_with_record(store: RecordStore, blobs, key: str, data: bytes, content_type: str, make_record):
    """Upload the blob, then insert its metadata row; never leave one without the other."""
    async with WriteCoordinator(f"upload {key}") as saga:
        url = await saga.step(partial(blobs.put, key, data, content_type), blobs.delete)
        record = await saga.step(partial(store.insert, make_record(url)))

    logger.info("Stored %s as %s %s", key, record.__tablename__, record.id)
    return record


async def remove_file_with_record(store: RecordStore, blobs, record):
    model = type(record)
    values = snapshot(record)

    async with WriteCoordinator(f"delete {model.__tablename__} {values['id']}") as saga:
        await saga.step(partial(store.remove, record), lambda _: store.restore(model, values))
        await saga.step(partial(blobs.delete, values["file_url"]))

    logger.info("Removed %s %s", model.__tablename__, values["id"])
