import pytest
from fastapi import HTTPException
from sqlalchemy import func, select

from conftest import FakeBlobStore
from tripsplit.core.errors import RollbackError, StorageError, ValidationError
from tripsplit.models.document import TravelDocument
from tripsplit.models.photo import Photo
from tripsplit.services.document_services import (
    delete_document,
    get_group_documents,
    upload_document,
)
from tripsplit.services.file_services import build_object_key
from tripsplit.services.photo_services import delete_photo, upload_photos

PDF = b"%PDF-1.7 boarding pass"
JPEG = b"\xff\xd8\xff\xe0 beach"


async def count(db, model):
    res = await db.execute(select(func.count()).select_from(model))
    return res.scalar_one()


async def upload_ticket(store, blobs, trip, **overrides):
    kwargs = dict(
        user_id=trip.bob.id,
        group_id=trip.group_id,
        title="Flight to Lisbon",
        document_type="flight",
        filename="ticket.pdf",
        content_type="application/pdf",
        data=PDF,
    )
    kwargs.update(overrides)
    return await upload_document(store, blobs, **kwargs)


def test_object_key_layout():
    key = build_object_key(7, 3, "Boarding.Pass.PDF")

    assert key.startswith("7/3/")
    assert key.endswith(".pdf")
    assert build_object_key(7, 3, "noext").endswith(".bin")


async def test_upload_document_stores_blob_and_row(store, blobs, trip):
    document = await upload_ticket(store, blobs, trip)

    assert document.file_url in blobs.objects
    assert blobs.objects[document.file_url] == (PDF, "application/pdf")

    documents = await get_group_documents(store, trip.group_id, trip.carol.id)
    assert [d.title for d in documents] == ["Flight to Lisbon"]


async def test_failed_row_insert_removes_uploaded_blob(flaky_store, blobs, trip):
    store = flaky_store(fail_insert=lambda record: isinstance(record, TravelDocument))

    with pytest.raises(StorageError):
        await upload_ticket(store, blobs, trip)

    assert blobs.objects == {}
    assert await count(store.db, TravelDocument) == 0


async def test_failed_blob_upload_writes_no_row(store, trip):
    blobs = FakeBlobStore(fail_put=True)

    with pytest.raises(StorageError):
        await upload_ticket(store, blobs, trip)

    assert await count(store.db, TravelDocument) == 0


async def test_oversized_file_is_rejected(store, blobs, trip, monkeypatch):
    monkeypatch.setattr("tripsplit.core.config.settings.MAX_UPLOAD_BYTES", 4)

    with pytest.raises(ValidationError) as exc:
        await upload_ticket(store, blobs, trip)

    assert exc.value.rule == "file_too_large"
    assert blobs.objects == {}


@pytest.mark.parametrize(
    "overrides,rule",
    [
        ({"content_type": "application/zip"}, "file_type"),
        ({"title": "Hi"}, "title"),
        ({"document_type": "passport"}, "document_type"),
    ],
)
async def test_invalid_document_upload(store, blobs, trip, overrides, rule):
    with pytest.raises(ValidationError) as exc:
        await upload_ticket(store, blobs, trip, **overrides)

    assert exc.value.rule == rule


async def test_outsider_cannot_upload(store, blobs, trip):
    with pytest.raises(HTTPException) as exc:
        await upload_ticket(store, blobs, trip, user_id=trip.outsider.id)

    assert exc.value.status_code == 403


async def test_delete_document_removes_row_then_blob(store, blobs, trip):
    document = await upload_ticket(store, blobs, trip)

    await delete_document(store, blobs, document.id, trip.bob)

    assert blobs.objects == {}
    assert await count(store.db, TravelDocument) == 0


async def test_only_uploader_or_admin_deletes_document(store, blobs, trip):
    document = await upload_ticket(store, blobs, trip)

    with pytest.raises(HTTPException) as exc:
        await delete_document(store, blobs, document.id, trip.carol)
    assert exc.value.status_code == 403

    await delete_document(store, blobs, document.id, trip.admin)
    assert await count(store.db, TravelDocument) == 0


async def test_failed_blob_delete_restores_row(store, blobs, trip):
    document = await upload_ticket(store, blobs, trip)
    document_id, url = document.id, document.file_url
    blobs.fail_delete = True

    with pytest.raises(StorageError):
        await delete_document(store, blobs, document_id, trip.bob)

    rows = await store.query(select(TravelDocument).where(TravelDocument.id == document_id))
    assert len(rows) == 1
    assert rows[0].file_url == url
    assert url in blobs.objects


async def test_failed_restore_is_fatal(flaky_store, blobs, trip):
    store = flaky_store()
    document = await upload_ticket(store, blobs, trip)
    blobs.fail_delete = True

    async def broken_restore(model, values):
        raise StorageError("restore failed")

    store.restore = broken_restore

    with pytest.raises(RollbackError):
        await delete_document(store, blobs, document.id, trip.bob)


async def test_photo_batch_reports_per_file_errors(store, blobs, trip):
    result = await upload_photos(
        store,
        blobs,
        trip.carol.id,
        trip.group_id,
        "Day one",
        [
            ("beach.jpg", "image/jpeg", JPEG),
            ("notes.txt", "text/plain", b"hello"),
            ("sunset.png", "image/png", b"\x89PNG"),
        ],
    )

    assert len(result["photos"]) == 2
    assert result["errors"] == ["notes.txt: File must be an image (JPG, PNG, WEBP)"]
    assert all(p.caption == "Day one" for p in result["photos"])
    assert len(blobs.objects) == 2


async def test_photo_batch_fails_when_nothing_is_stored(store, trip):
    blobs = FakeBlobStore(fail_put=True)

    with pytest.raises(ValidationError) as exc:
        await upload_photos(store, blobs, trip.carol.id, trip.group_id, None, [("a.jpg", "image/jpeg", JPEG)])

    assert exc.value.rule == "upload_failed"
    assert exc.value.message == "a.jpg: Failed to upload"


async def test_photo_batch_requires_files(store, blobs, trip):
    with pytest.raises(ValidationError) as exc:
        await upload_photos(store, blobs, trip.carol.id, trip.group_id, None, [])

    assert exc.value.rule == "no_files"


async def test_delete_photo(store, blobs, trip):
    result = await upload_photos(store, blobs, trip.carol.id, trip.group_id, "", [("a.jpg", "image/jpeg", JPEG)])
    photo = result["photos"][0]
    assert photo.caption is None

    with pytest.raises(HTTPException):
        await delete_photo(store, blobs, photo.id, trip.bob)

    await delete_photo(store, blobs, photo.id, trip.carol)
    assert await count(store.db, Photo) == 0
    assert blobs.objects == {}
