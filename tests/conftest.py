import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tripsplit.core.errors import StorageError
from tripsplit.db.base import Base, Group, GroupMember, User
from tripsplit.db.store import RecordStore


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_fks(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def store(db):
    return RecordStore(db)


@pytest_asyncio.fixture
async def trip(db):
    """Three-member group led by Alice, plus an admin and an outsider."""
    alice = User(email="alice@example.com", full_name="Alice", role="user")
    bob = User(email="bob@example.com", full_name="Bob", role="user")
    carol = User(email="carol@example.com", full_name="Carol", role="user")
    admin = User(email="admin@example.com", full_name="Admin", role="admin")
    outsider = User(email="olga@example.com", full_name="Olga", role="user")
    db.add_all([alice, bob, carol, admin, outsider])
    await db.flush()

    group = Group(name="Lisbon 2026", created_by=alice.id)
    db.add(group)
    await db.flush()

    a = GroupMember(group_id=group.id, user_id=alice.id, role="leader")
    b = GroupMember(group_id=group.id, user_id=bob.id)
    c = GroupMember(group_id=group.id, user_id=carol.id)
    db.add_all([a, b, c])
    await db.commit()

    # detach so later rollbacks inside tests cannot expire the fixtures
    db.expunge_all()

    return SimpleNamespace(
        group_id=group.id,
        alice=alice,
        bob=bob,
        carol=carol,
        admin=admin,
        outsider=outsider,
        a=a.id,
        b=b.id,
        c=c.id,
    )


class FlakyStore(RecordStore):
    """RecordStore that fails chosen writes, to drive compensation paths."""

    def __init__(self, db, fail_insert=None, fail_update=None, fail_delete=None):
        super().__init__(db)
        self.fail_insert = fail_insert
        self.fail_update = fail_update
        self.fail_delete = fail_delete

    async def insert(self, record):
        if self.fail_insert and self.fail_insert(record):
            raise StorageError(f"injected insert failure on {record.__tablename__}")
        return await super().insert(record)

    async def update_by_id(self, model, record_id, **values):
        if self.fail_update and self.fail_update(model, values):
            raise StorageError(f"injected update failure on {model.__tablename__}")
        return await super().update_by_id(model, record_id, **values)

    async def delete_by_id(self, model, record_id):
        if self.fail_delete and self.fail_delete(model):
            raise StorageError(f"injected delete failure on {model.__tablename__}")
        return await super().delete_by_id(model, record_id)

    async def delete_where(self, model, *criteria):
        if self.fail_delete and self.fail_delete(model):
            raise StorageError(f"injected delete failure on {model.__tablename__}")
        return await super().delete_where(model, *criteria)


def nth_insert_of(model, n):
    """Predicate failing the n-th (1-based) insert of ``model``, once."""
    seen = {"count": 0}

    def predicate(record):
        if isinstance(record, model):
            seen["count"] += 1
            return seen["count"] == n
        return False

    return predicate


@pytest.fixture
def flaky_store(db):
    def make(**kwargs):
        return FlakyStore(db, **kwargs)
    return make


class FakeBlobStore:
    def __init__(self, fail_put=False, fail_delete=False):
        self.objects = {}
        self.fail_put = fail_put
        self.fail_delete = fail_delete

    async def put(self, key, data, content_type):
        if self.fail_put:
            raise StorageError(f"injected put failure for {key}")
        url = f"https://blobs.test/bucket/{key}"
        self.objects[url] = (data, content_type)
        return url

    async def delete(self, url):
        if self.fail_delete:
            raise StorageError(f"injected delete failure for {url}")
        self.objects.pop(url, None)


@pytest.fixture
def blobs():
    return FakeBlobStore()
