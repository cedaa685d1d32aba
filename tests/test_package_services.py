from datetime import date

import pytest
import pytest_asyncio
from fastapi import HTTPException
from sqlalchemy import select

from conftest import nth_insert_of
from tripsplit.core.errors import StorageError
from tripsplit.models.group import Group
from tripsplit.models.itinerary_item import ItineraryItem
from tripsplit.models.package import PackageItineraryItem, TravelPackage
from tripsplit.schemas.package import AssignPackage
from tripsplit.services.package_services import assign_package_to_group


@pytest_asyncio.fixture
async def package(db):
    pkg = TravelPackage(name="Portugal in 4 days", destination="Lisbon", duration_days=4)
    db.add(pkg)
    await db.flush()

    db.add_all(
        [
            PackageItineraryItem(package_id=pkg.id, day_number=1, title="Arrival", order_index=0),
            PackageItineraryItem(package_id=pkg.id, day_number=2, title="Sintra", start_time="09:00", order_index=0),
            PackageItineraryItem(package_id=pkg.id, day_number=2, title="Fado night", order_index=1),
            PackageItineraryItem(package_id=pkg.id, day_number=4, title="Departure", order_index=0),
        ]
    )
    await db.commit()
    pkg_id = pkg.id
    db.expunge_all()
    return pkg_id


async def group_dates(db, group_id):
    res = await db.execute(
        select(Group.source_package_id, Group.start_date, Group.end_date, Group.destination)
        .where(Group.id == group_id)
    )
    return tuple(res.one())


async def test_assign_package_copies_itinerary(store, trip, package):
    result = await assign_package_to_group(
        store, package, AssignPackage(group_id=trip.group_id, start_date=date(2026, 11, 2)), trip.admin
    )

    assert result["end_date"] == date(2026, 11, 5)
    assert result["itinerary_items"] == 4
    assert await group_dates(store.db, trip.group_id) == (package, date(2026, 11, 2), date(2026, 11, 5), "Lisbon")

    items = await store.query(
        select(ItineraryItem).where(ItineraryItem.group_id == trip.group_id).order_by(ItineraryItem.date, ItineraryItem.order_index)
    )
    assert [(i.title, i.date) for i in items] == [
        ("Arrival", date(2026, 11, 2)),
        ("Sintra", date(2026, 11, 3)),
        ("Fado night", date(2026, 11, 3)),
        ("Departure", date(2026, 11, 5)),
    ]


async def test_only_admin_assigns_packages(store, trip, package):
    with pytest.raises(HTTPException) as exc:
        await assign_package_to_group(
            store, package, AssignPackage(group_id=trip.group_id, start_date=date(2026, 11, 2)), trip.alice
        )

    assert exc.value.status_code == 403


async def test_unknown_package_or_group(store, trip, package):
    with pytest.raises(HTTPException) as exc:
        await assign_package_to_group(
            store, 9999, AssignPackage(group_id=trip.group_id, start_date=date(2026, 11, 2)), trip.admin
        )
    assert exc.value.detail == "Package not found"

    with pytest.raises(HTTPException) as exc:
        await assign_package_to_group(
            store, package, AssignPackage(group_id=9999, start_date=date(2026, 11, 2)), trip.admin
        )
    assert exc.value.detail == "Group not found"


async def test_failed_itinerary_copy_restores_group(flaky_store, trip, package):
    store = flaky_store(fail_insert=nth_insert_of(ItineraryItem, 3))

    with pytest.raises(StorageError):
        await assign_package_to_group(
            store, package, AssignPackage(group_id=trip.group_id, start_date=date(2026, 11, 2)), trip.admin
        )

    assert await group_dates(store.db, trip.group_id) == (None, None, None, None)
    assert await store.query(select(ItineraryItem)) == []
