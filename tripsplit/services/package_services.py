import logging
from datetime import timedelta
from functools import partial

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tripsplit.core.saga import WriteCoordinator
from tripsplit.db.store import RecordStore
from tripsplit.models.group import Group
from tripsplit.models.itinerary_item import ItineraryItem
from tripsplit.models.package import TravelPackage
from tripsplit.models.user import User
from tripsplit.schemas.package import AssignPackage

logger = logging.getLogger(__name__)

GROUP_PACKAGE_FIELDS = ("source_package_id", "start_date", "end_date", "destination")


async def assign_package_to_group(store: RecordStore, package_id: int, data: AssignPackage, user: User):
    """Point a group at a package and copy the package itinerary onto the group's dates."""
    if not user.is_admin:
        raise HTTPException(403, "Admin access required")

    packages = await store.query(
        select(TravelPackage)
        .options(selectinload(TravelPackage.itinerary_items))
        .where(TravelPackage.id == package_id)
    )
    if not packages:
        raise HTTPException(404, "Package not found")
    package = packages[0]

    groups = await store.query(
        select(Group).where(Group.id == data.group_id, Group.is_deleted == False)
    )
    if not groups:
        raise HTTPException(404, "Group not found")
    group = groups[0]

    group_id = group.id
    start_date = data.start_date
    end_date = start_date + timedelta(days=package.duration_days - 1)
    old_values = {k: getattr(group, k) for k in GROUP_PACKAGE_FIELDS}

    items = [
        ItineraryItem(
            group_id=group_id,
            title=item.title,
            description=item.description,
            date=start_date + timedelta(days=item.day_number - 1),
            start_time=item.start_time,
            end_time=item.end_time,
            location=item.location,
            category=item.category,
            order_index=item.order_index,
        )
        for item in package.itinerary_items
    ]

    async with WriteCoordinator("assign package") as saga:
        await saga.step(
            partial(
                store.update_by_id,
                Group,
                group_id,
                source_package_id=package_id,
                start_date=start_date,
                end_date=end_date,
                destination=package.destination,
            ),
            lambda _: store.update_by_id(Group, group_id, **old_values),
        )
        for item in items:
            await saga.step(partial(store.insert, item), store.remove)

    logger.info("Package %s assigned to group %s (%d itinerary items)", package_id, group_id, len(items))

    return {
        "group_id": group_id,
        "package_id": package_id,
        "start_date": start_date,
        "end_date": end_date,
        "itinerary_items": len(items),
    }
