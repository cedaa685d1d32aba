import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from tripsplit.db.session import engine
from tripsplit.models.document import TravelDocument
from tripsplit.models.expense import Expense
from tripsplit.models.group import Group
from tripsplit.models.payment import Payment
from tripsplit.models.photo import Photo
from tripsplit.models.user import User

logger = logging.getLogger(__name__)

COUNTED = {
    "users": select(func.count(User.id)),
    "groups": select(func.count(Group.id)).where(Group.is_deleted == False),
    "expenses": select(func.count(Expense.id)),
    "payments": select(func.count(Payment.id)),
    "documents": select(func.count(TravelDocument.id)),
    "photos": select(func.count(Photo.id)),
}

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database health check failed: %s", e)
        return {"db": False, "error": str(e)}

    return {"db": True, "message": "Database is connected"}

async def system_health():
    return {"status": "ok"}

async def system_metrics(db: AsyncSession):
    metrics = {}
    for name, q in COUNTED.items():
        res = await db.execute(q)
        metrics[name] = res.scalar()
    return metrics
