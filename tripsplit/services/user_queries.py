from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.models.user import User

async def get_user_by_id(db: AsyncSession, user_id: int):
    return await db.get(User, user_id)
