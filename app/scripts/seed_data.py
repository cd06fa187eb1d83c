"""
Seed script to populate sample nominations, candidates and an admin account.

Run with: python -m app.scripts.seed_data
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import Settings, get_settings
from app.core.security import hash_password
from app.db.core import Database
from app.models.candidate import Candidate
from app.models.nomination import Nomination
from app.models.user import User


SAMPLE_NOMINATIONS = [
    {
        "name": "Artist of the Year",
        "description": "The performer who defined the year",
    },
    {
        "name": "Track of the Year",
        "description": "The song everyone kept replaying",
    },
    {
        "name": "Clip of the Year",
        "description": "Best video clip",
    },
    {
        "name": "Breakthrough of the Year",
        "description": "Newcomer who made the biggest splash",
    },
]

SAMPLE_CANDIDATES = ["Ivan", "Maria", "Alexey", "Anna"]


async def seed_admin(session: AsyncSession, settings: Settings):
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return
    existing = await session.execute(
        select(User).where(User.username == settings.ADMIN_USERNAME))
    user = existing.scalar_one_or_none()
    if user is None:
        session.add(User(
            username=settings.ADMIN_USERNAME,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            display_name=settings.ADMIN_USERNAME,
            is_admin=True,
        ))
        logging.info(f"created admin user {settings.ADMIN_USERNAME}")
    elif not user.is_admin:
        user.is_admin = True
        logging.info(f"promoted {settings.ADMIN_USERNAME} to admin")


async def seed_data(session_factory: async_sessionmaker[AsyncSession], settings: Settings):
    """Seed the database with sample nominations and candidates."""
    async with session_factory() as session:
        await seed_admin(session, settings)

        existing_nominations = await session.execute(select(Nomination.id).limit(1))
        if existing_nominations.scalar_one_or_none() is not None:
            await session.commit()
            logging.info("nominations already exist, skipping sample seed")
            return

        logging.info("🌱 Seeding sample nominations and candidates...")
        for nomination_data in SAMPLE_NOMINATIONS:
            nomination = Nomination(**nomination_data)
            session.add(nomination)
            await session.flush()  # Get the nomination ID

            for candidate_name in SAMPLE_CANDIDATES:
                session.add(Candidate(
                    nomination_id=nomination.id, name=candidate_name))
        await session.commit()

        nomination_count = await session.scalar(select(func.count()).select_from(Nomination))
        candidate_count = await session.scalar(select(func.count()).select_from(Candidate))
        logging.info(
            f"seeding complete: {nomination_count} nominations, {candidate_count} candidates")


async def main():
    settings = get_settings()
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    try:
        await database.init_db()
        await seed_data(database.session_factory, settings)
    except Exception as e:
        logging.error(f"❌ Error seeding data: {e}", exc_info=True)
        raise
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
