"""FastAPI dependency injection."""

from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from fleetfin.config import settings
from fleetfin.data.repository import FleetRepository

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_repository(session: AsyncSession = Depends(get_db)) -> FleetRepository:
    return FleetRepository(session)


def get_as_of() -> datetime:
    """Reference time for age-dependent reports; overridden in tests."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
