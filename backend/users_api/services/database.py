"""
database.py – SQLAlchemy (asyncio) engine, schema and seed data
"""
import logging

from sqlalchemy import Integer, String, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

log = logging.getLogger(__name__)

SEED_USERS = (
    ("Alice", "alice@example.com", 28),
    ("Bob", "bob@example.com", 35),
)


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"
    # AUTOINCREMENT: ids of deleted users are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # stored already normalised (trimmed + lower-case)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)


def make_engine(database_url: str) -> AsyncEngine:
    """
    Build the async engine for the configured URL.

    • sqlite+aiosqlite is the default – one file, created on first connect.
    • one engine per application instance; it lives on app.state.
    """
    return create_async_engine(database_url)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    # expire_on_commit=False → rows stay readable after the commit that wrote them
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create the users table when absent and seed it when empty."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with make_sessionmaker(engine)() as session:
        count = await session.scalar(select(func.count()).select_from(UserRecord))
        if count:
            return
        session.add_all(UserRecord(name=n, email=e, age=a) for n, e, a in SEED_USERS)
        await session.commit()
        log.info("Seeded %d users", len(SEED_USERS))
