"""
User persistence – the only module that talks SQL.

• UserStore wraps one AsyncSession (one per request, see routers/deps.py)
• every mutating call commits before returning
• a unique-constraint hit on commit is reported as ConflictError
"""
import logging
from typing import Any, Mapping

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError
from ..core.validation import normalize_email
from .database import UserRecord

log = logging.getLogger(__name__)

UPDATABLE = frozenset({"name", "email", "age"})

# SQLite INTEGER is signed 64-bit; larger ids cannot exist in the table
MAX_ID = 2**63 - 1


def _storable_id(user_id: int) -> bool:
    return 0 < user_id <= MAX_ID


class UserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # lost a race against a concurrent insert/update of the same e-mail
            await self.session.rollback()
            raise ConflictError() from exc

    # ────────────────────────── reads ──────────────────────────────────
    async def get(self, user_id: int) -> UserRecord | None:
        if not _storable_id(user_id):
            return None
        return await self.session.get(UserRecord, user_id)

    async def get_by_email(self, email: str) -> UserRecord | None:
        stmt = select(UserRecord).where(UserRecord.email == normalize_email(email))
        return await self.session.scalar(stmt)

    async def list(self) -> list[UserRecord]:
        rows = await self.session.scalars(select(UserRecord).order_by(UserRecord.id))
        return list(rows)

    async def exists_by_email(self, email: str, exclude_id: int | None = None) -> bool:
        cond = UserRecord.email == normalize_email(email)
        if exclude_id is not None:
            cond = cond & (UserRecord.id != exclude_id)
        return bool(await self.session.scalar(select(exists().where(cond))))

    # ────────────────────────── writes ─────────────────────────────────
    async def create(self, name: str, email: str, age: int) -> UserRecord:
        user = UserRecord(name=name, email=normalize_email(email), age=age)
        self.session.add(user)
        await self._commit()
        log.info("Created user %d <%s>", user.id, user.email)
        return user

    async def update(self, user_id: int, fields: Mapping[str, Any]) -> UserRecord | None:
        """
        Apply *only* the given fields in a single UPDATE statement, so two
        concurrent updates of the same row never interleave column values.
        Returns None when the id does not exist.
        """
        unknown = set(fields) - UPDATABLE
        if unknown:
            raise ValueError(f"not updatable: {sorted(unknown)}")
        if not _storable_id(user_id):
            return None

        values = dict(fields)
        if "email" in values:
            values["email"] = normalize_email(values["email"])
        if not values:
            return await self.get(user_id)

        try:
            res = await self.session.execute(
                update(UserRecord).where(UserRecord.id == user_id).values(**values)
            )
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError() from exc
        if res.rowcount == 0:
            await self.session.rollback()
            return None
        await self._commit()
        log.info("Updated user %d (%s)", user_id, ", ".join(sorted(values)))
        return await self.session.get(UserRecord, user_id, populate_existing=True)

    async def delete(self, user_id: int) -> bool:
        if not _storable_id(user_id):
            return False
        res = await self.session.execute(delete(UserRecord).where(UserRecord.id == user_id))
        if res.rowcount == 0:
            await self.session.rollback()
            return False
        await self._commit()
        log.info("Deleted user %d", user_id)
        return True
