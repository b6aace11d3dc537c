"""
Record store primitives.

Three kinds of records are supported: scalar key-value pairs, unordered
string sets, and score-ordered sets. Every write is committed on its own,
so each call is atomic for the key it touches and nothing spans keys.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roomcraft.app.models.record import KeyValueRecord, RankedMember, SetMember

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Persistence primitives consumed by every service."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored at ``key``, or None."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` at ``key``, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete the scalar value at ``key`` if present."""

    @abstractmethod
    async def set_add(self, key: str, members: list[str]) -> int:
        """Add members to a set and return how many were new."""

    @abstractmethod
    async def set_members(self, key: str) -> list[str]:
        """Return every member of a set."""

    @abstractmethod
    async def ranked_add(self, key: str, members: list[tuple[str, float]]) -> int:
        """Insert ``(member, score)`` pairs and return how many were new.

        Members that already exist keep their current score.
        """

    @abstractmethod
    async def ranked_increment(self, key: str, delta: float, member: str) -> float:
        """Add ``delta`` to a member's score, creating it if absent."""

    @abstractmethod
    async def ranked_range_desc(self, key: str, start: int, stop: int) -> list[str]:
        """Return members by descending score between inclusive indices.

        Negative indices count from the end, so ``(0, -1)`` returns all.
        """

    @abstractmethod
    async def ranked_rank_desc(self, key: str, member: str) -> int | None:
        """Return the 0-based descending rank of a member, or None."""

    @abstractmethod
    async def ranked_score(self, key: str, member: str) -> float | None:
        """Return a member's score, or None."""


class SqlRecordStore(RecordStore):
    """
    Record store backed by SQLAlchemy tables.

    Members with equal scores are ordered by insertion, earliest first.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def get(self, key: str) -> str | None:
        result = await self.db.execute(
            select(KeyValueRecord.value).where(KeyValueRecord.key == key)
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        await self.db.merge(KeyValueRecord(key=key, value=value))
        await self._commit()

    async def delete(self, key: str) -> None:
        await self.db.execute(delete(KeyValueRecord).where(KeyValueRecord.key == key))
        await self._commit()

    async def set_add(self, key: str, members: list[str]) -> int:
        if not members:
            return 0

        result = await self.db.execute(
            select(SetMember.member).where(
                SetMember.key == key,
                SetMember.member.in_(members),
            )
        )
        existing = set(result.scalars().all())

        added = 0
        for member in dict.fromkeys(members):
            if member in existing:
                continue
            self.db.add(SetMember(key=key, member=member))
            added += 1

        if added:
            await self._commit()
        return added

    async def set_members(self, key: str) -> list[str]:
        result = await self.db.execute(
            select(SetMember.member).where(SetMember.key == key).order_by(SetMember.id)
        )
        return list(result.scalars().all())

    async def ranked_add(self, key: str, members: list[tuple[str, float]]) -> int:
        if not members:
            return 0

        names = [member for member, _ in members]
        result = await self.db.execute(
            select(RankedMember.member).where(
                RankedMember.key == key,
                RankedMember.member.in_(names),
            )
        )
        existing = set(result.scalars().all())

        added = 0
        for member, score in members:
            if member in existing:
                continue
            self.db.add(RankedMember(key=key, member=member, score=float(score)))
            existing.add(member)
            added += 1

        if added:
            await self._commit()
        return added

    async def ranked_increment(self, key: str, delta: float, member: str) -> float:
        result = await self.db.execute(
            update(RankedMember)
            .where(RankedMember.key == key, RankedMember.member == member)
            .values(score=RankedMember.score + delta)
        )
        if result.rowcount == 0:
            self.db.add(RankedMember(key=key, member=member, score=float(delta)))
        await self._commit()

        score = await self.ranked_score(key, member)
        return score if score is not None else float(delta)

    async def ranked_range_desc(self, key: str, start: int, stop: int) -> list[str]:
        query = (
            select(RankedMember.member)
            .where(RankedMember.key == key)
            .order_by(RankedMember.score.desc(), RankedMember.id.asc())
        )

        if start >= 0 and stop >= 0:
            if stop < start:
                return []
            result = await self.db.execute(query.offset(start).limit(stop - start + 1))
            return list(result.scalars().all())

        result = await self.db.execute(query)
        members = list(result.scalars().all())
        size = len(members)
        if start < 0:
            start = max(size + start, 0)
        if stop < 0:
            stop = size + stop
        if stop < start:
            return []
        return members[start:stop + 1]

    async def ranked_rank_desc(self, key: str, member: str) -> int | None:
        result = await self.db.execute(
            select(RankedMember.id, RankedMember.score).where(
                RankedMember.key == key,
                RankedMember.member == member,
            )
        )
        row = result.one_or_none()
        if row is None:
            return None

        member_id, score = row
        ahead = await self.db.execute(
            select(func.count()).select_from(RankedMember).where(
                RankedMember.key == key,
                or_(
                    RankedMember.score > score,
                    and_(RankedMember.score == score, RankedMember.id < member_id),
                ),
            )
        )
        return ahead.scalar_one()

    async def ranked_score(self, key: str, member: str) -> float | None:
        result = await self.db.execute(
            select(RankedMember.score).where(
                RankedMember.key == key,
                RankedMember.member == member,
            )
        )
        return result.scalar_one_or_none()
