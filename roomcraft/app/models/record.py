"""Record store tables.

The record store exposes three primitives (scalar values, unordered sets
and score-ordered sets); each one is backed by its own table.
"""

from sqlalchemy import String, Text, Float, Integer, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roomcraft.app.db.base import Base


class KeyValueRecord(Base):
    """
    Scalar key-value record.

    Attributes:
        key: Record key (e.g. ``design:{id}``)
        value: Serialized value
    """

    __tablename__ = "kv_records"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueRecord(key={self.key})>"


class SetMember(Base):
    """
    Member of an unordered string set.

    Attributes:
        id: Surrogate primary key
        key: Set key (e.g. ``user:{id}:designs``)
        member: Member value
    """

    __tablename__ = "set_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    member: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("key", "member", name="uq_set_member"),
    )

    def __repr__(self) -> str:
        return f"<SetMember(key={self.key}, member={self.member})>"


class RankedMember(Base):
    """
    Member of a score-ordered set.

    Attributes:
        id: Insertion sequence, used to order members with equal scores
        key: Ranked set key (e.g. ``leaderboard:{theme_id}``)
        member: Member value
        score: Current score
    """

    __tablename__ = "ranked_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    member: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    __table_args__ = (
        UniqueConstraint("key", "member", name="uq_ranked_member"),
        Index("idx_ranked_key_score", "key", "score"),
    )

    def __repr__(self) -> str:
        return f"<RankedMember(key={self.key}, member={self.member}, score={self.score})>"
