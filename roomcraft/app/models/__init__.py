"""Database models."""

from roomcraft.app.models.record import KeyValueRecord, SetMember, RankedMember

__all__ = ["KeyValueRecord", "SetMember", "RankedMember"]
