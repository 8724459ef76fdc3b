"""
Single-table schema: one row per owner, plus the unique owner index.
"""

from sqlalchemy import BigInteger, Column, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()

_SHIFT = 2**63


class UInt64(TypeDecorator):
    """uint64 stored in a signed BIGINT, shifted so ordering is preserved."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else value - _SHIFT

    def process_result_value(self, value, dialect):
        return None if value is None else value + _SHIFT


class RequestRow(Base):
    """Latest service request of one owner."""

    __tablename__ = "service_requests"

    prim_key = Column(UInt64, primary_key=True, autoincrement=False)
    # secondary index: owner -> prim_key
    owner = Column(UInt64, nullable=False, unique=True, index=True)
    title = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    time = Column(Text, nullable=False, default="")
    last_updated = Column(UInt64, nullable=False)
