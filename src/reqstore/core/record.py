"""
ServiceRequest snapshot – *pure Pydantic* (no SQLAlchemy imports).

A snapshot is detached from the session that produced it; mutating the
store never changes a snapshot already handed out.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

UINT64_MAX = 2**64 - 1

UInt64 = Annotated[int, Field(ge=0, le=UINT64_MAX)]


def check_uint64(name: str, value: int) -> int:
    """Reject anything that is not an int in the unsigned 64-bit range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"{name}={value} is outside the uint64 range")
    return value


class ServiceRequest(BaseModel):
    """One owner's latest service request."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    primary_key: UInt64
    owner: UInt64
    title: str = ""
    description: str = ""
    time: str = ""
    last_updated: UInt64 = 0
