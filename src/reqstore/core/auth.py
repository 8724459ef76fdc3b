"""
Owner grants: the capability a host hands the store after it has
authenticated a caller. The store never verifies credentials itself; it
only checks that a grant exists and names the owner being written.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..errors import Unauthorized
from .record import UInt64


class OwnerGrant(BaseModel):
    owner: UInt64
    model_config = ConfigDict(frozen=True)


def require_grant(owner: int, grant: Any) -> OwnerGrant:
    """Return `grant` if it authorizes `owner`, else raise Unauthorized."""
    if not isinstance(grant, OwnerGrant) or grant.owner != owner:
        raise Unauthorized(owner)
    return grant
