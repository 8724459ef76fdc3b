"""
Data-access layer around the `service_requests` table.
The upsert and every lookup live here.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.auth import require_grant
from ..core.record import UINT64_MAX, ServiceRequest, check_uint64
from ..errors import StorageExhausted
from .models import RequestRow

log = logging.getLogger(__name__)


def _snapshot(row: RequestRow) -> ServiceRequest:
    return ServiceRequest(
        primary_key=row.prim_key,
        owner=row.owner,
        title=row.title,
        description=row.description,
        time=row.time,
        last_updated=row.last_updated,
    )


class RecordStore:
    """Latest service request per owner, keyed by a sequential primary key."""

    def __init__(self, engine: Engine):
        self.engine = engine
        # probe + write of one upsert form a single critical section
        self._lock = threading.Lock()

    def _new_session(self) -> Session:
        return Session(bind=self.engine)

    # ---- index probes ---------------------------------------------------
    @staticmethod
    def _find(s: Session, owner: int) -> Optional[RequestRow]:
        q = select(RequestRow).where(RequestRow.owner == owner)
        return s.execute(q).scalar_one_or_none()

    @staticmethod
    def _next_key(s: Session) -> int:
        current = s.execute(select(func.max(RequestRow.prim_key))).scalar()
        if current is None:
            return 0
        if current >= UINT64_MAX:
            raise StorageExhausted("next primary key is past the uint64 limit")
        return current + 1

    def is_new_user(self, owner: int) -> bool:
        """True iff no record carries `owner` (unique index lookup)."""
        check_uint64("owner", owner)
        with self._new_session() as s:
            q = select(RequestRow.prim_key).where(RequestRow.owner == owner)
            return s.execute(q).first() is None

    def available_primary_key(self) -> int:
        """Key the next inserted record will receive."""
        with self._new_session() as s:
            return self._next_key(s)

    # ---- writes ---------------------------------------------------------
    def submit_or_update(
        self,
        owner: int,
        title: str,
        description: str,
        time: str,
        now: int,
        *,
        grant: Any,
    ) -> ServiceRequest:
        """
        Insert the owner's request, or overwrite it if one exists.

        `grant` must be the OwnerGrant the host issued for `owner`;
        anything else raises Unauthorized before storage is touched.
        Backend failures surface as StorageExhausted with the cause chained.
        """
        check_uint64("owner", owner)
        require_grant(owner, grant)
        check_uint64("now", now)

        with self._lock:
            try:
                with self._new_session() as s, s.begin():
                    row = self._find(s, owner)
                    if row is None:
                        row = RequestRow(
                            prim_key=self._next_key(s),
                            owner=owner,
                            title=title,
                            description=description,
                            time=time,
                            last_updated=now,
                        )
                        s.add(row)
                        action = "inserted"
                    else:
                        if now < row.last_updated:
                            log.warning(
                                "Clock went backwards for owner %s: %s < %s",
                                owner,
                                now,
                                row.last_updated,
                            )
                        row.title = title
                        row.description = description
                        row.time = time
                        row.last_updated = now
                        action = "updated"
                    s.flush()
                    result = _snapshot(row)
            except SQLAlchemyError as exc:
                log.error("Failed to write request for owner %s: %s", owner, exc)
                raise StorageExhausted(
                    f"could not write request for owner {owner}"
                ) from exc

        log.info("%s request %s for owner %s", action.capitalize(), result.primary_key, owner)
        return result

    # ---- reads ----------------------------------------------------------
    def get(self, primary_key: int) -> Optional[ServiceRequest]:
        check_uint64("primary_key", primary_key)
        with self._new_session() as s:
            row = s.get(RequestRow, primary_key)
            return _snapshot(row) if row else None

    def get_by_owner(self, owner: int) -> Optional[ServiceRequest]:
        check_uint64("owner", owner)
        with self._new_session() as s:
            row = self._find(s, owner)
            return _snapshot(row) if row else None

    def records(self) -> Iterator[ServiceRequest]:
        """Yield every record in ascending primary-key order."""
        with self._new_session() as s:
            q = select(RequestRow).order_by(RequestRow.prim_key)
            yield from (_snapshot(row) for (row,) in s.execute(q))

    def count(self) -> int:
        with self._new_session() as s:
            return s.execute(select(func.count()).select_from(RequestRow)).scalar_one()
