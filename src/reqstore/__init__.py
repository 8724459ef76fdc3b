"""
Public surface for reqstore.
Importing this module does **not** touch the database; call
`reqstore.init_store(engine)` during host start-up.
"""

from .bootstrap import init_store, store_from_url
from .core.auth import OwnerGrant
from .core.record import UINT64_MAX, ServiceRequest
from .errors import RecordStoreError, StorageExhausted, Unauthorized
from .persistence.store import RecordStore

__all__ = [
    "OwnerGrant",
    "RecordStore",
    "RecordStoreError",
    "ServiceRequest",
    "StorageExhausted",
    "UINT64_MAX",
    "Unauthorized",
    "init_store",
    "store_from_url",
]
