"""
Error taxonomy for reqstore.

Both errors are fatal to the current call and leave the store unchanged.
"""


class RecordStoreError(Exception):
    """Base class for every error raised by the store."""


class Unauthorized(RecordStoreError):
    """The caller holds no grant for the owner it is writing as."""

    def __init__(self, owner: int):
        super().__init__(f"owner {owner} is not authorized for this request")
        self.owner = owner


class StorageExhausted(RecordStoreError):
    """The backend could not allocate a key or write the record."""
