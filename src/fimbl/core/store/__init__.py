"""Persistent fingerprint storage.

Submodules:
    substrate -- KeyValueStore, the durable SQLite byte mapping
    tracking  -- TrackingStore, per-path transactional operations
"""

from fimbl.core.store.substrate import DB_FILENAME, KeyValueStore
from fimbl.core.store.tracking import TrackingStore, path_as_key, path_from_key

__all__ = [
    "DB_FILENAME",
    "KeyValueStore",
    "TrackingStore",
    "path_as_key",
    "path_from_key",
]
