"""
Persistence of the battle state: key-value stores and the save gateway.
"""

from .gateway import PersistenceGateway
from .store import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PersistenceGateway",
]
