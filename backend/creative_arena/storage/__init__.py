from creative_arena.storage.base import RecordStore
from creative_arena.storage.memory import InMemoryRecordStore
from creative_arena.storage.sql import SqlRecordStore

__all__ = ['RecordStore', 'InMemoryRecordStore', 'SqlRecordStore', 'build_store']


def build_store(backend: str) -> RecordStore:
    if backend == 'memory':
        return InMemoryRecordStore()
    if backend == 'sql':
        return SqlRecordStore()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
