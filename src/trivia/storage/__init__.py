from .kv_store import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .score_store import ScoreStore

__all__ = ["FileKeyValueStore", "KeyValueStore", "MemoryKeyValueStore", "ScoreStore"]
