"""Local store implementations"""

from .memory_local_store import InMemoryLocalStore
from .redis_local_store import RedisLocalStore
__all__ = ["InMemoryLocalStore", "RedisLocalStore"]
