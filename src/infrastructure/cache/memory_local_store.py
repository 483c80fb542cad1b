"""
In-Memory Local Store
Process-local ILocalStore for development and tests
"""
from typing import Dict, Optional

from application.repositories.interfaces import ILocalStore


class InMemoryLocalStore(ILocalStore):
    """Dictionary-backed local store"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
