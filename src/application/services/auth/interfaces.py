"""
Authentication Service Interfaces
Abstract accessor for the signed-in user
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from domain.entities import CurrentUser


class ICurrentUserProvider(ABC):
    """Resolves the user behind a request; session issuance lives elsewhere"""

    @abstractmethod
    async def get_current_user(self, request: Any) -> Optional[CurrentUser]:
        """
        Get the authenticated user for a request

        Returns:
            CurrentUser, or None for anonymous requests
        """
        pass
