"""
Header User Provider
Resolves the signed-in user from headers set by the upstream auth gateway
"""
from typing import Any, Optional

from loguru import logger

from application.services.auth.interfaces import ICurrentUserProvider
from domain.entities import CurrentUser

USER_ID_HEADER = "X-User-ID"
USER_EMAIL_HEADER = "X-User-Email"


class HeaderCurrentUserProvider(ICurrentUserProvider):
    """Trusts the gateway's identity headers; a missing or blank id means anonymous"""

    async def get_current_user(self, request: Any) -> Optional[CurrentUser]:
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
        if not user_id:
            logger.debug(f"Request without {USER_ID_HEADER} header treated as anonymous")
            return None

        email = (request.headers.get(USER_EMAIL_HEADER) or "").strip()
        return CurrentUser(id=user_id, email=email or None)
