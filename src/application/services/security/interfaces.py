"""
Security Service Interfaces
Service-to-service request authentication
"""
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Union


class IServiceRequestSigner(ABC):
    """Signs outbound requests to services that verify their caller"""

    @abstractmethod
    def sign(
        self,
        method: str,
        path: str,
        body: Union[str, bytes],
        timestamp: Optional[int] = None,
        nonce: Optional[str] = None
    ) -> Dict[str, str]:
        """Return authentication headers for the request"""
        pass

    @abstractmethod
    def verify(
        self,
        headers: Mapping[str, str],
        method: str,
        path: str,
        body: Union[str, bytes],
        now: Optional[int] = None
    ) -> str:
        """Verify inbound authentication headers and return the caller's service id"""
        pass
