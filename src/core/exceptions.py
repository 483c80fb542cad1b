"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""
from typing import List, Optional


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str, errors: Optional[List[str]] = None):
        self.field = field
        self.message = message
        self.errors = errors or [message]
        super().__init__(f"{field}: {message}")


class ConfigurationException(DomainException):
    """Required configuration is missing or invalid"""
    pass


class UpstreamUnavailableException(DomainException):
    """A downstream service could not be reached"""

    def __init__(self, service: str, message: str = "Failed to reach upstream service"):
        self.service = service
        self.message = message
        super().__init__(f"{service}: {message}")


class CloudSyncException(DomainException):
    """Saving the resume to the remote record store failed"""
    pass


class ResumeAPIError(DomainException):
    """Resume REST API returned a non-success response"""

    def __init__(self, message: str, status: int, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status = status
        self.code = code
        super().__init__(message)
