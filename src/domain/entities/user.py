"""
User Domain Entity
Identity returned by the session accessor
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated user owning the resumes being edited - immutable"""

    id: str
    email: Optional[str] = None
