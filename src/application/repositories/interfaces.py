"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from domain.entities import ResumeData, ResumeMetadata, ResumeRecord


class IResumeRepository(ABC):
    """Remote resume record store, scoped to the caller's identity"""

    @abstractmethod
    async def list_resumes(self) -> List[ResumeMetadata]:
        """List the current user's resumes"""
        pass

    @abstractmethod
    async def get_resume(self, resume_id: str) -> ResumeRecord:
        """Get a resume with its full document"""
        pass

    @abstractmethod
    async def create_resume(
        self,
        title: str,
        template_id: str,
        data: ResumeData
    ) -> ResumeRecord:
        """Create a new resume; the store assigns its id"""
        pass

    @abstractmethod
    async def update_resume(
        self,
        resume_id: str,
        data: Optional[ResumeData] = None,
        title: Optional[str] = None,
        template_id: Optional[str] = None
    ) -> ResumeRecord:
        """Update an existing resume"""
        pass

    async def aclose(self) -> None:
        """Release connections held by the repository"""
        pass


class ILocalStore(ABC):
    """Per-user string key/value store holding the local editor copy"""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Get stored value or None"""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value"""
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete key if present"""
        pass
