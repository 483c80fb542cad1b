"""
Resume Editor Services
Reducer, local persistence, cloud sync and the per-user editor session
"""
from abc import ABC, abstractmethod

from domain.entities import EditorState


class IResumePdfRenderer(ABC):
    """Renders the editor state into a PDF document"""

    @abstractmethod
    async def generate_pdf(self, state: EditorState) -> bytes:
        """
        Render the resume

        Returns:
            Raw PDF bytes
        """
        pass
