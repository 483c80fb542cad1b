"""
API V1 Endpoints Package
Exports routers used by main app
"""
from .resume import router as resume_router

__all__ = [
    "resume_router",
]
