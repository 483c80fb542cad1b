"""Domain Entities - Core business objects"""

from .user import CurrentUser
from .resume import (
    EditorState,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    PersonalLink,
    ProjectEntry,
    ResumeData,
    ResumeMetadata,
    ResumeRecord,
    ResumeSettings,
    TechnicalSkills,
    load_editor_state,
)
__all__ = [
    "CurrentUser",
    "EditorState",
    "EducationEntry",
    "ExperienceEntry",
    "PersonalInfo",
    "PersonalLink",
    "ProjectEntry",
    "ResumeData",
    "ResumeMetadata",
    "ResumeRecord",
    "ResumeSettings",
    "TechnicalSkills",
    "load_editor_state",
]
