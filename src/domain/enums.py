"""
Domain Enums
Presentation and section enumerations for the resume editor
"""
from enum import Enum


class FontFamily(str, Enum):
    """Font families supported by the PDF renderer"""
    TIMES = "times"
    GARAMOND = "garamond"
    CALIBRI = "calibri"
    ARIAL = "arial"


class FontSize(str, Enum):
    """Font size presets"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ResumeSection(str, Enum):
    """Repeated resume sections made of id-keyed entries"""
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"


class SyncPhase(str, Enum):
    """Lifecycle of a cloud sync controller"""
    UNINITIALIZED = "uninitialized"
    HYDRATING = "hydrating"
    READY = "ready"
