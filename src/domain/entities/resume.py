"""
Resume Domain Entities
Immutable editable resume document, editor settings and remote records.

Every entity serializes to the camelCase JSON shape shared with the browser
editor and the record store. ``from_json`` is lenient: partial or legacy
payloads are normalized into the full canonical shape instead of failing.
"""
import json
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, Optional, Tuple
from uuid import uuid4

from ..enums import FontFamily, FontSize, ResumeSection


def new_entry_id() -> str:
    """Generate a stable identifier for a list entry"""
    return str(uuid4())


def has_text(value: str) -> bool:
    return value.strip() != ""


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _entry_id(value: Any) -> str:
    if isinstance(value, str) and value.strip() != "":
        return value
    return new_entry_id()


def _bullets(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _objects(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass(frozen=True)
class PersonalLink:
    """Custom labeled link shown in the resume header"""

    id: str = field(default_factory=new_entry_id)
    label: str = ""
    url: str = ""

    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("label", "url")

    def has_content(self) -> bool:
        return has_text(self.label) or has_text(self.url)

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "url": self.url}

    @classmethod
    def from_json(cls, payload: Any) -> "PersonalLink":
        payload = _object(payload)
        return cls(
            id=_entry_id(payload.get("id")),
            label=_text(payload.get("label")),
            url=_text(payload.get("url")),
        )


@dataclass(frozen=True)
class PersonalInfo:
    """Resume header: name, contact details and links"""

    first_name: str = ""
    last_name: str = ""
    location: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""
    other_links: Tuple[PersonalLink, ...] = ()

    # attribute name -> JSON key
    JSON_FIELDS: ClassVar[Dict[str, str]] = {
        "first_name": "firstName",
        "last_name": "lastName",
        "location": "location",
        "phone": "phone",
        "email": "email",
        "linkedin": "linkedin",
        "github": "github",
        "website": "website",
    }

    def has_content(self) -> bool:
        if any(has_text(getattr(self, attr)) for attr in self.JSON_FIELDS):
            return True
        return any(link.has_content() for link in self.other_links)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            key: getattr(self, attr) for attr, key in self.JSON_FIELDS.items()
        }
        payload["otherLinks"] = [link.to_json() for link in self.other_links]
        return payload

    @classmethod
    def from_json(cls, payload: Any) -> "PersonalInfo":
        payload = _object(payload)
        return cls(
            other_links=tuple(
                PersonalLink.from_json(link) for link in _objects(payload.get("otherLinks"))
            ),
            **{attr: _text(payload.get(key)) for attr, key in cls.JSON_FIELDS.items()},
        )


class SectionEntryMixin:
    """Shared behavior of education, experience and project entries"""

    JSON_FIELDS: ClassVar[Dict[str, str]] = {}

    def has_content(self) -> bool:
        if any(has_text(getattr(self, attr)) for attr in self.JSON_FIELDS):
            return True
        return any(has_text(bullet) for bullet in self.bullets)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id}
        payload.update({key: getattr(self, attr) for attr, key in self.JSON_FIELDS.items()})
        payload["bullets"] = list(self.bullets)
        return payload

    @classmethod
    def from_json(cls, payload: Any):
        payload = _object(payload)
        return cls(
            id=_entry_id(payload.get("id")),
            bullets=_bullets(payload.get("bullets")),
            **{attr: _text(payload.get(key)) for attr, key in cls.JSON_FIELDS.items()},
        )


@dataclass(frozen=True)
class EducationEntry(SectionEntryMixin):
    id: str = field(default_factory=new_entry_id)
    institution: str = ""
    location: str = ""
    degree: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: Tuple[str, ...] = ()

    JSON_FIELDS: ClassVar[Dict[str, str]] = {
        "institution": "institution",
        "location": "location",
        "degree": "degree",
        "start_date": "startDate",
        "end_date": "endDate",
    }


@dataclass(frozen=True)
class ExperienceEntry(SectionEntryMixin):
    id: str = field(default_factory=new_entry_id)
    company: str = ""
    location: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: Tuple[str, ...] = ()

    JSON_FIELDS: ClassVar[Dict[str, str]] = {
        "company": "company",
        "location": "location",
        "role": "role",
        "start_date": "startDate",
        "end_date": "endDate",
    }


@dataclass(frozen=True)
class ProjectEntry(SectionEntryMixin):
    id: str = field(default_factory=new_entry_id)
    name: str = ""
    tech_stack: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: Tuple[str, ...] = ()

    JSON_FIELDS: ClassVar[Dict[str, str]] = {
        "name": "name",
        "tech_stack": "techStack",
        "start_date": "startDate",
        "end_date": "endDate",
    }


SECTION_ENTRY_TYPES = {
    ResumeSection.EDUCATION: EducationEntry,
    ResumeSection.EXPERIENCE: ExperienceEntry,
    ResumeSection.PROJECTS: ProjectEntry,
}


@dataclass(frozen=True)
class TechnicalSkills:
    """Categorized technical skills, each a free-text list"""

    languages: str = ""
    frameworks: str = ""
    developer_tools: str = ""
    libraries: str = ""

    JSON_FIELDS: ClassVar[Dict[str, str]] = {
        "languages": "languages",
        "frameworks": "frameworks",
        "developer_tools": "developerTools",
        "libraries": "libraries",
    }

    def has_content(self) -> bool:
        return any(has_text(getattr(self, attr)) for attr in self.JSON_FIELDS)

    def to_json(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in self.JSON_FIELDS.items()}

    @classmethod
    def from_json(cls, payload: Any) -> "TechnicalSkills":
        payload = _object(payload)
        return cls(**{attr: _text(payload.get(key)) for attr, key in cls.JSON_FIELDS.items()})


@dataclass(frozen=True)
class ResumeData:
    """The editable resume document"""

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    education: Tuple[EducationEntry, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    projects: Tuple[ProjectEntry, ...] = ()
    technical_skills: TechnicalSkills = field(default_factory=TechnicalSkills)

    def entries(self, section: ResumeSection) -> tuple:
        return getattr(self, ResumeSection(section).value)

    def with_entries(self, section: ResumeSection, entries: tuple) -> "ResumeData":
        return replace(self, **{ResumeSection(section).value: tuple(entries)})

    def has_content(self) -> bool:
        if self.personal_info.has_content() or self.technical_skills.has_content():
            return True
        return any(
            entry.has_content()
            for section in ResumeSection
            for entry in self.entries(section)
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_json(),
            "experience": [entry.to_json() for entry in self.experience],
            "education": [entry.to_json() for entry in self.education],
            "projects": [entry.to_json() for entry in self.projects],
            "technicalSkills": self.technical_skills.to_json(),
        }

    def serialize(self) -> str:
        """Canonical JSON text used to compare against the last persisted copy"""
        return json.dumps(self.to_json(), separators=(",", ":"))

    @classmethod
    def from_json(cls, payload: Any) -> "ResumeData":
        """Normalize any partially-shaped or legacy payload into the canonical shape"""
        if not isinstance(payload, dict):
            return cls()

        raw_skills = payload.get("technicalSkills")
        if isinstance(raw_skills, dict):
            technical_skills = TechnicalSkills.from_json(raw_skills)
        else:
            # Legacy documents stored a flat skills list
            legacy = payload.get("skills")
            languages = ", ".join(s for s in legacy if isinstance(s, str)) if isinstance(legacy, list) else ""
            technical_skills = TechnicalSkills(languages=languages)

        return cls(
            personal_info=PersonalInfo.from_json(payload.get("personalInfo")),
            education=tuple(EducationEntry.from_json(e) for e in _objects(payload.get("education"))),
            experience=tuple(ExperienceEntry.from_json(e) for e in _objects(payload.get("experience"))),
            projects=tuple(ProjectEntry.from_json(e) for e in _objects(payload.get("projects"))),
            technical_skills=technical_skills,
        )


@dataclass(frozen=True)
class ResumeSettings:
    """Presentation-only settings; never counted as resume content"""

    font_family: FontFamily = FontFamily.TIMES
    font_size: FontSize = FontSize.MEDIUM
    show_photo: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "showPhoto": self.show_photo,
            "fontSize": self.font_size.value,
            "fontFamily": self.font_family.value,
        }

    @classmethod
    def from_json(cls, payload: Any) -> "ResumeSettings":
        """Merge stored settings over the defaults, ignoring unknown values"""
        payload = _object(payload)
        defaults = cls()
        try:
            font_family = FontFamily(payload.get("fontFamily", defaults.font_family))
        except ValueError:
            font_family = defaults.font_family
        try:
            font_size = FontSize(payload.get("fontSize", defaults.font_size))
        except ValueError:
            font_size = defaults.font_size
        show_photo = payload.get("showPhoto")
        return cls(
            font_family=font_family,
            font_size=font_size,
            show_photo=show_photo if isinstance(show_photo, bool) else defaults.show_photo,
        )


@dataclass(frozen=True)
class EditorState:
    """Unit round-tripped to local storage: document, settings and photo"""

    data: ResumeData = field(default_factory=ResumeData)
    settings: ResumeSettings = field(default_factory=ResumeSettings)
    photo: str = ""

    def is_empty_scaffold(self) -> bool:
        """True when the document has its canonical shape but no user-entered content"""
        return not (self.data.has_content() or has_text(self.photo))

    def to_json(self) -> Dict[str, Any]:
        return {
            "data": self.data.to_json(),
            "settings": self.settings.to_json(),
            "photo": self.photo,
        }

    def serialize(self) -> str:
        return json.dumps(self.to_json())

    def to_pdf_request(self) -> Dict[str, Any]:
        """Render payload; the photo is only sent when it is shown and set"""
        payload: Dict[str, Any] = {
            "data": self.data.to_json(),
            "settings": self.settings.to_json(),
        }
        if self.settings.show_photo and has_text(self.photo):
            payload["photo"] = self.photo
        return payload

    def download_filename(self) -> str:
        first_name = self.data.personal_info.first_name.strip()
        last_name = self.data.personal_info.last_name.strip()
        if first_name and last_name:
            return f"{first_name}_{last_name}_Resume.pdf"
        return "Resume.pdf"

    @classmethod
    def from_json(cls, payload: Any) -> "EditorState":
        payload = _object(payload)
        return cls(
            data=ResumeData.from_json(payload.get("data")),
            settings=ResumeSettings.from_json(payload.get("settings")),
            photo=_text(payload.get("photo")),
        )


@dataclass(frozen=True)
class ResumeMetadata:
    """Remote record summary as returned by the list endpoint"""

    id: str
    title: str = ""
    template_id: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ResumeMetadata":
        return cls(
            id=str(payload["id"]),
            title=_text(payload.get("title")),
            template_id=_text(payload.get("templateId")),
            created_at=_text(payload.get("createdAt")),
            updated_at=_text(payload.get("updatedAt")),
        )


@dataclass(frozen=True)
class ResumeRecord(ResumeMetadata):
    """Remote authoritative resume owned by exactly one user"""

    data: ResumeData = field(default_factory=ResumeData)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ResumeRecord":
        metadata = ResumeMetadata.from_json(payload)
        return cls(
            id=metadata.id,
            title=metadata.title,
            template_id=metadata.template_id,
            created_at=metadata.created_at,
            updated_at=metadata.updated_at,
            data=ResumeData.from_json(payload.get("data")),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "templateId": self.template_id,
            "data": self.data.to_json(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def load_editor_state(raw: Optional[str]) -> Optional[EditorState]:
    """Parse a stored EditorState; None when absent, empty state when corrupt"""
    if raw is None or raw == "":
        return None
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return EditorState()
    if not isinstance(payload, dict):
        return EditorState()
    return EditorState.from_json(payload)
