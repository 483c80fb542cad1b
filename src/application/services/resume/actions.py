"""
Resume Editor Actions
Immutable commands accepted by the resume reducer
"""
from dataclasses import dataclass

from domain.entities import EditorState
from domain.enums import FontFamily, FontSize, ResumeSection


class ResumeAction:
    """Marker base class for reducer actions"""
    pass


@dataclass(frozen=True)
class UpdatePersonalInfo(ResumeAction):
    field: str
    value: str


@dataclass(frozen=True)
class AddPersonalLink(ResumeAction):
    pass


@dataclass(frozen=True)
class UpdatePersonalLink(ResumeAction):
    index: int
    field: str
    value: str


@dataclass(frozen=True)
class RemovePersonalLink(ResumeAction):
    index: int


@dataclass(frozen=True)
class AddEntry(ResumeAction):
    section: ResumeSection


@dataclass(frozen=True)
class UpdateEntryField(ResumeAction):
    section: ResumeSection
    index: int
    field: str
    value: str


@dataclass(frozen=True)
class RemoveEntry(ResumeAction):
    section: ResumeSection
    index: int


@dataclass(frozen=True)
class AddBullet(ResumeAction):
    section: ResumeSection
    index: int


@dataclass(frozen=True)
class UpdateBullet(ResumeAction):
    section: ResumeSection
    index: int
    bullet_index: int
    value: str


@dataclass(frozen=True)
class RemoveBullet(ResumeAction):
    section: ResumeSection
    index: int
    bullet_index: int


@dataclass(frozen=True)
class UpdateTechnicalSkill(ResumeAction):
    field: str
    value: str


@dataclass(frozen=True)
class SetFontFamily(ResumeAction):
    value: FontFamily


@dataclass(frozen=True)
class SetFontSize(ResumeAction):
    value: FontSize


@dataclass(frozen=True)
class SetShowPhoto(ResumeAction):
    value: bool


@dataclass(frozen=True)
class SetPhoto(ResumeAction):
    value: str


@dataclass(frozen=True)
class ClearPhoto(ResumeAction):
    pass


@dataclass(frozen=True)
class LoadState(ResumeAction):
    value: EditorState


@dataclass(frozen=True)
class Reset(ResumeAction):
    pass
