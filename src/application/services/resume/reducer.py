"""
Resume Reducer
Pure state transitions over the editor state.

Every action except LoadState/Reset touches only the addressed field or list
item; everything else is shared with the input state. Index-addressed actions
that point past the end of a list return the input state unchanged.
"""
from dataclasses import replace
from typing import Callable, Dict, Iterable, Type

from domain.entities import EditorState, PersonalInfo, PersonalLink, ResumeData, TechnicalSkills
from domain.entities.resume import SECTION_ENTRY_TYPES
from domain.enums import FontFamily, FontSize, ResumeSection

from .actions import (
    AddBullet,
    AddEntry,
    AddPersonalLink,
    ClearPhoto,
    LoadState,
    RemoveBullet,
    RemoveEntry,
    RemovePersonalLink,
    Reset,
    ResumeAction,
    SetFontFamily,
    SetFontSize,
    SetPhoto,
    SetShowPhoto,
    UpdateBullet,
    UpdateEntryField,
    UpdatePersonalInfo,
    UpdatePersonalLink,
    UpdateTechnicalSkill,
)


def _in_range(items: tuple, index: int) -> bool:
    return 0 <= index < len(items)


def _replace_at(items: tuple, index: int, item) -> tuple:
    return items[:index] + (item,) + items[index + 1:]


def _remove_at(items: tuple, index: int) -> tuple:
    return items[:index] + items[index + 1:]


def _require_field(field: str, allowed: Iterable[str], target: str) -> None:
    if field not in allowed:
        raise ValueError(f"Unknown {target} field: {field}")


def _with_data(state: EditorState, data: ResumeData) -> EditorState:
    return replace(state, data=data)


def _with_links(state: EditorState, links: tuple) -> EditorState:
    info = replace(state.data.personal_info, other_links=links)
    return _with_data(state, replace(state.data, personal_info=info))


def _with_entries(state: EditorState, section: ResumeSection, entries: tuple) -> EditorState:
    return _with_data(state, state.data.with_entries(section, entries))


def _update_personal_info(state: EditorState, action: UpdatePersonalInfo) -> EditorState:
    _require_field(action.field, PersonalInfo.JSON_FIELDS, "personal info")
    info = replace(state.data.personal_info, **{action.field: action.value})
    return _with_data(state, replace(state.data, personal_info=info))


def _add_personal_link(state: EditorState, action: AddPersonalLink) -> EditorState:
    return _with_links(state, state.data.personal_info.other_links + (PersonalLink(),))


def _update_personal_link(state: EditorState, action: UpdatePersonalLink) -> EditorState:
    _require_field(action.field, PersonalLink.EDITABLE_FIELDS, "personal link")
    links = state.data.personal_info.other_links
    if not _in_range(links, action.index):
        return state
    link = replace(links[action.index], **{action.field: action.value})
    return _with_links(state, _replace_at(links, action.index, link))


def _remove_personal_link(state: EditorState, action: RemovePersonalLink) -> EditorState:
    links = state.data.personal_info.other_links
    if not _in_range(links, action.index):
        return state
    return _with_links(state, _remove_at(links, action.index))


def _add_entry(state: EditorState, action: AddEntry) -> EditorState:
    section = ResumeSection(action.section)
    entry_type = SECTION_ENTRY_TYPES[section]
    return _with_entries(state, section, state.data.entries(section) + (entry_type(),))


def _update_entry_field(state: EditorState, action: UpdateEntryField) -> EditorState:
    section = ResumeSection(action.section)
    _require_field(action.field, SECTION_ENTRY_TYPES[section].JSON_FIELDS, f"{section.value} entry")
    entries = state.data.entries(section)
    if not _in_range(entries, action.index):
        return state
    entry = replace(entries[action.index], **{action.field: action.value})
    return _with_entries(state, section, _replace_at(entries, action.index, entry))


def _remove_entry(state: EditorState, action: RemoveEntry) -> EditorState:
    section = ResumeSection(action.section)
    entries = state.data.entries(section)
    if not _in_range(entries, action.index):
        return state
    return _with_entries(state, section, _remove_at(entries, action.index))


def _add_bullet(state: EditorState, action: AddBullet) -> EditorState:
    section = ResumeSection(action.section)
    entries = state.data.entries(section)
    if not _in_range(entries, action.index):
        return state
    entry = entries[action.index]
    entry = replace(entry, bullets=entry.bullets + ("",))
    return _with_entries(state, section, _replace_at(entries, action.index, entry))


def _update_bullet(state: EditorState, action: UpdateBullet) -> EditorState:
    section = ResumeSection(action.section)
    entries = state.data.entries(section)
    if not _in_range(entries, action.index):
        return state
    entry = entries[action.index]
    if not _in_range(entry.bullets, action.bullet_index):
        return state
    bullets = _replace_at(entry.bullets, action.bullet_index, action.value)
    return _with_entries(
        state, section, _replace_at(entries, action.index, replace(entry, bullets=bullets))
    )


def _remove_bullet(state: EditorState, action: RemoveBullet) -> EditorState:
    section = ResumeSection(action.section)
    entries = state.data.entries(section)
    if not _in_range(entries, action.index):
        return state
    entry = entries[action.index]
    if not _in_range(entry.bullets, action.bullet_index):
        return state
    bullets = _remove_at(entry.bullets, action.bullet_index)
    return _with_entries(
        state, section, _replace_at(entries, action.index, replace(entry, bullets=bullets))
    )


def _update_technical_skill(state: EditorState, action: UpdateTechnicalSkill) -> EditorState:
    _require_field(action.field, TechnicalSkills.JSON_FIELDS, "technical skills")
    skills = replace(state.data.technical_skills, **{action.field: action.value})
    return _with_data(state, replace(state.data, technical_skills=skills))


def _set_font_family(state: EditorState, action: SetFontFamily) -> EditorState:
    return replace(state, settings=replace(state.settings, font_family=FontFamily(action.value)))


def _set_font_size(state: EditorState, action: SetFontSize) -> EditorState:
    return replace(state, settings=replace(state.settings, font_size=FontSize(action.value)))


def _set_show_photo(state: EditorState, action: SetShowPhoto) -> EditorState:
    return replace(state, settings=replace(state.settings, show_photo=bool(action.value)))


def _set_photo(state: EditorState, action: SetPhoto) -> EditorState:
    return replace(state, photo=action.value)


def _clear_photo(state: EditorState, action: ClearPhoto) -> EditorState:
    return replace(state, photo="")


def _load_state(state: EditorState, action: LoadState) -> EditorState:
    return action.value


def _reset(state: EditorState, action: Reset) -> EditorState:
    return EditorState()


_HANDLERS: Dict[Type[ResumeAction], Callable[[EditorState, ResumeAction], EditorState]] = {
    UpdatePersonalInfo: _update_personal_info,
    AddPersonalLink: _add_personal_link,
    UpdatePersonalLink: _update_personal_link,
    RemovePersonalLink: _remove_personal_link,
    AddEntry: _add_entry,
    UpdateEntryField: _update_entry_field,
    RemoveEntry: _remove_entry,
    AddBullet: _add_bullet,
    UpdateBullet: _update_bullet,
    RemoveBullet: _remove_bullet,
    UpdateTechnicalSkill: _update_technical_skill,
    SetFontFamily: _set_font_family,
    SetFontSize: _set_font_size,
    SetShowPhoto: _set_show_photo,
    SetPhoto: _set_photo,
    ClearPhoto: _clear_photo,
    LoadState: _load_state,
    Reset: _reset,
}


def resume_reducer(state: EditorState, action: ResumeAction) -> EditorState:
    """Apply one action to the editor state and return the next state"""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
