"""operations.py
Pure edit operations on a ResumeDocument.

Every function returns a new ResumeDocument (or the unchanged input for a no-op)
and never mutates its argument. Experience and education rows are addressed by
id; skills are addressed by position.
"""
from dataclasses import fields, replace
from typing import Any, Callable, Iterable, Tuple, Union

from follio.exceptions import InvalidFieldValueError, UnknownFieldError
from follio.models import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ResumeDocument,
    generate_entry_id,
)

IdFactory = Callable[[Iterable[str]], str]

PROFILE_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(Profile))
EXPERIENCE_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(ExperienceEntry) if f.name != "id"
)
EDUCATION_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(EducationEntry) if f.name != "id"
)


def _check_field(section: str, field_name: str, allowed: Tuple[str, ...]) -> None:
    if field_name not in allowed:
        raise UnknownFieldError(section, field_name, allowed)


def _check_text(section: str, field_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFieldValueError(section, field_name, value, expected="a string")
    return value


def _as_highlights(value: Any) -> Tuple[str, ...]:
    # A single string is one highlight, not a sequence of characters
    if isinstance(value, str):
        return (value,)
    try:
        highlights = tuple(value)
    except TypeError:
        raise InvalidFieldValueError("experience", "highlights", value, expected="a list of strings")
    if not all(isinstance(h, str) for h in highlights):
        raise InvalidFieldValueError("experience", "highlights", value, expected="a list of strings")
    return highlights


# --------------------------------------------------------------
# PROFILE
# --------------------------------------------------------------
def set_profile_field(doc: ResumeDocument, field_name: str, value: str) -> ResumeDocument:
    """
    Replace one scalar profile attribute.

    No format validation is applied; email and phone are free text here.

    Raises:
        UnknownFieldError: If `field_name` is not a Profile attribute.
        InvalidFieldValueError: If `value` is not a string.
    """
    _check_field("profile", field_name, PROFILE_FIELDS)
    value = _check_text("profile", field_name, value)
    return replace(doc, profile=replace(doc.profile, **{field_name: value}))


# --------------------------------------------------------------
# EXPERIENCE
# --------------------------------------------------------------
def add_experience(doc: ResumeDocument, id_factory: IdFactory = generate_entry_id) -> ResumeDocument:
    """Append an empty ExperienceEntry with a fresh id."""
    new_id = id_factory(e.id for e in doc.experience)
    return replace(doc, experience=doc.experience + (ExperienceEntry(id=new_id),))


def update_experience(
    doc: ResumeDocument,
    entry_id: str,
    field_name: str,
    value: Union[str, Iterable[str]],
) -> ResumeDocument:
    """
    Set one field of the experience entry with `entry_id`.

    `highlights` accepts any iterable of strings; a single string becomes one
    highlight. Other fields take a string. An unknown `entry_id` is a no-op.

    Raises:
        UnknownFieldError: If `field_name` is not an editable ExperienceEntry field.
        InvalidFieldValueError: If `value` has the wrong type for `field_name`.
    """
    _check_field("experience", field_name, EXPERIENCE_FIELDS)
    if field_name == "highlights":
        value = _as_highlights(value)
    else:
        value = _check_text("experience", field_name, value)
    if not any(e.id == entry_id for e in doc.experience):
        return doc
    return replace(doc, experience=tuple(
        replace(e, **{field_name: value}) if e.id == entry_id else e
        for e in doc.experience
    ))


def remove_experience(doc: ResumeDocument, entry_id: str) -> ResumeDocument:
    """Remove the experience entry with `entry_id`. Unknown ids are a no-op."""
    if not any(e.id == entry_id for e in doc.experience):
        return doc
    return replace(doc, experience=tuple(e for e in doc.experience if e.id != entry_id))


# --------------------------------------------------------------
# EDUCATION
# --------------------------------------------------------------
def add_education(doc: ResumeDocument, id_factory: IdFactory = generate_entry_id) -> ResumeDocument:
    """Append an empty EducationEntry with a fresh id."""
    new_id = id_factory(e.id for e in doc.education)
    return replace(doc, education=doc.education + (EducationEntry(id=new_id),))


def update_education(doc: ResumeDocument, entry_id: str, field_name: str, value: str) -> ResumeDocument:
    """
    Set one field of the education entry with `entry_id`. Unknown ids are a no-op.

    Raises:
        UnknownFieldError: If `field_name` is not an editable EducationEntry field.
        InvalidFieldValueError: If `value` is not a string.
    """
    _check_field("education", field_name, EDUCATION_FIELDS)
    value = _check_text("education", field_name, value)
    if not any(e.id == entry_id for e in doc.education):
        return doc
    return replace(doc, education=tuple(
        replace(e, **{field_name: value}) if e.id == entry_id else e
        for e in doc.education
    ))


def remove_education(doc: ResumeDocument, entry_id: str) -> ResumeDocument:
    """Remove the education entry with `entry_id`. Unknown ids are a no-op."""
    if not any(e.id == entry_id for e in doc.education):
        return doc
    return replace(doc, education=tuple(e for e in doc.education if e.id != entry_id))


# --------------------------------------------------------------
# SKILLS
# --------------------------------------------------------------
def add_skill(doc: ResumeDocument, text: str) -> ResumeDocument:
    """Append `text` stripped of surrounding whitespace; blank text is a no-op."""
    skill = _check_text("skills", "text", text).strip()
    if not skill:
        return doc
    return replace(doc, skills=doc.skills + (skill,))


def remove_skill_at(doc: ResumeDocument, index: int) -> ResumeDocument:
    """
    Remove the skill at `index`.

    Indices outside `0 <= index < len(skills)` are a no-op. Negative indices are
    treated as out of range rather than counting from the end.
    """
    if not 0 <= index < len(doc.skills):
        return doc
    return replace(doc, skills=doc.skills[:index] + doc.skills[index + 1:])
