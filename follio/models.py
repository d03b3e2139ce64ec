"""models.py
Holds standardized data models used across the upload, review and persistence flow.

`ResumeDocument` is an immutable value type. Edits go through
`follio.document.operations`, which return a new instance per change.
"""
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple
from dataclasses import dataclass, field, fields, replace
import uuid

SectionName = Literal["profile", "experience", "education", "skills"]
SECTION_NAMES: Tuple[str, ...] = ("profile", "experience", "education", "skills")

PageName = Literal["login", "upload", "review", "dashboard"]


def generate_entry_id(existing_ids: Iterable[str] = ()) -> str:
    """Return a new opaque id that does not collide with `existing_ids`."""
    taken = set(existing_ids)
    new_id = uuid.uuid4().hex
    while new_id in taken:
        new_id = uuid.uuid4().hex
    return new_id


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class Profile:
    """
    Scalar contact section of a resume.

    Attributes:
        name (str): Full name of the individual represented by the resume.
        headline (str): Short professional title, e.g. "Senior Software Developer".
        location (str): Free-form location, e.g. "San Francisco, CA".
        email (str): Email address. Format is not enforced here.
        phone (str): Phone number. Format is not enforced here.
    """
    name: str = ""
    headline: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        data = data if isinstance(data, dict) else {}
        return cls(**{f.name: _as_str(data.get(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class ExperienceEntry:
    """
    A single row of the experience section.

    `end_date` is an empty string while the role is current ("Present").
    """
    id: str
    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    highlights: Tuple[str, ...] = ()

    @property
    def is_current(self) -> bool:
        return self.end_date == ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "company": self.company,
            "role": self.role,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "highlights": list(self.highlights),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            id=_as_str(data.get("id")),
            company=_as_str(data.get("company")),
            role=_as_str(data.get("role")),
            start_date=_as_str(data.get("startDate")),
            end_date=_as_str(data.get("endDate")),
            highlights=tuple(h for h in _as_list(data.get("highlights")) if isinstance(h, str)),
        )


@dataclass(frozen=True)
class EducationEntry:
    """A single row of the education section."""
    id: str
    school: str = ""
    degree: str = ""
    start_date: str = ""
    end_date: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "school": self.school,
            "degree": self.degree,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(
            id=_as_str(data.get("id")),
            school=_as_str(data.get("school")),
            degree=_as_str(data.get("degree")),
            start_date=_as_str(data.get("startDate")),
            end_date=_as_str(data.get("endDate")),
        )


def _unique_ids(entries: List[Any]) -> List[Any]:
    """Replace missing or repeated ids so every id in the sequence is unique."""
    seen = set()
    result = []
    all_ids = {e.id for e in entries}
    for entry in entries:
        if not entry.id or entry.id in seen:
            new_id = generate_entry_id(all_ids | seen)
            entry = replace(entry, id=new_id)
        seen.add(entry.id)
        result.append(entry)
    return result


@dataclass(frozen=True)
class ResumeDocument:
    """
    Structured resume record for one account.

    Attributes:
        profile (Profile): Scalar contact details.
        experience (Tuple[ExperienceEntry, ...]): Ordered work history, ids unique.
        education (Tuple[EducationEntry, ...]): Ordered education history, ids unique.
        skills (Tuple[str, ...]): Ordered skill tags. Duplicates are allowed.
    """
    profile: Profile = field(default_factory=Profile)
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ResumeDocument":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted JSON shape (camelCase keys, lists in display order)."""
        return {
            "profile": self.profile.to_dict(),
            "experience": [e.to_dict() for e in self.experience],
            "education": [e.to_dict() for e in self.education],
            "skills": list(self.skills),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ResumeDocument":
        """
        Build a document from its persisted shape.

        Loading is lenient: missing keys fall back to empty values, non-dict rows
        are dropped, and missing or duplicate entry ids are replaced with fresh
        unique ids so the loaded document always satisfies the id invariant.
        """
        data = data if isinstance(data, dict) else {}
        experience = [
            ExperienceEntry.from_dict(row)
            for row in _as_list(data.get("experience")) if isinstance(row, dict)
        ]
        education = [
            EducationEntry.from_dict(row)
            for row in _as_list(data.get("education")) if isinstance(row, dict)
        ]
        return cls(
            profile=Profile.from_dict(data.get("profile")),
            experience=tuple(_unique_ids(experience)),
            education=tuple(_unique_ids(education)),
            skills=tuple(s for s in _as_list(data.get("skills")) if isinstance(s, str)),
        )


@dataclass(frozen=True)
class UploadedFile:
    """
    A candidate file handed in at the upload step.

    Attributes:
        name (str): Original file name, e.g. "resume.pdf".
        media_type (str): Declared media type, e.g. "application/pdf".
        size_bytes (int): Size of the file in bytes.
        content (bytes): Raw file bytes. May be empty when only metadata is known.
    """
    name: str
    media_type: str
    size_bytes: int
    content: bytes = field(default=b"", repr=False)

    @classmethod
    def from_bytes(cls, name: str, media_type: str, content: bytes) -> "UploadedFile":
        return cls(name=name, media_type=media_type, size_bytes=len(content), content=content)


@dataclass(frozen=True)
class Identity:
    """An authenticated account as reported by the identity provider."""
    id: str
    email: str
    name: str = ""

    def __post_init__(self):
        if not self.name:
            object.__setattr__(self, "name", self.email.split("@")[0])
