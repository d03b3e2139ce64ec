"""extract_fields.py
Heuristic extraction of ResumeDocument sections from split resume lines.
"""
import re
from typing import Dict, List, Optional, Tuple

from follio.models import EducationEntry, ExperienceEntry, Profile

COMMON_REGEX: dict = {
    # Email address: Covers standardized email format
    "email_address": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
    # Phone Number: Covers common phone formats:
    # -> `+1 123-456-7890`, `(123) 456-7890`, `123-456-7890`, `123.456.7890`, `1234567890`
    "phone_number": (
        r"(\+?\d{1,3}[\s.-]?)?"           # Optional country code
        r"(\(?\d{3}\)?[\s.-]?)"           # Area code with optional parentheses
        r"\d{3}[\s.-]?\d{4}"              # Local number
    ),
    # "San Francisco, CA" style locations
    "location": r"^[A-Z][A-Za-z .'-]+,\s*[A-Z]{2}$",
}

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|"
    r"sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DATE = rf"(?:{_MONTH}\s+\d{{4}}|\d{{4}}-\d{{2}}(?:-\d{{2}})?|\d{{1,2}}/\d{{4}}|\d{{4}})"
_END = rf"(?:{_DATE}|present|current|now)"
DATE_RANGE_REGEX = re.compile(
    rf"(?P<start>{_DATE})\s*(?:-|–|—|to)\s*(?P<end>{_END})",
    re.IGNORECASE,
)
OPEN_ENDED_WORDS = {"present", "current", "now"}

BULLET_CHARS = "•●◦▪·*-–"
SEGMENT_SPLIT_REGEX = re.compile(r"\s*(?:\||•|·|\s[-–—]\s|\s{2,})\s*")
SKILL_SPLIT_REGEX = re.compile(r"\s*[,;|•●·]\s*")

SCHOOL_KEYWORDS = ("university", "college", "school", "institute", "academy")


def _is_bullet(line: str) -> bool:
    return line[:1] in BULLET_CHARS and len(line) > 1


def _strip_bullet(line: str) -> str:
    return line.lstrip(BULLET_CHARS).strip()


def _find_date_range(line: str) -> Optional[Tuple[str, str, str]]:
    """Return (start, end, remaining_text) if `line` holds a date range."""
    match = DATE_RANGE_REGEX.search(line)
    if match is None:
        return None
    end = match.group("end")
    if end.lower() in OPEN_ENDED_WORDS:
        end = ""
    remaining = (line[:match.start()] + " " + line[match.end():]).strip(" |,-–—\t")
    return match.group("start"), end, remaining


# --------------------------------------------------------------
# PROFILE
# --------------------------------------------------------------
def extract_profile(lines: List[str]) -> Profile:
    """
    Build the Profile from the lines above the first section heading.

    The first line without an email, phone number or digits is taken as the
    name, the next such line as the headline. Contact lines are split on common
    separators to find email, phone and a "City, ST" location.
    """
    email = phone = location = ""
    free_text: List[str] = []

    for line in lines:
        for segment in SEGMENT_SPLIT_REGEX.split(line):
            segment = segment.strip()
            if not segment:
                continue
            email_match = re.search(COMMON_REGEX["email_address"], segment)
            if email_match:
                email = email or email_match.group(0)
                continue
            phone_match = re.search(COMMON_REGEX["phone_number"], segment)
            if phone_match:
                phone = phone or phone_match.group(0).strip()
                continue
            if re.match(COMMON_REGEX["location"], segment):
                location = location or segment
                continue
            if any(ch.isdigit() for ch in segment) or "/" in segment or "linkedin" in segment.lower():
                continue
            free_text.append(segment)

    name = free_text[0] if free_text else ""
    headline = free_text[1] if len(free_text) > 1 else ""
    return Profile(name=name, headline=headline, location=location, email=email, phone=phone)


# --------------------------------------------------------------
# DATED BLOCKS (EXPERIENCE / EDUCATION)
# --------------------------------------------------------------
def _group_dated_blocks(lines: List[str]) -> List[Dict]:
    """
    Group lines into blocks of {"headers", "start", "end", "bullets"}.

    A new block starts at a second date range, or at a header line that
    follows bullets of the current block.
    """
    blocks: List[Dict] = []
    current: Optional[Dict] = None

    def new_block() -> Dict:
        block = {"headers": [], "start": "", "end": "", "dated": False, "bullets": []}
        blocks.append(block)
        return block

    for line in lines:
        if _is_bullet(line):
            if current is None:
                current = new_block()
            current["bullets"].append(_strip_bullet(line))
            continue

        date_range = _find_date_range(line)
        if date_range is not None:
            start, end, remaining = date_range
            if current is None or current["dated"] or current["bullets"]:
                current = new_block()
            current["start"], current["end"], current["dated"] = start, end, True
            if remaining:
                current["headers"].append(remaining)
            continue

        if current is None or current["bullets"]:
            current = new_block()
        current["headers"].append(line)

    return [b for b in blocks if b["headers"] or b["dated"]]


def _split_header_parts(headers: List[str]) -> List[str]:
    parts: List[str] = []
    for header in headers:
        if " at " in header:
            parts.extend(p.strip() for p in header.split(" at ", 1))
        else:
            parts.extend(p for p in SEGMENT_SPLIT_REGEX.split(header) if p)
    return parts


def extract_experience(lines: List[str]) -> List[ExperienceEntry]:
    """
    Build ExperienceEntry rows from the experience section.

    The first header part is read as the role and the second as the company.
    Bullet lines become highlights. Ids are sequential ("exp-1", "exp-2", ...).
    """
    entries = []
    for index, block in enumerate(_group_dated_blocks(lines), start=1):
        parts = _split_header_parts(block["headers"])
        entries.append(ExperienceEntry(
            id=f"exp-{index}",
            role=parts[0] if parts else "",
            company=parts[1] if len(parts) > 1 else "",
            start_date=block["start"],
            end_date=block["end"],
            highlights=tuple(block["bullets"]),
        ))
    return entries


def _split_school_and_degree(parts: List[str]) -> Tuple[str, List[str]]:
    """
    Return (school, other_parts).

    "M.S. Computer Science, San Diego State University" splits at the comma;
    "University of California, Berkeley" stays whole because the text after
    the comma continues the school name.
    """
    for i, part in enumerate(parts):
        pieces = [p.strip() for p in part.split(",") if p.strip()]
        for j, piece in enumerate(pieces):
            if any(k in piece.lower() for k in SCHOOL_KEYWORDS):
                school = ", ".join(pieces[j:])
                return school, parts[:i] + pieces[:j] + parts[i + 1:]
    return "", list(parts)


def extract_education(lines: List[str]) -> List[EducationEntry]:
    """
    Build EducationEntry rows from the education section.

    A header part naming a university, college, school, institute or academy
    is the school; the first remaining part is the degree.
    """
    entries = []
    for index, block in enumerate(_group_dated_blocks(lines), start=1):
        school, others = _split_school_and_degree(_split_header_parts(block["headers"]))
        if not school and others:
            school = others.pop(0)
        entries.append(EducationEntry(
            id=f"edu-{index}",
            school=school,
            degree=others[0] if others else "",
            start_date=block["start"],
            end_date=block["end"],
        ))
    return entries


# --------------------------------------------------------------
# SKILLS
# --------------------------------------------------------------
def extract_skills(lines: List[str]) -> List[str]:
    """Split skills section lines on commas, semicolons, pipes and bullets."""
    skills = []
    for line in lines:
        line = _strip_bullet(line)
        # "Languages: Python, SQL" -> "Python, SQL"
        if ":" in line:
            line = line.split(":", 1)[1]
        skills.extend(s.strip() for s in SKILL_SPLIT_REGEX.split(line) if s.strip())
    return skills
