"""split_sections.py
Splits raw resume text into headed sections.
"""
import re
from typing import Dict, List

# Lowercase heading line (trailing colon stripped) -> section key. Matched as the whole line.
SECTION_HEADING_KEYWORDS = {
    "work and research experience": "experience",
    "professional experience": "experience",
    "work experience": "experience",
    "employment history": "experience",
    "work history": "experience",
    "experience": "experience",
    "education": "education",
    "academic background": "education",
    "technical skills": "skills",
    "core competencies": "skills",
    "competencies": "skills",
    "technologies": "skills",
    "skills": "skills",
    "projects": "other",
    "personal projects": "other",
    "publications": "other",
    "achievements": "other",
    "awards and honors": "other",
    "certifications": "other",
    "volunteer experience": "other",
    "summary": "other",
    "professional summary": "other",
    "career summary": "other",
    "objective": "other",
    "interests": "other",
}

SECTION_KEYS = ["profile", "experience", "education", "skills", "other"]


def _heading_section(line: str) -> str | None:
    """Return the section key if `line` reads as a section heading, else None."""
    text = re.sub(r"[:\s]+$", "", line.strip()).lower()
    if not text or len(text) > 40:
        return None
    return SECTION_HEADING_KEYWORDS.get(text)


def split_sections(text: str) -> Dict[str, List[str]]:
    """
    Group the non-empty lines of `text` under the section they belong to.

    Lines before the first recognised heading belong to "profile". Headings
    themselves are dropped. Repeated headings for the same section are merged
    in reading order.

    Args:
        text (str): Full resume text, one line per visual line.

    Returns:
        Dict[str, List[str]]: A list of stripped lines for every key in SECTION_KEYS.
    """
    sections: Dict[str, List[str]] = {key: [] for key in SECTION_KEYS}
    current = "profile"
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        heading = _heading_section(line)
        if heading is not None:
            current = heading
            continue
        sections[current].append(line)
    return sections
