"""dashboard.py
Read-only summary of a saved ResumeDocument for the dashboard page.
"""
from dataclasses import dataclass, field
from typing import List

from follio.models import Profile, ResumeDocument

PRESENT_LABEL = "Present"


@dataclass
class DashboardEntry:
    """One experience or education row as displayed on the dashboard."""
    title: str
    subtitle: str
    date_range: str
    highlights: List[str] = field(default_factory=list)


@dataclass
class DashboardSummary:
    """
    Stats and rows shown on the dashboard.

    Attributes:
        profile (Profile): Contact details of the saved document.
        experience_count (int): Number of experience entries.
        education_count (int): Number of education entries.
        skills_count (int): Number of skills.
        experience (List[DashboardEntry]): Experience rows, role first.
        education (List[DashboardEntry]): Education rows, degree first.
        skills (List[str]): Skills in display order.
    """
    profile: Profile
    experience_count: int
    education_count: int
    skills_count: int
    experience: List[DashboardEntry] = field(default_factory=list)
    education: List[DashboardEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)


def format_date_range(start_date: str, end_date: str, open_ended: bool) -> str:
    """
    Format "start - end" for display.

    For open-ended rows (experience) an empty end date reads "Present";
    otherwise an empty end date stays empty.
    """
    end = end_date or (PRESENT_LABEL if open_ended else "")
    return f"{start_date} - {end}".strip(" -")


def build_dashboard_summary(document: ResumeDocument) -> DashboardSummary:
    """Build the DashboardSummary for `document`."""
    return DashboardSummary(
        profile=document.profile,
        experience_count=len(document.experience),
        education_count=len(document.education),
        skills_count=len(document.skills),
        experience=[
            DashboardEntry(
                title=e.role,
                subtitle=e.company,
                date_range=format_date_range(e.start_date, e.end_date, open_ended=True),
                highlights=list(e.highlights),
            )
            for e in document.experience
        ],
        education=[
            DashboardEntry(
                title=e.degree,
                subtitle=e.school,
                date_range=format_date_range(e.start_date, e.end_date, open_ended=False),
            )
            for e in document.education
        ],
        skills=list(document.skills),
    )
