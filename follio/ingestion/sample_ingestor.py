"""sample_ingestor.py
Holds SampleIngestor, a stand-in that derives a document from the file name only.
"""
from dataclasses import replace

from follio.ingestion.ingestor import Ingestor
from follio.models import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ResumeDocument,
    UploadedFile,
)

SAMPLE_DOCUMENT = ResumeDocument(
    profile=Profile(
        name="Alex Johnson",
        headline="Senior Software Developer",
        location="San Francisco, CA",
        email="alex.johnson@example.com",
        phone="(555) 123-4567",
    ),
    experience=(
        ExperienceEntry(
            id="1",
            company="TechCorp Inc.",
            role="Senior Software Developer",
            start_date="2021-03-01",
            end_date="",
            highlights=(
                "Led development of microservices architecture",
                "Improved application performance by 40%",
                "Mentored junior developers",
            ),
        ),
        ExperienceEntry(
            id="2",
            company="StartupXYZ",
            role="Full Stack Developer",
            start_date="2019-01-15",
            end_date="2021-02-28",
            highlights=(
                "Built responsive web applications",
                "Implemented CI/CD pipelines",
                "Collaborated with design team",
            ),
        ),
    ),
    education=(
        EducationEntry(
            id="1",
            school="University of California, Berkeley",
            degree="Bachelor of Science in Computer Science",
            start_date="2015-09-01",
            end_date="2019-05-15",
        ),
    ),
    skills=(
        "JavaScript", "TypeScript", "React", "Node.js", "Python",
        "AWS", "Docker", "PostgreSQL", "Git", "Agile",
    ),
)

# Lowercase file name keyword -> (name, headline). First match wins.
NAME_KEYWORDS = {
    "john": ("John Smith", "Frontend Developer"),
    "sarah": ("Sarah Williams", "Data Scientist"),
}


class SampleIngestor(Ingestor):
    """
    Placeholder ingestor used until a content extraction engine is plugged in.

    Always returns SAMPLE_DOCUMENT, with the name and headline swapped when the
    file name contains one of NAME_KEYWORDS. File bytes are ignored.
    """

    def _build_document(self, file: UploadedFile) -> ResumeDocument:
        file_name = file.name.lower()
        for keyword, (name, headline) in NAME_KEYWORDS.items():
            if keyword in file_name:
                profile = replace(SAMPLE_DOCUMENT.profile, name=name, headline=headline)
                return replace(SAMPLE_DOCUMENT, profile=profile)
        return SAMPLE_DOCUMENT
