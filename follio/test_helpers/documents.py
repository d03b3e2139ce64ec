"""documents.py
Builders for ResumeDocuments and uploaded files to test with.
"""
import io
from typing import List

from docx import Document
from reportlab.pdfgen import canvas

from follio.config import DOC_MEDIA_TYPE, DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from follio.models import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ResumeDocument,
    UploadedFile,
)

MB = 1024 * 1024

EXAMPLE_RESUME_TEXT = """Jane Doe
Data Scientist
San Diego, CA | (619) 555-0142 | jane.doe@example.com | linkedin.com/in/janedoe

WORK EXPERIENCE
Data Scientist | Acme Analytics
March 2021 - Present
- Pioneered segmentation in Google Analytics 4
- Built churn models in Python
Analyst at Contoso
2018 - 2021
- Automated weekly reporting

EDUCATION
M.S. Computer Science, San Diego State University
2016 - 2018

SKILLS
Python, SQL, Power BI
- Data Cleaning
"""


def make_document() -> ResumeDocument:
    """A small fully populated document. Skills include a duplicate on purpose."""
    return ResumeDocument(
        profile=Profile(
            name="Jane Doe",
            headline="Data Scientist",
            location="San Diego, CA",
            email="jane.doe@example.com",
            phone="(619) 555-0142",
        ),
        experience=(
            ExperienceEntry(
                id="exp-a", company="Acme Analytics", role="Data Scientist",
                start_date="2021-03-01", end_date="", highlights=("Built churn models",),
            ),
            ExperienceEntry(
                id="exp-b", company="Contoso", role="Analyst",
                start_date="2018-01-01", end_date="2021-02-28",
            ),
        ),
        education=(
            EducationEntry(
                id="edu-a", school="San Diego State University",
                degree="M.S. Computer Science", start_date="2016-09-01", end_date="2018-06-01",
            ),
        ),
        skills=("Python", "SQL", "Python"),
    )


def make_uploaded_file(
    name: str = "resume.pdf",
    media_type: str = PDF_MEDIA_TYPE,
    size_bytes: int = 2 * MB,
) -> UploadedFile:
    """An UploadedFile carrying only metadata (no bytes)."""
    return UploadedFile(name=name, media_type=media_type, size_bytes=size_bytes)


def make_pdf_bytes(text: str) -> bytes:
    """Draw `text` line by line onto PDF pages with reportlab."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer)
    y = 750
    for line in text.splitlines():
        if y < 72:
            c.showPage()
            y = 750
        c.drawString(72, y, line)
        y -= 14
    c.save()
    return buffer.getvalue()


def make_docx_bytes(lines: List[str]) -> bytes:
    """Build a .docx with one paragraph per line using python-docx."""
    document = Document()
    for line in lines:
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def make_pdf_upload(text: str = EXAMPLE_RESUME_TEXT, name: str = "resume.pdf") -> UploadedFile:
    return UploadedFile.from_bytes(name, PDF_MEDIA_TYPE, make_pdf_bytes(text))


def make_docx_upload(text: str = EXAMPLE_RESUME_TEXT, name: str = "resume.docx") -> UploadedFile:
    return UploadedFile.from_bytes(name, DOCX_MEDIA_TYPE, make_docx_bytes(text.splitlines()))


def make_doc_upload(name: str = "resume.doc") -> UploadedFile:
    return UploadedFile.from_bytes(name, DOC_MEDIA_TYPE, b"\xd0\xcf\x11\xe0legacy word")
