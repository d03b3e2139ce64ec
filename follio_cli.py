"""follio_cli.py
Run ingestion on a resume file from the command line.
Example: `python follio_cli.py path/to/resume.pdf [--ingestor sample] [--json]`
"""
import argparse
import json
import mimetypes
import sys
from pathlib import Path

from follio.config import DOCX_MEDIA_TYPE, FOLLIO_DEFAULTS
from follio.context import INGESTORS
from follio.exceptions import FileValidationError
from follio.flow.dashboard import build_dashboard_summary
from follio.flow.helpers.check_file_acceptance import check_file_acceptance
from follio.models import UploadedFile

# mimetypes does not know .docx on every platform
EXTENSION_MEDIA_TYPES = {".docx": DOCX_MEDIA_TYPE}


def guess_media_type(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in EXTENSION_MEDIA_TYPES:
        return EXTENSION_MEDIA_TYPES[suffix]
    return mimetypes.guess_type(path.name)[0] or "application/octet-stream"


def main():
    parser = argparse.ArgumentParser(description="Build a resume profile document from a file.")
    parser.add_argument("file_path")
    parser.add_argument("--ingestor", choices=sorted(INGESTORS), default=FOLLIO_DEFAULTS.INGESTOR)
    parser.add_argument("--json", action="store_true", help="Print the stored JSON shape")
    args = parser.parse_args()

    path = Path(args.file_path)
    if not path.is_file():
        print(f"File not found: {path}")
        sys.exit(1)

    uploaded = UploadedFile.from_bytes(path.name, guess_media_type(path), path.read_bytes())
    try:
        check_file_acceptance(
            uploaded,
            FOLLIO_DEFAULTS.ACCEPTED_MEDIA_TYPES,
            FOLLIO_DEFAULTS.max_file_size_bytes,
        )
    except FileValidationError as e:
        print(f"Rejected: {e}")
        sys.exit(1)

    document = INGESTORS[args.ingestor]().ingest(uploaded)

    if args.json:
        print(json.dumps(document.to_dict(), indent=2))
        return

    summary = build_dashboard_summary(document)
    print("Resume Parsing Result:")
    print(f"Name: {summary.profile.name or 'None'}")
    print(f"Headline: {summary.profile.headline or 'None'}")
    print(f"Email: {summary.profile.email or 'None'}")
    print(f"Phone: {summary.profile.phone or 'None'}")
    print(f"Experience ({summary.experience_count}):")
    for entry in summary.experience:
        print(f"  - {entry.title} @ {entry.subtitle} ({entry.date_range})")
    print(f"Education ({summary.education_count}):")
    for entry in summary.education:
        print(f"  - {entry.title}, {entry.subtitle} ({entry.date_range})")
    print(f"Skills: {', '.join(summary.skills) if summary.skills else 'None'}")


if __name__ == "__main__":
    main()
