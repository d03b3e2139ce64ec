"""test_extract_fields.py
Test the heuristic section extractors.
"""
import pytest

from follio.ingestion.helpers.extract_fields import (
    extract_education,
    extract_experience,
    extract_profile,
    extract_skills,
)


class TestExtractProfile:

    def test_contact_line_with_pipes(self):
        profile = extract_profile([
            "Alex Johnson",
            "Senior Software Developer",
            "San Francisco, CA | (555) 123-4567 | alex.johnson@example.com",
        ])
        assert profile.name == "Alex Johnson"
        assert profile.headline == "Senior Software Developer"
        assert profile.location == "San Francisco, CA"
        assert profile.phone == "(555) 123-4567"
        assert profile.email == "alex.johnson@example.com"

    def test_contact_details_on_separate_lines(self):
        profile = extract_profile(["Jane Doe", "jane@example.com", "555-123-4567"])
        assert profile.name == "Jane Doe"
        assert profile.headline == ""
        assert profile.email == "jane@example.com"
        assert profile.phone == "555-123-4567"

    def test_no_lines_gives_empty_profile(self):
        profile = extract_profile([])
        assert profile.name == profile.email == profile.location == ""


class TestExtractExperience:

    def test_role_at_company_with_dates_on_same_line(self):
        entries = extract_experience([
            "Backend Engineer at Initech Jan 2019 - Dec 2020",
            "• Shipped billing service",
        ])
        assert len(entries) == 1
        entry = entries[0]
        assert entry.id == "exp-1"
        assert entry.role == "Backend Engineer"
        assert entry.company.startswith("Initech")
        assert (entry.start_date, entry.end_date) == ("Jan 2019", "Dec 2020")
        assert entry.highlights == ("Shipped billing service",)

    @pytest.mark.parametrize("end_word", ["Present", "current", "NOW"])
    def test_open_ended_range_has_empty_end_date(self, end_word):
        entries = extract_experience(["Engineer | Globex", f"2020-01 - {end_word}"])
        assert entries[0].start_date == "2020-01"
        assert entries[0].end_date == ""

    def test_new_block_after_bullets(self):
        entries = extract_experience([
            "Engineer | Globex",
            "- Did things",
            "Intern | Hooli",
            "- Did other things",
        ])
        assert [(e.role, e.company) for e in entries] == [("Engineer", "Globex"), ("Intern", "Hooli")]
        assert [e.id for e in entries] == ["exp-1", "exp-2"]

    def test_empty_section(self):
        assert extract_experience([]) == []


class TestExtractEducation:

    def test_school_name_with_comma_stays_whole(self):
        entries = extract_education([
            "University of California, Berkeley",
            "Bachelor of Science in Computer Science",
            "2015 - 2019",
        ])
        assert len(entries) == 1
        assert entries[0].school == "University of California, Berkeley"
        assert entries[0].degree == "Bachelor of Science in Computer Science"

    def test_degree_then_school(self):
        entries = extract_education(["BSc Mathematics, Springfield College", "09/2012 - 06/2016"])
        assert entries[0].school == "Springfield College"
        assert entries[0].degree == "BSc Mathematics"
        assert (entries[0].start_date, entries[0].end_date) == ("09/2012", "06/2016")

    def test_without_school_keyword_first_part_is_school(self):
        entries = extract_education(["MIT | PhD Physics"])
        assert entries[0].school == "MIT"
        assert entries[0].degree == "PhD Physics"


class TestExtractSkills:

    def test_splits_on_separators(self):
        assert extract_skills(["Python, SQL; Docker | Git"]) == ["Python", "SQL", "Docker", "Git"]

    def test_drops_label_prefix(self):
        assert extract_skills(["Languages: Python, Go"]) == ["Python", "Go"]

    def test_bullet_lines(self):
        assert extract_skills(["• AWS", "- Terraform"]) == ["AWS", "Terraform"]
