"""test_operations.py
Test the pure ResumeDocument edit operations.
"""
import pytest

from follio.exceptions import InvalidFieldValueError, UnknownFieldError
from follio.models import ResumeDocument
from follio.document import operations
from follio.test_helpers.documents import make_document


class TestSetProfileField:
    """Tests for set_profile_field."""

    def test_replaces_one_field(self):
        doc = make_document()
        result = operations.set_profile_field(doc, "headline", "Staff Data Scientist")
        assert result.profile.headline == "Staff Data Scientist"
        assert result.profile.name == doc.profile.name

    def test_does_not_mutate_input(self):
        doc = make_document()
        operations.set_profile_field(doc, "name", "Someone Else")
        assert doc.profile.name == "Jane Doe"

    def test_accepts_any_string_for_email(self):
        """Email format is not enforced at this layer."""
        result = operations.set_profile_field(make_document(), "email", "not-an-email")
        assert result.profile.email == "not-an-email"

    def test_unknown_field_raises(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            operations.set_profile_field(make_document(), "age", "33")
        assert exc_info.value.section == "profile"
        assert exc_info.value.field_name == "age"

    @pytest.mark.parametrize("value", [["Jane", "Doe"], 42, None])
    def test_non_string_value_raises(self, value):
        doc = make_document()
        with pytest.raises(InvalidFieldValueError) as exc_info:
            operations.set_profile_field(doc, "name", value)
        assert exc_info.value.section == "profile"
        assert exc_info.value.field_name == "name"
        assert doc.profile.name == "Jane Doe"


class TestExperienceOperations:
    """Tests for add/update/remove on the experience section."""

    def test_add_appends_empty_entry_with_unique_id(self):
        doc = make_document()
        result = operations.add_experience(doc)

        assert len(result.experience) == len(doc.experience) + 1
        new_entry = result.experience[-1]
        assert new_entry.company == new_entry.role == ""
        assert new_entry.highlights == ()
        ids = [e.id for e in result.experience]
        assert len(set(ids)) == len(ids)

    def test_add_to_empty_document(self):
        result = operations.add_experience(ResumeDocument.empty())
        assert len(result.experience) == 1

    def test_add_retries_colliding_ids(self):
        """The id factory sees the existing ids and must avoid them."""
        doc = make_document()
        seen = []

        def id_factory(existing):
            existing = list(existing)
            seen.append(existing)
            return "exp-new"

        result = operations.add_experience(doc, id_factory=id_factory)
        assert seen == [["exp-a", "exp-b"]]
        assert result.experience[-1].id == "exp-new"

    def test_repeated_adds_keep_ids_unique(self):
        doc = ResumeDocument.empty()
        for _ in range(25):
            doc = operations.add_experience(doc)
        ids = [e.id for e in doc.experience]
        assert len(set(ids)) == 25

    def test_update_sets_field_on_matching_entry_only(self):
        doc = make_document()
        result = operations.update_experience(doc, "exp-b", "company", "Contoso Ltd")
        assert result.experience[1].company == "Contoso Ltd"
        assert result.experience[0] == doc.experience[0]

    def test_update_highlights_accepts_list(self):
        result = operations.update_experience(make_document(), "exp-a", "highlights", ["a", "b"])
        assert result.experience[0].highlights == ("a", "b")

    def test_update_highlights_with_single_string_is_one_item(self):
        result = operations.update_experience(make_document(), "exp-a", "highlights", "Led the migration")
        assert result.experience[0].highlights == ("Led the migration",)

    @pytest.mark.parametrize("value", [[1, 2], ["ok", None], 7])
    def test_update_highlights_rejects_non_string_items(self, value):
        with pytest.raises(InvalidFieldValueError):
            operations.update_experience(make_document(), "exp-a", "highlights", value)

    @pytest.mark.parametrize("value", [["CTO"], 3, ("a", "b")])
    def test_update_text_field_rejects_non_string(self, value):
        with pytest.raises(InvalidFieldValueError) as exc_info:
            operations.update_experience(make_document(), "exp-a", "role", value)
        assert exc_info.value.field_name == "role"

    def test_update_missing_id_still_checks_value(self):
        with pytest.raises(InvalidFieldValueError):
            operations.update_experience(make_document(), "missing", "role", ["CTO"])

    def test_update_missing_id_is_noop(self):
        doc = make_document()
        assert operations.update_experience(doc, "missing", "role", "CTO") == doc

    def test_update_id_field_raises(self):
        with pytest.raises(UnknownFieldError):
            operations.update_experience(make_document(), "exp-a", "id", "exp-b")

    def test_update_unknown_field_raises(self):
        with pytest.raises(UnknownFieldError):
            operations.update_experience(make_document(), "exp-a", "salary", "lots")

    def test_update_keeps_order(self):
        doc = make_document()
        result = operations.update_experience(doc, "exp-a", "role", "Lead")
        assert [e.id for e in result.experience] == ["exp-a", "exp-b"]

    def test_remove_matching_entry(self):
        result = operations.remove_experience(make_document(), "exp-a")
        assert [e.id for e in result.experience] == ["exp-b"]

    def test_remove_missing_id_is_noop(self):
        doc = make_document()
        assert operations.remove_experience(doc, "missing") == doc


class TestEducationOperations:
    """Tests for add/update/remove on the education section."""

    def test_add_appends_at_end(self):
        doc = make_document()
        result = operations.add_education(doc)
        assert result.education[0] == doc.education[0]
        assert result.education[-1].school == ""
        assert result.education[-1].id != "edu-a"

    def test_update_sets_field(self):
        result = operations.update_education(make_document(), "edu-a", "degree", "PhD")
        assert result.education[0].degree == "PhD"

    def test_update_non_string_raises(self):
        with pytest.raises(InvalidFieldValueError) as exc_info:
            operations.update_education(make_document(), "edu-a", "school", ["SDSU"])
        assert exc_info.value.section == "education"

    def test_update_missing_id_is_noop(self):
        doc = make_document()
        assert operations.update_education(doc, "missing", "degree", "PhD") == doc

    def test_update_highlights_is_not_an_education_field(self):
        with pytest.raises(UnknownFieldError):
            operations.update_education(make_document(), "edu-a", "highlights", "x")

    def test_remove_only_entry_leaves_empty_sequence(self):
        result = operations.remove_education(make_document(), "edu-a")
        assert result.education == ()

    def test_remove_missing_id_is_noop(self):
        doc = make_document()
        assert operations.remove_education(doc, "missing") == doc


class TestSkillOperations:
    """Tests for add_skill and remove_skill_at."""

    def test_add_trims_text(self):
        result = operations.add_skill(make_document(), "  Docker \n")
        assert result.skills[-1] == "Docker"

    @pytest.mark.parametrize("text", [["Docker"], 5, None])
    def test_add_non_string_raises(self, text):
        with pytest.raises(InvalidFieldValueError):
            operations.add_skill(make_document(), text)

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_add_whitespace_only_is_noop(self, text):
        doc = make_document()
        assert operations.add_skill(doc, text) == doc

    def test_add_duplicate_is_allowed(self):
        result = operations.add_skill(make_document(), "SQL")
        assert result.skills.count("SQL") == 2

    def test_remove_by_position(self):
        result = operations.remove_skill_at(make_document(), 1)
        assert result.skills == ("Python", "Python")

    def test_remove_first_of_duplicates_only(self):
        result = operations.remove_skill_at(make_document(), 0)
        assert result.skills == ("SQL", "Python")

    @pytest.mark.parametrize("index", [3, 99, -1])
    def test_remove_out_of_range_is_noop(self, index):
        doc = make_document()
        assert operations.remove_skill_at(doc, index) == doc
