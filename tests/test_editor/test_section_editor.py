"""test_section_editor.py
Test SectionEditor visibility state, edit delegation and commit hand-off.
"""
import asyncio

import pytest

from follio.exceptions import UnknownFieldError, UnknownSectionError
from follio.models import SECTION_NAMES
from follio.editor.section_editor import SectionEditor
from follio.test_helpers.documents import make_document


@pytest.fixture
def editor():
    return SectionEditor(make_document())


class TestSectionVisibility:
    """Tests for toggle_section / is_expanded."""

    def test_all_sections_expanded_initially(self, editor):
        assert editor.visibility == {name: True for name in SECTION_NAMES}

    def test_toggle_returns_new_value(self, editor):
        assert editor.toggle_section("skills") is False
        assert editor.is_expanded("skills") is False
        assert editor.is_expanded("profile") is True

    @pytest.mark.parametrize("name", SECTION_NAMES)
    def test_toggle_twice_restores_state(self, editor, name):
        editor.toggle_section(name)
        editor.toggle_section(name)
        assert editor.is_expanded(name) is True

    def test_toggle_does_not_touch_document(self, editor):
        before = editor.document
        editor.toggle_section("experience")
        assert editor.document is before

    def test_unknown_section_raises(self, editor):
        with pytest.raises(UnknownSectionError):
            editor.toggle_section("hobbies")
        with pytest.raises(UnknownSectionError):
            editor.is_expanded("hobbies")


class TestSectionEdits:
    """Edits replace `document` with the result of the matching operation."""

    def test_profile_edit(self, editor):
        editor.set_profile_field("location", "Remote")
        assert editor.document.profile.location == "Remote"

    def test_add_experience_returns_new_id(self, editor):
        new_id = editor.add_experience()
        assert editor.document.experience[-1].id == new_id
        assert new_id not in ("exp-a", "exp-b")

    def test_update_then_remove_experience(self, editor):
        new_id = editor.add_experience()
        editor.update_experience(new_id, "company", "Umbrella")
        assert editor.document.experience[-1].company == "Umbrella"
        editor.remove_experience(new_id)
        assert [e.id for e in editor.document.experience] == ["exp-a", "exp-b"]

    def test_education_edits(self, editor):
        new_id = editor.add_education()
        editor.update_education(new_id, "school", "Open University")
        assert editor.document.education[-1].school == "Open University"
        editor.remove_education("edu-a")
        assert [e.id for e in editor.document.education] == [new_id]

    def test_skill_edits_in_call_order(self, editor):
        editor.add_skill("Docker")
        editor.remove_skill_at(0)
        assert editor.document.skills == ("SQL", "Python", "Docker")

    def test_invalid_field_leaves_document_unchanged(self, editor):
        before = editor.document
        with pytest.raises(UnknownFieldError):
            editor.set_profile_field("nickname", "JD")
        assert editor.document is before


class TestSectionEditorCommit:
    """Tests for SectionEditor.commit()."""

    def test_commit_hands_editor_to_callback(self, editor):
        received = []

        async def on_commit(committing_editor):
            received.append(committing_editor)
            return True

        editor.on_commit = on_commit
        editor.add_skill("Rust")

        assert asyncio.run(editor.commit()) is True
        assert received == [editor]
        assert received[0].document.skills[-1] == "Rust"

    def test_commit_without_callback_returns_false(self, editor):
        assert asyncio.run(editor.commit()) is False
