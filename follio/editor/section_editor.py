"""section_editor.py
Holds SectionEditor, the review-step controller wrapping one ResumeDocument.
"""
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Union

from follio.exceptions import UnknownSectionError
from follio.models import SECTION_NAMES, ResumeDocument
from follio.document import operations

CommitCallback = Callable[["SectionEditor"], Awaitable[Any]]


class SectionEditor:
    """
    UI-agnostic editor for the review step.

    Holds the document being reviewed and the expand/collapse state of each
    section. Every edit delegates to `follio.document.operations` and swaps in
    the returned document, so `document` is never seen half-updated. Edits are
    applied in the order they are called.

    `commit()` is the only operation with an effect outside the editor: it hands
    the editor itself to `on_commit` (the PageFlowController), which saves the
    current document only while this editor is the active one.

    Args:
        document (ResumeDocument): Document produced by ingestion or loaded from storage.
        on_commit (CommitCallback | None): Awaited with this editor on commit.

    Attributes:
        document (ResumeDocument): The current document.
        visibility (Dict[str, bool]): Section name to expanded flag, all True initially.
    """

    def __init__(self, document: ResumeDocument, on_commit: Optional[CommitCallback] = None):
        self.document = document
        self.on_commit = on_commit
        self.visibility: Dict[str, bool] = {name: True for name in SECTION_NAMES}

    # ---- Visibility ----
    def toggle_section(self, name: str) -> bool:
        """Flip the expanded flag of section `name` and return the new value."""
        if name not in self.visibility:
            raise UnknownSectionError(name)
        self.visibility[name] = not self.visibility[name]
        return self.visibility[name]

    def is_expanded(self, name: str) -> bool:
        if name not in self.visibility:
            raise UnknownSectionError(name)
        return self.visibility[name]

    # ---- Profile ----
    def set_profile_field(self, field_name: str, value: str) -> None:
        self.document = operations.set_profile_field(self.document, field_name, value)

    # ---- Experience ----
    def add_experience(self) -> str:
        """Append an empty experience entry and return its id."""
        self.document = operations.add_experience(self.document)
        return self.document.experience[-1].id

    def update_experience(self, entry_id: str, field_name: str, value: Union[str, Iterable[str]]) -> None:
        self.document = operations.update_experience(self.document, entry_id, field_name, value)

    def remove_experience(self, entry_id: str) -> None:
        self.document = operations.remove_experience(self.document, entry_id)

    # ---- Education ----
    def add_education(self) -> str:
        """Append an empty education entry and return its id."""
        self.document = operations.add_education(self.document)
        return self.document.education[-1].id

    def update_education(self, entry_id: str, field_name: str, value: str) -> None:
        self.document = operations.update_education(self.document, entry_id, field_name, value)

    def remove_education(self, entry_id: str) -> None:
        self.document = operations.remove_education(self.document, entry_id)

    # ---- Skills ----
    def add_skill(self, text: str) -> None:
        self.document = operations.add_skill(self.document, text)

    def remove_skill_at(self, index: int) -> None:
        self.document = operations.remove_skill_at(self.document, index)

    # ---- Commit ----
    async def commit(self) -> Any:
        """
        Hand this editor to `on_commit` and return its result.

        Returns False without side effects when no commit target is attached.
        """
        if self.on_commit is None:
            return False
        return await self.on_commit(self)
