"""Shared types and data structures for tagvault."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Protocol

from pydantic import BaseModel, field_validator

__all__ = [
    "AncestorLookup",
    "BlockState",
    "DocumentUpdated",
    "NO_CHANGE",
    "NoChange",
    "ROOT_TAG",
    "Tag",
    "TagAction",
    "TagBlock",
    "TagEventResult",
    "TagIdsListed",
    "TagLookup",
    "TagSettings",
    "TagStore",
]


class TagSettings(BaseModel, frozen=True, extra="forbid"):
    """Host-provided settings for tag block handling."""

    use_three_dash_closing: bool = True
    hierarchy_separator: str = "/"

    @field_validator("hierarchy_separator")
    @classmethod
    def _validate_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("hierarchy_separator must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError("hierarchy_separator must not contain whitespace")
        return value

    @property
    def closing_marker(self) -> str:
        """Marker written when a new block is synthesized."""
        return "---" if self.use_three_dash_closing else "..."


@dataclass(frozen=True)
class Tag:
    """A tag node owned by the host. parent_id is None for root tags."""

    id: int
    name: str
    parent_id: int | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


# Returned for breadcrumb lookups that resolve to no tag at all
ROOT_TAG = Tag(id=0, name="")


class TagAction(StrEnum):
    """Tag lifecycle events."""

    ADD = "add"
    REMOVE = "remove"
    RENAME = "rename"
    LIST = "list"


class BlockState(Enum):
    """Shape of the leading front-matter block."""

    ABSENT = "absent"
    MALFORMED = "malformed"
    PRESENT = "present"


@dataclass(frozen=True)
class TagBlock:
    """Result of scanning a document for its tag block.

    tags_start/tags_end delimit the ``tags:`` line content (line ending
    excluded) and are only meaningful when state is PRESENT. insert_at is
    the offset just past the opening marker line.
    """

    state: BlockState
    tokens: tuple[str, ...] = ()
    tags_start: int = 0
    tags_end: int = 0
    insert_at: int = 0
    closer: str | None = None


@dataclass(frozen=True)
class DocumentUpdated:
    """The note text must be replaced by ``text``."""

    text: str


@dataclass(frozen=True)
class TagIdsListed:
    """Tag ids referenced by the note, in first-seen order."""

    tag_ids: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class NoChange:
    """Nothing to write back."""


NO_CHANGE = NoChange()

TagEventResult = DocumentUpdated | TagIdsListed | NoChange


class AncestorLookup(Protocol):
    """Resolves the names of a tag's ancestors."""

    def parent_tag_names(self, tag: Tag) -> Sequence[str]:
        """Names from the immediate parent up to the root."""
        ...


class TagLookup(Protocol):
    """Resolves (or creates) a tag from its breadcrumb path."""

    def get_or_create_by_breadcrumb_path(self, path: Sequence[str]) -> Tag: ...


class TagStore(AncestorLookup, TagLookup, Protocol):
    """Everything the tag event handler needs from the host."""
