"""Note files in the vault and tag events applied to them."""

import logging
from pathlib import Path

from tagvault.core.handler import TagEventHandler
from tagvault.core.types import (
    DocumentUpdated,
    Tag,
    TagAction,
    TagEventResult,
)

logger = logging.getLogger(__name__)


def read_note(path: Path | str) -> str:
    """
    Read a note's full text.

    Line endings are returned as stored on disk.
    """
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_note(path: Path | str, text: str) -> None:
    """Replace a note's full text."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def list_notes(folder: Path | str) -> list[Path]:
    """
    List all markdown notes below a folder.

    Args:
        folder: Folder to search

    Returns:
        Sorted list of note paths, empty if the folder does not exist
    """
    folder_path = Path(folder)
    if not folder_path.exists():
        return []
    return sorted(folder_path.glob("**/*.md"))


class NoteTagger:
    """Applies tag events to note files."""

    def __init__(self, handler: TagEventHandler):
        self.handler = handler

    def apply(
        self,
        path: Path | str,
        action: TagAction | str,
        tag: Tag | None = None,
        new_name: str | None = None,
    ) -> TagEventResult:
        """
        Dispatch a tag event for a note and persist the new text.

        The note is only written when the event produced new text.

        Returns:
            The handler result
        """
        document = read_note(path)
        result = self.handler.handle(document, action, tag, new_name)
        if isinstance(result, DocumentUpdated):
            write_note(path, result.text)
            logger.info(f"Updated tags of {path}")
        return result

    def list_tag_ids(self, path: Path | str) -> list[int]:
        """Ids of the tags a note references."""
        return self.handler.list_tags(read_note(path)).tag_ids
