"""Tags repository - the host-side tag tree backing tag events."""

import logging
import sqlite3
from collections.abc import Sequence

from tagvault.core.types import ROOT_TAG, Tag

logger = logging.getLogger(__name__)


def _row_to_tag(row: sqlite3.Row) -> Tag:
    return Tag(id=row["id"], name=row["name"], parent_id=row["parent_id"])


class TagsRepo:
    """Repository for the hierarchical tag tree.

    Implements the TagStore protocol: ancestor names for hierarchy strings,
    and get-or-create by breadcrumb path for listing.
    """

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize tags repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get(self, tag_id: int) -> Tag | None:
        """Get a tag by id, or None if not exists."""
        row = self.conn.execute(
            "SELECT id, name, parent_id FROM tags WHERE id = ?",
            (tag_id,),
        ).fetchone()
        return _row_to_tag(row) if row else None

    def find_child(self, name: str, parent_id: int | None) -> Tag | None:
        """Find a tag by name below a parent (None for root tags)."""
        row = self.conn.execute(
            """
            SELECT id, name, parent_id FROM tags
            WHERE name = ? AND parent_id IS ?
            """,
            (name, parent_id),
        ).fetchone()
        return _row_to_tag(row) if row else None

    def create(self, name: str, parent_id: int | None = None) -> Tag:
        """Create a tag and return it."""
        cursor = self.conn.execute(
            "INSERT INTO tags (name, parent_id) VALUES (?, ?)",
            (name, parent_id),
        )
        logger.debug(f"Created tag {name!r} (parent={parent_id})")
        return Tag(id=cursor.lastrowid, name=name, parent_id=parent_id)

    def find_by_breadcrumb_path(self, path: Sequence[str]) -> Tag | None:
        """Walk a root-first path without creating anything."""
        current: Tag | None = None
        for name in path:
            if not name:
                continue
            current = self.find_child(name, current.id if current else None)
            if current is None:
                return None
        return current

    def get_or_create_by_breadcrumb_path(self, path: Sequence[str]) -> Tag:
        """Walk a root-first path, creating missing tags on the way.

        Empty segments are skipped. A path with no names yields ROOT_TAG.
        """
        current = ROOT_TAG
        for name in path:
            if not name:
                continue
            parent_id = None if current is ROOT_TAG else current.id
            current = self.find_child(name, parent_id) or self.create(name, parent_id)
        return current

    def parent_tag_names(self, tag: Tag) -> list[str]:
        """Ancestor names from the immediate parent up to the root."""
        names: list[str] = []
        seen: set[int] = set()
        parent_id = tag.parent_id
        while parent_id is not None and parent_id not in seen:
            seen.add(parent_id)
            parent = self.get(parent_id)
            if parent is None:
                break
            names.append(parent.name)
            parent_id = parent.parent_id
        return names

    def breadcrumb(self, tag: Tag) -> list[str]:
        """Root-first names ending with the tag itself."""
        return [*reversed(self.parent_tag_names(tag)), tag.name]

    def rename(self, tag_id: int, new_name: str) -> None:
        """Rename a tag in place."""
        self.conn.execute(
            "UPDATE tags SET name = ? WHERE id = ?",
            (new_name, tag_id),
        )

    def list_all(self) -> list[Tag]:
        """All tags ordered by id."""
        rows = self.conn.execute(
            "SELECT id, name, parent_id FROM tags ORDER BY id"
        ).fetchall()
        return [_row_to_tag(row) for row in rows]
