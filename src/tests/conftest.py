"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from tagvault.core.types import ROOT_TAG, Tag, TagSettings
from tagvault.storage.db import get_connection, init_db
from tagvault.storage.repos.tags_repo import TagsRepo


class FakeTagStore:
    """In-memory tag tree implementing the TagStore protocol."""

    def __init__(self):
        self.tags: dict[int, Tag] = {}
        self._next_id = 1

    def add(self, name: str, parent: Tag | None = None) -> Tag:
        parent_id = parent.id if parent else None
        tag = Tag(id=self._next_id, name=name, parent_id=parent_id)
        self.tags[tag.id] = tag
        self._next_id += 1
        return tag

    def parent_tag_names(self, tag: Tag) -> list[str]:
        names = []
        parent_id = tag.parent_id
        while parent_id is not None:
            parent = self.tags[parent_id]
            names.append(parent.name)
            parent_id = parent.parent_id
        return names

    def get_or_create_by_breadcrumb_path(self, path: Sequence[str]) -> Tag:
        current = ROOT_TAG
        for name in path:
            if not name:
                continue
            parent_id = None if current is ROOT_TAG else current.id
            match = next(
                (
                    t
                    for t in self.tags.values()
                    if t.name == name and t.parent_id == parent_id
                ),
                None,
            )
            current = match or self.add(name, self.tags.get(parent_id))
        return current


@pytest.fixture
def store():
    """Tag tree with a few nested tags.

    animals/mammals/dogs, work, "to do"
    """
    fake = FakeTagStore()
    animals = fake.add("animals")
    mammals = fake.add("mammals", animals)
    fake.add("dogs", mammals)
    fake.add("work")
    fake.add("to do")
    return fake


@pytest.fixture
def tags(store):
    """Tags of the store fixture, by name."""
    return {tag.name: tag for tag in store.tags.values()}


@pytest.fixture
def dash_settings():
    """Settings closing new blocks with ---."""
    return TagSettings(use_three_dash_closing=True)


@pytest.fixture
def dot_settings():
    """Settings closing new blocks with ..."""
    return TagSettings(use_three_dash_closing=False)


@pytest.fixture
def db_path(tmp_path):
    """Initialized temporary tag database."""
    path = tmp_path / "tags.db"
    init_db(path)
    return path


@pytest.fixture
def tags_repo(db_path):
    """TagsRepo on a temporary database."""
    with get_connection(db_path) as conn:
        yield TagsRepo(conn)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the real environment and data directory."""
    import tagvault.core.config as config

    monkeypatch.delenv("TAGVAULT_USE_THREE_DASH_CLOSING", raising=False)
    monkeypatch.delenv("TAGVAULT_HIERARCHY_SEPARATOR", raising=False)
    monkeypatch.setattr(config, "TAGVAULT_DATA_DIR", tmp_path / "data")
    return tmp_path
