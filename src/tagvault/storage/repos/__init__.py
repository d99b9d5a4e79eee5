"""Repository classes for data access."""

from tagvault.storage.repos.tags_repo import TagsRepo

__all__ = [
    "TagsRepo",
]
