"""Conversion between tags and their flattened hierarchy strings.

A hierarchy string joins a tag's ancestor names and its own name with the
configured separator, e.g. ``animals/mammals/dogs``. In storage form every
whitespace character becomes an underscore so the string survives as a single
token on the ``tags:`` line. Tag names that contain a literal underscore, a tab
or a newline do not survive the round trip, and tag names that contain the
separator collide with the hierarchy encoding.
"""

import re

from tagvault.core.types import AncestorLookup, Tag, TagSettings

_WHITESPACE = re.compile(r"\s")


def to_storage_form(text: str) -> str:
    """Whitespace to underscores."""
    return _WHITESPACE.sub("_", text)


def to_lookup_form(text: str) -> str:
    """Underscores to spaces."""
    return text.replace("_", " ")


class HierarchyResolver:
    """Builds hierarchy strings from tags and breadcrumb paths from tokens."""

    def __init__(self, settings: TagSettings, ancestors: AncestorLookup):
        self.settings = settings
        self.ancestors = ancestors

    @property
    def separator(self) -> str:
        return self.settings.hierarchy_separator

    def to_hierarchy_string(self, tag: Tag, ancestors_only: bool = False) -> str:
        """
        Flatten a tag into its hierarchy string (display form).

        Args:
            tag: Tag to flatten
            ancestors_only: Leave the tag's own name out

        Returns:
            Root-first names joined by the separator. Empty for the
            ancestors of a root tag.
        """
        if tag.is_root:
            return "" if ancestors_only else tag.name

        names = list(reversed(self.ancestors.parent_tag_names(tag)))
        if not ancestors_only:
            names.append(tag.name)
        return self.separator.join(names)

    def storage_string(self, tag: Tag, ancestors_only: bool = False) -> str:
        """Hierarchy string in storage form."""
        return to_storage_form(self.to_hierarchy_string(tag, ancestors_only))

    def breadcrumb_path(self, token: str) -> list[str]:
        """Split a stored token back into lookup-form path segments."""
        return to_lookup_form(token).split(self.separator)
