"""Tag event dispatch.

Each event reads the current tag block from the note text, computes the new
token set, and hands back either the new note text, the list of referenced
tag ids, or NO_CHANGE. The handler never persists anything itself.
"""

import logging

from tagvault.core.codec import TagBlockCodec
from tagvault.core.errors import TagEventError
from tagvault.core.hierarchy import HierarchyResolver, to_storage_form
from tagvault.core.types import (
    NO_CHANGE,
    DocumentUpdated,
    Tag,
    TagAction,
    TagEventResult,
    TagIdsListed,
    TagSettings,
    TagStore,
)

logger = logging.getLogger(__name__)


class TagEventHandler:
    """Applies add/remove/rename/list events to a note's tag block."""

    def __init__(self, settings: TagSettings, store: TagStore):
        """
        Initialize the handler.

        Args:
            settings: Closing style and hierarchy separator
            store: Host tag store used for ancestor names and list lookups
        """
        self.settings = settings
        self.store = store
        self.codec = TagBlockCodec(settings)
        self.resolver = HierarchyResolver(settings, store)

    def handle(
        self,
        document: str,
        action: TagAction | str,
        tag: Tag | None = None,
        new_name: str | None = None,
    ) -> TagEventResult:
        """
        Dispatch a tag event.

        Args:
            document: Current note text
            action: One of add, remove, rename, list
            tag: Tag the event is about (unused for list)
            new_name: New tag name, required for rename

        Returns:
            DocumentUpdated, TagIdsListed or NO_CHANGE

        Raises:
            TagEventError: Unknown action, missing tag, or rename without
                a new name
        """
        try:
            action = TagAction(action)
        except ValueError as e:
            raise TagEventError(f"Unknown tag action: {action!r}") from e

        if action is TagAction.LIST:
            return self.list_tags(document)

        if tag is None:
            raise TagEventError(f"Tag action {action.value!r} requires a tag")

        if action is TagAction.ADD:
            return self.add(document, tag)
        if action is TagAction.REMOVE:
            return self.remove(document, tag)

        if new_name is None or not new_name.strip():
            raise TagEventError("Tag action 'rename' requires a new name")
        return self.rename(document, tag, new_name.strip())

    def add(self, document: str, tag: Tag) -> TagEventResult:
        hierarchy = self.resolver.storage_string(tag)
        if not hierarchy:
            logger.debug("Tag has an empty hierarchy string, nothing to add")
            return NO_CHANGE
        tokens = self.codec.tokens(document)
        if hierarchy in tokens:
            logger.debug(f"Tag {hierarchy!r} already present")
            return NO_CHANGE

        logger.debug(f"Adding tag {hierarchy!r}")
        return DocumentUpdated(self.codec.encode(document, [*tokens, hierarchy]))

    def remove(self, document: str, tag: Tag) -> TagEventResult:
        block = self.codec.decode(document)
        if block is None:
            return NO_CHANGE

        hierarchy = self.resolver.storage_string(tag)
        if hierarchy not in block.tokens:
            logger.debug(f"Tag {hierarchy!r} not present, nothing to remove")
            return NO_CHANGE

        logger.debug(f"Removing tag {hierarchy!r}")
        remaining = [token for token in block.tokens if token != hierarchy]
        return DocumentUpdated(self.codec.encode(document, remaining))

    def rename(self, document: str, tag: Tag, new_name: str) -> TagEventResult:
        """Rename a tag and every descendant stored under it."""
        new_name = new_name.strip()
        block = self.codec.decode(document)
        if block is None:
            return NO_CHANGE

        old_hierarchy = self.resolver.storage_string(tag)
        ancestors = self.resolver.storage_string(tag, ancestors_only=True)
        new_hierarchy = to_storage_form(new_name)
        if ancestors:
            new_hierarchy = ancestors + self.resolver.separator + new_hierarchy

        renamed = 0
        tokens = []
        for token in block.tokens:
            if token.startswith(old_hierarchy):
                token = new_hierarchy + token[len(old_hierarchy) :]
                renamed += 1
            tokens.append(token)

        if not renamed:
            return NO_CHANGE

        logger.debug(
            f"Renamed {renamed} tag(s) from {old_hierarchy!r} to {new_hierarchy!r}"
        )
        return DocumentUpdated(self.codec.encode(document, tokens))

    def list_tags(self, document: str) -> TagIdsListed:
        """Resolve every stored token to a tag id, creating tags as needed."""
        tag_ids: list[int] = []
        for token in self.codec.tokens(document):
            path = self.resolver.breadcrumb_path(token)
            found = self.store.get_or_create_by_breadcrumb_path(path)
            if not found.name:
                continue
            if found.id not in tag_ids:
                tag_ids.append(found.id)
        return TagIdsListed(tag_ids)


def handle_tag_event(
    document: str,
    action: TagAction | str,
    tag: Tag | None,
    store: TagStore,
    new_name: str | None = None,
    settings: TagSettings | None = None,
) -> TagEventResult:
    """Dispatch a single tag event with a throwaway handler."""
    handler = TagEventHandler(settings or TagSettings(), store)
    return handler.handle(document, action, tag, new_name)
