"""tagvault core library - tag block codec and tag event handling."""

from tagvault.core.codec import TagBlockCodec
from tagvault.core.errors import SettingsError, TagEventError, TagVaultError
from tagvault.core.handler import TagEventHandler, handle_tag_event
from tagvault.core.hierarchy import HierarchyResolver
from tagvault.core.preview import PreviewStripper, strip_preview
from tagvault.core.types import (
    NO_CHANGE,
    DocumentUpdated,
    NoChange,
    Tag,
    TagAction,
    TagIdsListed,
    TagSettings,
)

__all__ = [
    # Components
    "HierarchyResolver",
    "PreviewStripper",
    "TagBlockCodec",
    "TagEventHandler",
    # Entry points
    "handle_tag_event",
    "strip_preview",
    # Types
    "DocumentUpdated",
    "NO_CHANGE",
    "NoChange",
    "Tag",
    "TagAction",
    "TagIdsListed",
    "TagSettings",
    # Errors
    "SettingsError",
    "TagEventError",
    "TagVaultError",
]
