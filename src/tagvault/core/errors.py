"""Exception types for tagvault."""


class TagVaultError(Exception):
    """Base class for tagvault errors."""

    pass


class SettingsError(TagVaultError):
    """Raised when settings are invalid."""

    pass


class TagEventError(TagVaultError, ValueError):
    """Raised when a tag event cannot be dispatched."""

    pass
