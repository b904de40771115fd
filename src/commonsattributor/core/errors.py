class AttributorError(Exception):
    """Base error for all user-facing attributor exceptions."""


class ConfigurationError(AttributorError):
    """Raised when configuration is invalid or incomplete."""


class NotAFileUrlError(AttributorError):
    """Raised when a URL does not address a Commons file page."""


class NotFoundError(AttributorError):
    """Raised when a file does not exist or carries no image information."""


class MissingMetadataBlockError(NotFoundError):
    """Raised when a file page exists but has no extended metadata block."""


class TransportError(AttributorError):
    """Raised when the Commons API cannot be reached or returns an unusable body."""


class NoResultError(AttributorError):
    """Raised when a cached attribution result is requested before any run succeeded."""
