"""
Domain exceptions.

Services raise these exceptions; the API layer translates them into
HTTP responses.  ``ProductError`` is handled application-wide (see
``main.create_app``), file errors are mapped per route because the
same failure means different statuses on different routes.
"""


class ProductArchiveError(Exception):
    """Base class for all errors raised by this application."""


class ProductError(ProductArchiveError):
    """A product operation produced no result (invalid data or unknown id)."""


class FileStorageError(ProductArchiveError):
    """Base class for storage and archive failures."""


class InvalidPathError(FileStorageError):
    """The file name contains a traversal sequence or resolves outside the root."""


class EmptyFileError(FileStorageError):
    """An upload carried no bytes."""


class AccessDeniedError(FileStorageError):
    """A lookup resolved to a location outside the storage root."""


class StoredFileNotFoundError(FileStorageError):
    """The requested file or archive does not exist."""


class StorageIOError(FileStorageError):
    """The underlying filesystem operation failed."""
