"""Exceptions raised by collections and their persistence layer.

Each error also derives from the closest built-in exception so callers may
catch either the library type or the standard one.
"""


class CollectionError(Exception):
    """Base class for all collection errors."""
    pass


class InvalidKeyError(CollectionError, TypeError):
    """Raised when a key cannot be stored (callable or unhashable)."""

    def __init__(self, key: object, reason: str = "Key must not be a function"):
        self.key = key
        super().__init__(f"{reason}: {key!r}")


class InvalidArgumentError(CollectionError, TypeError):
    """Raised when a required argument is missing or of the wrong kind."""
    pass


class PathValidationError(CollectionError, ValueError):
    """Raised when a persistence path is not a usable JSON file path."""

    def __init__(self, message: str, path: object = None):
        self.path = path
        super().__init__(message)


class DataFormatError(CollectionError, ValueError):
    """Raised when a loaded file is empty or does not hold a JSON object."""

    def __init__(self, message: str, path: object = None):
        self.path = path
        super().__init__(message)


class TypeMismatchError(CollectionError, TypeError):
    """Raised when an argument is not a collection or mapping."""
    pass
