"""kvcollections - associative containers with a rich query API.

Two collection kinds share one API for filtering, mapping, searching,
slicing, random access, membership tests and JSON persistence:
``ObjectCollection`` stores string keys, ``NativeMapCollection`` keeps keys
as they are.
"""

__version__ = "0.1.0"

from kvcollections.core import (
    CollectionError,
    DataFormatError,
    InvalidArgumentError,
    InvalidKeyError,
    PathValidationError,
    Settings,
    TypeMismatchError,
    configure_logging,
    get_logger,
    get_settings,
)
from kvcollections.domain import Collection, NativeMapCollection, ObjectCollection

__all__ = [
    "__version__",
    "Collection",
    "NativeMapCollection",
    "ObjectCollection",
    "CollectionError",
    "DataFormatError",
    "InvalidArgumentError",
    "InvalidKeyError",
    "PathValidationError",
    "TypeMismatchError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
