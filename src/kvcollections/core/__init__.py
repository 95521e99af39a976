"""Core kvcollections utilities.

This module exports configuration, logging, errors and key handling for use
throughout the package.
"""

from kvcollections.core.config import Settings, get_settings
from kvcollections.core.exceptions import (
    CollectionError,
    DataFormatError,
    InvalidArgumentError,
    InvalidKeyError,
    PathValidationError,
    TypeMismatchError,
)
from kvcollections.core.keys import KEY_ENCODING_VERSION, MISSING, coerce_key, inspect_key
from kvcollections.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "CollectionError",
    "DataFormatError",
    "InvalidArgumentError",
    "InvalidKeyError",
    "PathValidationError",
    "TypeMismatchError",
    "KEY_ENCODING_VERSION",
    "MISSING",
    "coerce_key",
    "inspect_key",
]
