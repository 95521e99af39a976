"""Key coercion for string-keyed collections.

Non-string keys are stored under their inspected form: a repr-style rendering
in which mapping items and set members are sorted, so equal keys always render
to the same text. Collisions between keys with the same rendering are
intended. Bump ``KEY_ENCODING_VERSION`` whenever the rendering changes.
"""

from collections.abc import Hashable, Mapping
from typing import Any

from kvcollections.core.exceptions import InvalidKeyError

KEY_ENCODING_VERSION = 1


class _Missing:
    """Marker for an omitted key argument."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _render(value: Any, active: set[int]) -> str:
    marker = id(value)
    if marker in active:
        return "..."

    if isinstance(value, Mapping):
        active.add(marker)
        items = sorted(f"{_render(k, active)}: {_render(v, active)}" for k, v in value.items())
        active.discard(marker)
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (set, frozenset)):
        active.add(marker)
        members = sorted(_render(m, active) for m in value)
        active.discard(marker)
        if isinstance(value, frozenset):
            return f"frozenset({{{', '.join(members)}}})" if members else "frozenset()"
        return "{" + ", ".join(members) + "}" if members else "set()"

    if isinstance(value, list):
        active.add(marker)
        rendered = ", ".join(_render(item, active) for item in value)
        active.discard(marker)
        return f"[{rendered}]"

    if isinstance(value, tuple):
        active.add(marker)
        parts = [_render(item, active) for item in value]
        active.discard(marker)
        if len(parts) == 1:
            return f"({parts[0]},)"
        return f"({', '.join(parts)})"

    return repr(value)


def inspect_key(key: Any) -> str:
    """Render a key to its canonical textual form.

    Examples:
        >>> inspect_key(1)
        '1'
        >>> inspect_key({"b": 2, "a": 1})
        "{'a': 1, 'b': 2}"
    """
    return _render(key, set())


def ensure_valid_key(key: Any) -> None:
    """Reject keys that can never be stored."""
    if callable(key):
        raise InvalidKeyError(key)


def coerce_key(key: Any) -> str:
    """Normalize a key for a string-keyed store.

    Raises:
        InvalidKeyError: If the key is callable.
    """
    ensure_valid_key(key)
    if isinstance(key, str):
        return key
    return inspect_key(key)


def native_key(key: Any) -> Any:
    """Validate a key for a native mapping store without converting it.

    Raises:
        InvalidKeyError: If the key is callable or unhashable.
    """
    ensure_valid_key(key)
    if not isinstance(key, Hashable):
        raise InvalidKeyError(key, "Key must be hashable")
    try:
        hash(key)
    except TypeError as e:
        raise InvalidKeyError(key, "Key must be hashable") from e
    return key
