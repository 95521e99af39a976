"""Native map backed collection.

Keys keep their own identity and type, following Python's hash and equality
rules: ``1`` and ``"1"`` are distinct keys, while ``1``, ``1.0`` and ``True``
compare equal and therefore share an entry. Keys must be hashable.
"""

from typing import Any, ClassVar

from kvcollections.core.keys import native_key
from kvcollections.domain.collection import Collection, flatten_keys


class NativeMapCollection(Collection):
    """Collection over a native ordered mapping with no key coercion.

    ``to_json`` flattens non-string keys to their inspected text, so a JSON
    round-trip does not preserve key types.

    Example:
        >>> col = NativeMapCollection([[1, "x"], [2, "y"]])
        >>> col.get(1), col.get("1")
        ('x', None)
    """

    kind: ClassVar[str] = "Map"

    def _normalize(self, key: Any) -> Any:
        return native_key(key)

    def create(self, data: Any = None) -> "NativeMapCollection":
        return NativeMapCollection(data)

    def _json_object(self) -> dict[str, Any]:
        return flatten_keys(self._store.items())
