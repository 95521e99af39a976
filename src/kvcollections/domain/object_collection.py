"""JSON-object backed collection.

Every key is stored as a string. Non-string keys are stored under their
inspected form (see ``kvcollections.core.keys``), so ``set(1, "x")`` and
``get("1")`` address the same entry.
"""

from typing import Any, ClassVar

from kvcollections.core.keys import coerce_key
from kvcollections.domain.collection import Collection


class ObjectCollection(Collection):
    """Collection keyed by strings, suitable for direct JSON persistence.

    Example:
        >>> col = ObjectCollection({"hii": "hello", "ok": "bye"})
        >>> col.set(1, "one").get("1")
        'one'
    """

    kind: ClassVar[str] = "JSON"

    def _normalize(self, key: Any) -> str:
        return coerce_key(key)

    def create(self, data: Any = None) -> "ObjectCollection":
        return ObjectCollection(data)

    def _json_object(self) -> dict[str, Any]:
        return dict(self._store)

    def _install(self, data: dict[str, Any]) -> None:
        # JSON object keys are already strings
        self._store = data
