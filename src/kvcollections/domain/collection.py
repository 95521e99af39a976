"""Abstract collection contract shared by every backing representation.

Concrete collections supply key normalization, a factory for their own kind
and a JSON flattening; every query, transformation and persistence operation
is built here on top of a private ``dict`` store.
"""

import functools
import random
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any, ClassVar

from kvcollections.core.callbacks import adapt, require_callable
from kvcollections.core.exceptions import InvalidArgumentError, TypeMismatchError
from kvcollections.core.keys import MISSING, inspect_key
from kvcollections.core.logging import get_logger
from kvcollections.infrastructure.persistence import JsonFileStore

logger = get_logger(__name__)


def _take(items: list[Any], count: int | None) -> Any:
    """Pick the leading item, or the leading ``count`` items when ``count >= 2``.

    Returns MISSING when ``items`` is empty or ``count`` exceeds its length.
    """
    if not items:
        return MISSING
    if count is not None and count > len(items):
        return MISSING
    if count is None or count < 2:
        return items[0]
    return items[:count]


class Collection(ABC):
    """Associative container with a query and transformation API.

    Entries keep insertion order. Re-setting an existing key keeps its
    position; deleting and setting it again moves it to the end.

    Args:
        data: Optional seed. Accepts another collection, any mapping, an
            iterable of ``(key, value)`` pairs, or an iterable of mappings
            merged in order.

    Raises:
        InvalidArgumentError: If ``data`` is none of the accepted shapes.
    """

    kind: ClassVar[str] = "Collection"

    def __init__(self, data: Any = None) -> None:
        self._store: dict[Any, Any] = {}
        for key, value in self._seed_items(data):
            self._store[self._normalize(key)] = value

    # -- hooks supplied by concrete collections ---------------------------

    @abstractmethod
    def _normalize(self, key: Any) -> Any:
        """Map a caller key to its storage key."""
        ...

    @abstractmethod
    def create(self, data: Any = None) -> "Collection":
        """Create a new collection of the same kind, optionally seeded."""
        ...

    @abstractmethod
    def _json_object(self) -> dict[str, Any]:
        """Flatten the store into a string-keyed dict for JSON encoding."""
        ...

    def _install(self, data: dict[str, Any]) -> None:
        for key, value in data.items():
            self.set(key, value)

    @staticmethod
    def _seed_items(data: Any) -> Iterable[tuple[Any, Any]]:
        if data is None:
            return []
        if isinstance(data, Collection):
            return data.entries
        if isinstance(data, Mapping):
            return list(data.items())
        if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
            raise InvalidArgumentError(
                f"Cannot build a collection from {type(data).__name__}; expected a mapping, "
                "a collection, (key, value) pairs or a list of mappings"
            )

        items = list(data)
        if all(isinstance(item, (list, tuple)) and len(item) == 2 for item in items):
            return [(item[0], item[1]) for item in items]
        if all(isinstance(item, Mapping) for item in items):
            return [pair for item in items for pair in item.items()]
        raise InvalidArgumentError(
            "Sequence data must contain only (key, value) pairs or only mappings"
        )

    @staticmethod
    def _source_items(source: Any) -> list[tuple[Any, Any]]:
        if isinstance(source, Collection):
            return source.entries
        return list(source.items())

    # -- primitive storage operations -------------------------------------

    def set(self, key: Any, value: Any) -> "Collection":
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            InvalidKeyError: If the key is callable (or unhashable for a
                native map collection).
        """
        self._store[self._normalize(key)] = value
        return self

    def get(self, key: Any = MISSING) -> Any:
        """Return the value stored under ``key``, or None if it is absent."""
        if key is MISSING:
            return None
        return self._store.get(self._normalize(key))

    def has(self, key: Any = MISSING) -> bool:
        if key is MISSING or not self._store:
            return False
        return self._normalize(key) in self._store

    def delete(self, key: Any = MISSING) -> "Collection | None":
        """Remove ``key`` if present.

        Returns:
            The collection itself, or None when no key was given.
        """
        if key is MISSING:
            return None
        self._store.pop(self._normalize(key), None)
        return self

    def clear(self) -> bool:
        self.sweep(lambda: True)
        return True

    @property
    def size(self) -> int:
        return len(self._store)

    @property
    def count(self) -> int:
        return self.size

    @property
    def keys(self) -> list[Any]:
        return list(self._store.keys())

    @property
    def values(self) -> list[Any]:
        return list(self._store.values())

    @property
    def entries(self) -> list[tuple[Any, Any]]:
        return list(self._store.items())

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(self.entries)

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.size}) [{self.kind}] {self._store!r}"

    # -- searching --------------------------------------------------------

    def find(self, fn: Callable[..., Any]) -> Any:
        """Return the first value for which ``fn(value, key, collection)`` is truthy."""
        fn = adapt(fn, "find")
        for key, value in self.entries:
            if fn(value, key, self):
                return value
        return None

    def find_key(self, fn: Callable[..., Any]) -> Any:
        fn = adapt(fn, "find_key")
        for key, value in self.entries:
            if fn(value, key, self):
                return key
        return None

    def find_entry(self, fn: Callable[..., Any]) -> tuple[Any, Any] | None:
        fn = adapt(fn, "find_entry")
        for key, value in self.entries:
            if fn(value, key, self):
                return key, value
        return None

    def filter_keys(self, fn: Callable[..., Any]) -> list[Any]:
        fn = adapt(fn, "filter_keys")
        return [key for key, value in self.entries if fn(value, key, self)]

    def filter(self, fn: Callable[..., Any]) -> "Collection":
        """Build a new collection of the same kind from the matching entries."""
        fn = adapt(fn, "filter")
        return self.create([(key, value) for key, value in self.entries if fn(value, key, self)])

    def filter_entries(self, fn: Callable[..., Any]) -> list[tuple[Any, Any]]:
        fn = adapt(fn, "filter_entries")
        return [(key, value) for key, value in self.entries if fn(value, key, self)]

    # -- mapping and folding ----------------------------------------------

    def map(self, fn: Callable[..., Any]) -> list[Any]:
        """Return ``fn(value, key, collection)`` for every entry, in order."""
        fn = adapt(fn, "map")
        return [fn(value, key, self) for key, value in self.entries]

    def map_keys(self, fn: Callable[..., Any]) -> list[Any]:
        """Return ``fn(key, value, collection)`` for every entry, in order."""
        fn = adapt(fn, "map_keys")
        return [fn(key, value, self) for key, value in self.entries]

    def every(self, fn: Callable[..., Any]) -> bool:
        fn = adapt(fn, "every")
        return all(fn(value, key) for key, value in self.entries)

    def some(self, fn: Callable[..., Any]) -> bool:
        fn = adapt(fn, "some")
        return any(fn(value, key) for key, value in self.entries)

    def reduce(self, fn: Callable[[Any, Any], Any], initial: Any = MISSING) -> Any:
        """Left-fold the values with ``fn(accumulator, value)``.

        Raises:
            InvalidArgumentError: If ``fn`` is not callable, or the collection
                is empty and no initial value was given.
        """
        return self._fold(self.values, fn, initial, "reduce")

    def reduce_key(self, fn: Callable[[Any, Any], Any], initial: Any = MISSING) -> Any:
        return self._fold(self.keys, fn, initial, "reduce_key")

    @staticmethod
    def _fold(items: list[Any], fn: Any, initial: Any, operation: str) -> Any:
        fn = require_callable(fn, operation)
        if initial is MISSING:
            if not items:
                raise InvalidArgumentError(f"{operation}() of empty collection with no initial value")
            return functools.reduce(fn, items)
        return functools.reduce(fn, items, initial)

    def sort(self, compare: Callable[[Any, Any], int] | None = None) -> list[Any]:
        """Return the values sorted, leaving the collection untouched.

        Args:
            compare: Optional three-way comparator returning a negative, zero
                or positive number. Natural ordering is used when omitted,
                falling back to the text form of each item for mixed types.
        """
        return self._sorted(self.values, compare, "sort")

    def sort_keys(self, compare: Callable[[Any, Any], int] | None = None) -> list[Any]:
        return self._sorted(self.keys, compare, "sort_keys")

    @staticmethod
    def _sorted(items: list[Any], compare: Any, operation: str) -> list[Any]:
        if compare is None:
            try:
                return sorted(items)
            except TypeError:
                # Mixed types order by their text form
                return sorted(items, key=_text_key)
        compare = require_callable(compare, operation)
        return sorted(items, key=functools.cmp_to_key(compare))

    # -- membership -------------------------------------------------------

    def has_all(self, *keys: Any) -> bool:
        return all(self.has(key) for key in keys)

    def has_any(self, *keys: Any) -> bool:
        return any(self.has(key) for key in keys)

    def has_value(self, value: Any) -> bool:
        if not self._store:
            return False
        return value in self.values

    def has_all_values(self, *values: Any) -> bool:
        return all(self.has_value(value) for value in values)

    def has_any_value(self, *values: Any) -> bool:
        return any(self.has_value(value) for value in values)

    # -- positional access ------------------------------------------------

    def first_key(self, count: int | None = None) -> Any:
        """Return the first key, or a list of the first ``count`` keys when ``count >= 2``.

        Returns None when the collection is empty or ``count`` exceeds its size.
        """
        found = _take(self.keys, count)
        return None if found is MISSING else found

    def last_key(self, count: int | None = None) -> Any:
        """Like ``first_key`` from the end; lists are ordered last to first."""
        found = _take(self.reverse_keys(), count)
        return None if found is MISSING else found

    def first(self, count: int | None = None) -> Any:
        found = _take(self.values, count)
        return None if found is MISSING else found

    def last(self, count: int | None = None) -> Any:
        found = _take(self.reverse_values(), count)
        return None if found is MISSING else found

    def at(self, index: int) -> Any:
        """Return the value at ``index``; negative indexes count from the end."""
        values = self.values
        if not values:
            return None
        try:
            return values[index]
        except IndexError:
            return None

    def key_at(self, index: int) -> Any:
        keys = self.keys
        if not keys:
            return None
        try:
            return keys[index]
        except IndexError:
            return None

    def random_key(self, start: int | None = None, end: int | None = None) -> Any:
        """Pick a key uniformly at random from the window ``keys[start:end]``."""
        window = self.keys[start:end]
        if not window:
            return None
        return random.choice(window)

    def random(self, start: int | None = None, end: int | None = None) -> Any:
        window = self.entries[start:end]
        if not window:
            return None
        return random.choice(window)[1]

    # -- derived copies ---------------------------------------------------

    def reverse(self) -> "Collection":
        return self.create(list(reversed(self.entries)))

    def reverse_values(self) -> list[Any]:
        return list(reversed(self.values))

    def reverse_keys(self) -> list[Any]:
        return list(reversed(self.keys))

    def array(self) -> list[Any]:
        return self.values

    def keys_array(self) -> list[Any]:
        return self.keys

    def slice(self, start: int = 0, end: int = 1) -> "Collection":
        """Build a new collection from the entries in ``[start, end)``."""
        return self.create(self.entries[start:end])

    def clone(self) -> "Collection":
        return self.create(self.entries)

    def split(self, fn: Callable[..., Any]) -> tuple["Collection", "Collection"]:
        """Partition into ``(matching, rest)`` collections of the same kind."""
        fn = adapt(fn, "split")
        matching, rest = self.create(), self.create()
        for key, value in self.entries:
            (matching if fn(value, key, self) else rest).set(key, value)
        return matching, rest

    def concat(self, *collections: Any) -> "Collection":
        """Return a clone of this collection with every argument merged in order.

        Later arguments win on key collisions. Neither this collection nor
        the arguments are modified.

        Raises:
            TypeMismatchError: If an argument is not a collection or mapping.
        """
        for other in collections:
            if not isinstance(other, (Collection, Mapping)):
                raise TypeMismatchError(
                    "The collections specified must be collections or mappings, "
                    f"got {type(other).__name__}"
                )

        merged = self.clone()
        for other in collections:
            for key, value in self._source_items(other):
                merged.set(key, value)
        return merged

    # -- comparison and side effects --------------------------------------

    def equal(self, other: Any) -> bool:
        """Check whether ``other`` holds the same keys with equal values.

        Mappings are first normalized into this collection's kind.

        Raises:
            TypeMismatchError: If ``other`` is not a collection or mapping.
        """
        if other is self:
            return True
        if not isinstance(other, (Collection, Mapping)):
            raise TypeMismatchError(
                f"Cannot compare a collection with {type(other).__name__}"
            )
        if len(other) != self.size:
            return False
        if not isinstance(other, Collection):
            other = self.create(other)
            if other.size != self.size:
                return False

        for key, value in self.entries:
            if not other.has(key) or other.get(key) != value:
                return False
        return True

    def tap(self, fn: Callable[["Collection"], Any]) -> "Collection":
        fn = require_callable(fn, "tap")
        fn(self)
        return self

    def each(self, fn: Callable[..., Any]) -> None:
        return self.for_each(fn)

    def for_each(self, fn: Callable[..., Any]) -> None:
        """Call ``fn(value, key, collection)`` for every entry."""
        fn = adapt(fn, "for_each")
        for key, value in self.entries:
            fn(value, key, self)

    # -- deletion ---------------------------------------------------------

    def sweep(self, fn: Callable[..., Any]) -> int:
        """Delete every entry matching ``fn(value, key, collection)``.

        Returns:
            Number of entries removed.
        """
        fn = adapt(fn, "sweep")
        before = self.size
        for key, value in self.entries:
            if fn(value, key, self):
                self._store.pop(key, None)
        return before - self.size

    def delete_at(self, index: int) -> "Collection | None":
        keys = self.keys
        if not keys:
            return None
        try:
            key = keys[index]
        except IndexError:
            return None
        self._store.pop(key, None)
        return self

    def delete_first(self, count: int | None = None) -> "Collection | None":
        return self._delete_resolved(_take(self.keys, count))

    def delete_last(self, count: int | None = None) -> "Collection | None":
        return self._delete_resolved(_take(self.reverse_keys(), count))

    def _delete_resolved(self, found: Any) -> "Collection | None":
        if found is MISSING:
            return None
        for key in found if isinstance(found, list) else [found]:
            self._store.pop(key, None)
        return self

    def delete_range(self, start: int = 0, end: int = 1) -> "Collection":
        for key in self.keys[start:end]:
            self._store.pop(key, None)
        return self

    # -- serialization and persistence ------------------------------------

    def to_json(self) -> str:
        return JsonFileStore().encode(self._json_object())

    def save(self, path: str | Path, overwrite: bool = True) -> Awaitable[bool]:
        """Write the collection to a JSON file.

        The path is validated immediately; the returned awaitable performs
        the write. With ``overwrite=False`` the configured
        ``save_append_strategy`` decides between appending the JSON text to
        the file and merging into the object already stored there.

        The JSON text is encoded at call time, so later changes to the
        collection or to nested values do not reach the file.

        Raises:
            PathValidationError: If the path is not a JSON file path.
        """
        store = JsonFileStore()
        target = store.resolve_path(path)
        snapshot = self._json_object()
        return self._save(store, target, overwrite, store.encode(snapshot), len(snapshot))

    async def _save(
        self,
        store: JsonFileStore,
        target: Path,
        overwrite: bool,
        content: str,
        entries: int,
    ) -> bool:
        if overwrite:
            await store.write(target, content)
            mode = "overwrite"
        elif store.settings.save_append_strategy == "merge":
            await store.merge(target, store.decode(content, target))
            mode = "merge"
        else:
            await store.append(target, content)
            mode = "append"
        logger.debug("Collection saved", path=str(target), mode=mode, entries=entries)
        return True

    def load(self, path: str | Path, overwrite: bool = True) -> Awaitable["Collection"]:
        """Read entries from a JSON file into this collection.

        With ``overwrite=True`` the collection is cleared and replaced by the
        file content; otherwise the file entries are merged in through
        ``set``. The awaitable resolves to the collection itself.

        Raises:
            PathValidationError: If the path is not a JSON file path.
            DataFormatError: When awaited, if the file is empty or does not
                hold a JSON object.
        """
        store = JsonFileStore()
        target = store.resolve_path(path)
        return self._load(store, target, overwrite)

    async def _load(self, store: JsonFileStore, target: Path, overwrite: bool) -> "Collection":
        data = await store.read(target)
        if overwrite:
            self.clear()
            self._install(data)
        else:
            for key, value in data.items():
                self.set(key, value)
        logger.debug(
            "Collection loaded",
            path=str(target),
            mode="overwrite" if overwrite else "merge",
            entries=self.size,
        )
        return self


def flatten_keys(entries: Iterable[tuple[Any, Any]]) -> dict[str, Any]:
    """Convert entries to a string-keyed dict, inspecting non-string keys."""
    return {_text_key(key): value for key, value in entries}


def _text_key(item: Any) -> str:
    return item if isinstance(item, str) else inspect_key(item)
