"""Collection types.

Both collection kinds share the operations defined on ``Collection`` and
differ only in how keys are stored.
"""

from kvcollections.domain.collection import Collection
from kvcollections.domain.map_collection import NativeMapCollection
from kvcollections.domain.object_collection import ObjectCollection

__all__ = [
    "Collection",
    "NativeMapCollection",
    "ObjectCollection",
]
