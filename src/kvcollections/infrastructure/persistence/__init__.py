"""Persistence adapters for collections."""

from kvcollections.infrastructure.persistence.json_file_store import JsonFileStore

__all__ = ["JsonFileStore"]
