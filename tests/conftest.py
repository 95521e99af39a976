"""Pytest configuration for all tests."""

import os
from pathlib import Path
from typing import Generator

import pytest

from kvcollections.core.config import get_settings
from kvcollections.domain import NativeMapCollection, ObjectCollection


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("KVCOLLECTIONS_"):
            monkeypatch.delenv(name)
    return tmp_path


@pytest.fixture(params=[ObjectCollection, NativeMapCollection], ids=["object", "native_map"])
def collection_cls(request: pytest.FixtureRequest) -> type:
    """Parametrize a test over both collection kinds."""
    return request.param


@pytest.fixture
def letters(collection_cls: type):
    """Five entries a..e mapped to 1..5."""
    return collection_cls({"a": 1, "b": 2, "c": 3, "d": 4, "e": 5})
