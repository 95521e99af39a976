"""Unit tests for JsonFileStore."""

from pathlib import Path

import pytest

from kvcollections.core.config import Settings
from kvcollections.core.exceptions import DataFormatError, PathValidationError
from kvcollections.infrastructure.persistence import JsonFileStore


class TestResolvePath:
    """Synchronous path validation."""

    def test_relative_path_resolves_against_cwd(self, workdir):
        store = JsonFileStore(Settings())
        assert store.resolve_path("data.json") == workdir / "data.json"
        assert store.resolve_path(Path("nested/data.json")) == workdir / "nested" / "data.json"

    def test_absolute_path_kept(self, workdir, tmp_path):
        target = tmp_path / "abs.json"
        assert JsonFileStore(Settings()).resolve_path(str(target)) == target

    def test_base_dir_setting(self, workdir, tmp_path):
        base = tmp_path / "base"
        store = JsonFileStore(Settings(base_dir=str(base)))
        assert store.resolve_path("x.json") == base / "x.json"

    @pytest.mark.parametrize("path", [None, 12, b"data.json", ["a.json"]])
    def test_non_string_rejected(self, workdir, path):
        with pytest.raises(PathValidationError, match="non-empty string"):
            JsonFileStore(Settings()).resolve_path(path)

    @pytest.mark.parametrize("path", ["", "   ", "data.txt", "data.json.bak", "json"])
    def test_wrong_extension_rejected(self, workdir, path):
        with pytest.raises(PathValidationError):
            JsonFileStore(Settings()).resolve_path(path)

    def test_custom_extensions(self, workdir):
        store = JsonFileStore(Settings(json_extensions=[".jsonc"]))
        assert store.resolve_path("a.jsonc").name == "a.jsonc"
        with pytest.raises(PathValidationError, match=".jsonc"):
            store.resolve_path("a.json")

    def test_error_is_value_error(self, workdir):
        with pytest.raises(ValueError):
            JsonFileStore(Settings()).resolve_path("a.txt")


class TestDecode:

    def test_decode_object(self, workdir):
        assert JsonFileStore(Settings()).decode('{"a": [1]}') == {"a": [1]}

    @pytest.mark.parametrize("text", ["", "  \n", "{not json", "[1, 2]", "3"])
    def test_decode_rejects(self, workdir, text):
        with pytest.raises(DataFormatError):
            JsonFileStore(Settings()).decode(text, Path("x.json"))


class TestFileIO:
    """Asynchronous reads and writes."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, workdir):
        store = JsonFileStore(Settings())
        target = store.resolve_path("out.json")

        await store.write(target, store.encode({"a": 1}))

        assert target.read_text(encoding="utf-8") == '{"a": 1}'
        assert await store.read(target) == {"a": 1}

    @pytest.mark.asyncio
    async def test_append(self, workdir):
        store = JsonFileStore(Settings())
        target = store.resolve_path("out.json")

        await store.append(target, "{}")
        await store.append(target, '{"a": 1}')

        assert target.read_text(encoding="utf-8") == '{}{"a": 1}'

    @pytest.mark.asyncio
    async def test_merge_into_existing(self, workdir):
        store = JsonFileStore(Settings())
        target = store.resolve_path("out.json")
        target.write_text('{"a": 1, "b": 2}', encoding="utf-8")

        await store.merge(target, {"b": 20, "c": 30})

        assert await store.read(target) == {"a": 1, "b": 20, "c": 30}

    @pytest.mark.asyncio
    async def test_merge_into_missing_or_empty_file(self, workdir):
        store = JsonFileStore(Settings())
        missing = store.resolve_path("missing.json")
        empty = store.resolve_path("empty.json")
        empty.write_text("", encoding="utf-8")

        await store.merge(missing, {"a": 1})
        await store.merge(empty, {"b": 2})

        assert await store.read(missing) == {"a": 1}
        assert await store.read(empty) == {"b": 2}

    @pytest.mark.asyncio
    async def test_read_missing_file_raises_os_error(self, workdir):
        store = JsonFileStore(Settings())
        with pytest.raises(FileNotFoundError):
            await store.read(store.resolve_path("nope.json"))

    @pytest.mark.asyncio
    async def test_read_empty_file(self, workdir):
        store = JsonFileStore(Settings())
        target = store.resolve_path("empty.json")
        target.write_text("", encoding="utf-8")

        with pytest.raises(DataFormatError) as exc_info:
            await store.read(target)
        assert exc_info.value.path == target
