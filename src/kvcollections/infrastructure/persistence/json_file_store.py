"""Whole-file JSON persistence for collections.

Path validation is synchronous so bad paths fail before any I/O is scheduled.
Reads and writes run in a worker thread via ``asyncio.to_thread``; OS errors
propagate unchanged.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from kvcollections.core.config import Settings, get_settings
from kvcollections.core.exceptions import DataFormatError, PathValidationError
from kvcollections.core.logging import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    """Reads and writes JSON object documents for a collection."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def base_dir(self) -> Path:
        return Path(self.settings.base_dir) if self.settings.base_dir else Path.cwd()

    def resolve_path(self, path: Any) -> Path:
        """Validate a target path and resolve it against the base directory.

        Args:
            path: A ``str`` or ``os.PathLike`` naming a JSON file.

        Returns:
            Path: Absolute path of the file.

        Raises:
            PathValidationError: If the path is not a string/path, is empty,
                or lacks an accepted JSON extension.
        """
        if not isinstance(path, (str, os.PathLike)):
            raise PathValidationError("Path must be a non-empty string.", path)

        raw = os.fspath(path)
        if not isinstance(raw, str) or not raw.strip():
            raise PathValidationError("Path must be a non-empty string.", path)

        extensions = self.settings.json_extensions
        if not any(raw.endswith(ext) for ext in extensions):
            raise PathValidationError(
                f"The specified path must be of a json file ({', '.join(extensions)}).",
                path,
            )

        target = Path(raw)
        if not target.is_absolute():
            target = self.base_dir / target
        return target

    def encode(self, data: dict[str, Any]) -> str:
        return json.dumps(
            data,
            indent=self.settings.json_indent,
            ensure_ascii=self.settings.json_ensure_ascii,
        )

    def decode(self, text: str, path: Path | None = None) -> dict[str, Any]:
        """Parse a JSON object document.

        Raises:
            DataFormatError: If the text is empty, malformed, or not an object.
        """
        if not text.strip():
            raise DataFormatError("The file must not be empty and must have a valid json data.", path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataFormatError(
                f"The file must not be empty and must have a valid json data: {e.msg}",
                path,
            ) from e
        if not isinstance(data, dict):
            raise DataFormatError(
                f"Expected a JSON object, got {type(data).__name__}.",
                path,
            )
        return data

    async def write(self, path: Path, content: str) -> None:
        await asyncio.to_thread(path.write_text, content, encoding=self.settings.file_encoding)
        logger.debug("Collection file written", path=str(path), size=len(content))

    async def append(self, path: Path, content: str) -> None:
        def _append() -> None:
            with open(path, "a", encoding=self.settings.file_encoding) as f:
                f.write(content)

        await asyncio.to_thread(_append)
        logger.debug("Collection file appended", path=str(path), size=len(content))

    async def read(self, path: Path) -> dict[str, Any]:
        text = await asyncio.to_thread(path.read_text, encoding=self.settings.file_encoding)
        data = self.decode(text, path)
        logger.debug("Collection file read", path=str(path), entries=len(data))
        return data

    async def merge(self, path: Path, data: dict[str, Any]) -> None:
        """Overlay ``data`` on the object already stored at ``path`` and rewrite it."""
        existing: dict[str, Any] = {}
        if await asyncio.to_thread(path.exists):
            text = await asyncio.to_thread(path.read_text, encoding=self.settings.file_encoding)
            if text.strip():
                existing = self.decode(text, path)
        existing.update(data)
        await self.write(path, self.encode(existing))
