"""Persistence helpers for JSON-backed storage files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Optional, Union


class PersistenceError(Exception):
    """Storage is unavailable or its contents could not be (de)serialized."""


class JsonFileStore:
    """Read/write a single JSON document on disk.

    A missing file reads as ``default``. Anything else that goes wrong is
    logged and surfaced as :class:`PersistenceError`; callers decide whether to
    retry.
    """

    def __init__(self, file_path: Union[str, Path], *, logger: Any) -> None:
        self._path = Path(file_path)
        self._logger = logger

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, expected: type = list, default: Optional[Any] = None) -> Any:
        """Load the document, checking it has the ``expected`` top-level type."""

        fallback = expected() if default is None else default
        if not self._path.exists():
            self._logger.debug("Storage file %s does not exist; starting empty", self._path)
            return fallback

        try:
            with self._path.open('r', encoding='utf-8') as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            self._logger.error("Failed to load %s: %s", self._path, exc)
            raise PersistenceError(f"Could not read {self._path}: {exc}") from exc

        if not isinstance(payload, expected):
            self._logger.error(
                "Invalid storage format in %s; expected %s, received %s",
                self._path,
                expected.__name__,
                type(payload).__name__,
            )
            raise PersistenceError(
                f"Invalid storage format in {self._path}: expected {expected.__name__}"
            )

        self._logger.debug("Loaded %s from %s", type(payload).__name__, self._path)
        return payload

    def save(self, payload: Any) -> None:
        """Persist the document atomically, ensuring parent directories exist."""

        tmp_path: Optional[Path] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                'w', encoding='utf-8', dir=self._path.parent, delete=False
            ) as handle:
                tmp_path = Path(handle.name)
                json.dump(payload, handle, indent=2, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            tmp_path.replace(self._path)
        except (OSError, TypeError, ValueError) as exc:
            self._logger.error("Failed to save %s: %s", self._path, exc)
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(f"Could not write {self._path}: {exc}") from exc

        self._logger.debug("Saved %s", self._path)


__all__ = ["JsonFileStore", "PersistenceError"]
