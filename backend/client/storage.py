"""File-backed key/value storage for the Supabase auth session."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class FileSessionStorage:
    """
    Persist auth storage items in a small JSON file.

    Implements the ``get_item``/``set_item``/``remove_item`` contract the
    Supabase auth client expects from its storage backend. The file is
    created with owner-only permissions since it holds refresh tokens.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        logger.debug("Getting auth item %s: %s", key, "found" if value else "not found")
        return value

    def set_item(self, key: str, value: str) -> None:
        logger.debug("Setting auth item %s", key)
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        logger.debug("Removing auth item %s", key)
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f)
