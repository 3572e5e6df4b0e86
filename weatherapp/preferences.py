from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)

LAST_CITY_KEY = "last_searched_city"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """
    Flat string map kept as a JSON object on disk.
    Writes go to a temporary file which then replaces the target.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def put(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("ignoring unreadable preferences file path=%s", self._path)
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".prefs-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class LastCityStore:
    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend

    def save(self, city: str) -> None:
        trimmed = city.strip()
        if not trimmed:
            return
        self._backend.put(LAST_CITY_KEY, trimmed)

    def load(self) -> str | None:
        return self._backend.get(LAST_CITY_KEY)

    def clear(self) -> None:
        self._backend.remove(LAST_CITY_KEY)

    def exists(self) -> bool:
        return self.load() is not None
