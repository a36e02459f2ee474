from __future__ import annotations

import os
import tomllib
from typing import Any, Protocol

import tomli_w
from platformdirs import user_data_dir

from .errors import StorageError
from .settings import APP_NAME

STORAGE_FILENAME = "storage.toml"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _check_value(key: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"storage value for {key!r} must be str, got {type(value).__name__}")


class MemoryStorage:
    """Process-lifetime store, the session-storage counterpart."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        _check_value(key, value)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


def storage_path() -> str:
    return f"{user_data_dir(APP_NAME)}/{STORAGE_FILENAME}"


class FileStorage:
    """Persistent string store kept as a flat TOML table.

    The file is re-read on every ``get`` so that values written by another
    process (or another client instance) are picked up immediately.
    """

    def __init__(self, path: str | None = None):
        self._path = path

    @property
    def path(self) -> str:
        return self._path or storage_path()

    def _load(self) -> dict[str, Any]:
        path = self.path
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise StorageError(path, str(e)) from e
        return data

    def _save(self, data: dict[str, Any]) -> None:
        path = self.path
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as f:
            f.write(tomli_w.dumps(data).encode("utf-8"))
        os.chmod(path, 0o600)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        _check_value(key, value)
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)
