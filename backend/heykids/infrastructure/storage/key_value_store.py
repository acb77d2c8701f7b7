from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from heykids.application.ports.key_value_store_port import KeyValueStorePort
from heykids.domain.errors import (
    DecodingFailedError,
    DirectoryCreationFailedError,
    EncodingFailedError,
)
from heykids.infrastructure.storage.errors import storage_error_from_os, validate_name
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=True, indent=2)
    except (TypeError, ValueError) as exc:
        raise EncodingFailedError(f"{key}: {exc}") from exc


class InMemoryKeyValueStore(KeyValueStorePort):
    """Dict-backed store; values are copied through JSON on the way in and out."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def save(self, key: str, value: Any) -> None:
        validate_name(key)
        self._data[key] = _encode(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return sorted(self._data)

    def remove_all(self) -> None:
        self._data.clear()


class JsonFileKeyValueStore(KeyValueStorePort):
    """One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace`` so a crash never leaves a half-written document.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationFailedError(str(self.directory)) from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{validate_name(key)}{_SUFFIX}"

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        payload = _encode(key, value)
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("kv saved %s", format_kv(key=key, bytes=len(payload)))

    def load(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc
        try:
            return json.loads(text)
        except ValueError as exc:
            raise DecodingFailedError(f"{key}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def keys(self) -> list[str]:
        return sorted(p.name[: -len(_SUFFIX)] for p in self.directory.glob(f"*{_SUFFIX}") if p.is_file())

    def remove_all(self) -> None:
        for key in self.keys():
            self.remove(key)
