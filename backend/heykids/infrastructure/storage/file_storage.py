from __future__ import annotations

import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from heykids.domain.errors import (
    DecodingFailedError,
    DirectoryCreationFailedError,
    EncodingFailedError,
    FileNotFoundStorageError,
)
from heykids.infrastructure.storage.errors import storage_error_from_os, validate_name
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

APP_FOLDER = "HeyKidsWatchThis"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorageDirectory(str, Enum):
    DOCUMENTS = "documents"
    LIBRARY = "library"
    CACHES = "caches"
    TEMPORARY = "temporary"

    @property
    def folder(self) -> str:
        return "tmp" if self is StorageDirectory.TEMPORARY else self.value


class FileStorage:
    """JSON documents on disk, grouped into well-known directories.

    Every directory lives under ``<root>/<directory>/HeyKidsWatchThis``.
    Documents are plain JSON values or pydantic models; failures raise the
    ``StorageError`` taxonomy instead of ``OSError``.
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def directory_path(self, directory: StorageDirectory) -> Path:
        path = self.root / StorageDirectory(directory).folder / APP_FOLDER
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationFailedError(str(path)) from exc
        return path

    def get_file_path(self, file_name: str, directory: StorageDirectory) -> Path:
        return self.directory_path(directory) / validate_name(file_name)

    def save(self, obj: Any, file_name: str, directory: StorageDirectory = StorageDirectory.DOCUMENTS) -> Path:
        path = self.get_file_path(file_name, directory)
        try:
            data = obj.model_dump(mode="json", by_alias=True) if isinstance(obj, BaseModel) else obj
            payload = json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise EncodingFailedError(f"{file_name}: {exc}") from exc

        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{file_name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("file saved %s", format_kv(file=file_name, directory=directory, bytes=len(payload)))
        return path

    def load(
        self,
        file_name: str,
        directory: StorageDirectory = StorageDirectory.DOCUMENTS,
        model: Optional[type[ModelT]] = None,
    ) -> Any:
        path = self.get_file_path(file_name, directory)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc
        try:
            data = json.loads(text)
            return data if model is None else model.model_validate(data)
        except (ValueError, ValidationError) as exc:
            raise DecodingFailedError(f"{file_name}: {exc}") from exc

    def exists(self, file_name: str, directory: StorageDirectory = StorageDirectory.DOCUMENTS) -> bool:
        return self.get_file_path(file_name, directory).is_file()

    def delete(self, file_name: str, directory: StorageDirectory = StorageDirectory.DOCUMENTS) -> None:
        path = self.get_file_path(file_name, directory)
        if not path.is_file():
            raise FileNotFoundStorageError(str(path))
        try:
            path.unlink()
        except OSError as exc:
            raise storage_error_from_os(exc, path) from exc
        logger.debug("file deleted %s", format_kv(file=file_name, directory=directory))

    def list_files(self, directory: StorageDirectory = StorageDirectory.DOCUMENTS) -> list[str]:
        folder = self.directory_path(directory)
        try:
            return sorted(p.name for p in folder.iterdir() if p.is_file() and not p.name.startswith("."))
        except OSError as exc:
            raise storage_error_from_os(exc, folder) from exc
