from __future__ import annotations

import errno
import os

from heykids.domain.errors import (
    DiskFullError,
    FileNotFoundStorageError,
    InvalidPathError,
    StorageError,
    WritePermissionDeniedError,
)

_NO_SPACE = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}
_NO_PERMISSION = {errno.EACCES, errno.EPERM, errno.EROFS}


def validate_name(name: str) -> str:
    """Reject names that are empty or would escape their directory."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidPathError(str(name))
    if "/" in name or "\\" in name or os.sep in name or name in {".", ".."}:
        raise InvalidPathError(name)
    return name


def storage_error_from_os(exc: OSError, path: object) -> StorageError:
    """Map an ``OSError`` raised while touching ``path`` onto the storage taxonomy."""
    if isinstance(exc, FileNotFoundError):
        return FileNotFoundStorageError(str(path))
    if isinstance(exc, PermissionError) or exc.errno in _NO_PERMISSION:
        return WritePermissionDeniedError(str(path))
    if exc.errno in _NO_SPACE:
        return DiskFullError(str(path))
    return StorageError(f"{path}: {exc}")
