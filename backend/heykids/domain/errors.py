from __future__ import annotations


class StorageError(Exception):
    """Base class for persistence failures raised by stores and providers."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        return f"Unknown storage error: {self.detail}"


class FileNotFoundStorageError(StorageError):
    def _message(self) -> str:
        return f"File not found: {self.detail}"


class InvalidPathError(StorageError):
    def _message(self) -> str:
        return f"Invalid path: {self.detail!r}"


class EncodingFailedError(StorageError):
    def _message(self) -> str:
        return f"Encoding failed: {self.detail}"


class DecodingFailedError(StorageError):
    def _message(self) -> str:
        return f"Decoding failed: {self.detail}"


class WritePermissionDeniedError(StorageError):
    def _message(self) -> str:
        return f"Write permission denied: {self.detail}"


class DiskFullError(StorageError):
    def _message(self) -> str:
        return "Insufficient disk space" + (f": {self.detail}" if self.detail else "")


class DirectoryCreationFailedError(StorageError):
    def _message(self) -> str:
        return f"Directory creation failed: {self.detail}"


class CatalogError(ValueError):
    """Raised when the seed catalog is malformed or holds invalid movies."""
