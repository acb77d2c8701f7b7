from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorePort(Protocol):
    """String-keyed store of JSON-compatible documents."""

    def save(self, key: str, value: Any) -> None: ...

    def load(self, key: str) -> Optional[Any]: ...

    def remove(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...

    def keys(self) -> list[str]: ...

    def remove_all(self) -> None: ...
