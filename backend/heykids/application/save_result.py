from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from heykids.domain.errors import StorageError
from heykids.utils import format_kv


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a service mutation.

    ``changed`` is False for no-ops (nothing was written). ``ok`` is False when
    the in-memory change was applied but writing it through failed.
    """

    changed: bool
    ok: bool = True
    error: Optional[StorageError] = None

    @classmethod
    def unchanged(cls) -> "SaveResult":
        return cls(changed=False)


def write_through(
    action: Callable[[], None],
    *,
    what: str,
    logger: logging.Logger,
    raise_on_error: bool,
) -> SaveResult:
    try:
        action()
    except StorageError as exc:
        logger.warning("save failed %s", format_kv(what=what, error=str(exc)))
        if raise_on_error:
            raise
        return SaveResult(changed=True, ok=False, error=exc)
    return SaveResult(changed=True)
