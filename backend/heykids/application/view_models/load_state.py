from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


class LoadingMixin:
    load_state: LoadState = LoadState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.load_state is LoadState.LOADING

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self.load_state = LoadState.LOADING
        try:
            yield
        finally:
            self.load_state = LoadState.IDLE
