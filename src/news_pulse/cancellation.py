"""Cooperative cancellation for one orchestration generation."""

import threading


class FetchCancelled(Exception):
    """Raised inside an adapter when its generation has been superseded."""


class CancelToken:
    """Shared by every adapter task of one generation.

    Adapters poll it at each I/O boundary; setting it never interrupts a
    request that is already on the wire.
    """

    def __init__(self, generation: int) -> None:
        self.generation = generation
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise FetchCancelled(f"generation {self.generation} superseded")

    def __repr__(self) -> str:
        return f"<CancelToken generation={self.generation} cancelled={self.cancelled}>"
