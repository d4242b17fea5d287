from __future__ import annotations
import queue
import sys
from typing import Callable, List, Optional, Protocol, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from .search import FoundPrime


class ResultSink(Protocol):
    def emit(self, found: "FoundPrime") -> None: ...


class ConsoleSink:
    """Prints `<index>: <value>` per prime."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def emit(self, found: "FoundPrime") -> None:
        print(f"{found.index}: {found.value}", file=self.stream or sys.stdout, flush=True)


class CollectingSink:
    def __init__(self):
        self.items: List["FoundPrime"] = []

    def emit(self, found: "FoundPrime") -> None:
        self.items.append(found)


class CallbackSink:
    def __init__(self, fn: Callable[["FoundPrime"], None]):
        self.fn = fn

    def emit(self, found: "FoundPrime") -> None:
        self.fn(found)


class QueueSink:
    """Hands results to a consumer thread; close() pushes the sentinel."""

    def __init__(self, q: Optional[queue.Queue] = None, sentinel=None):
        self.queue = q if q is not None else queue.Queue()
        self.sentinel = sentinel

    def emit(self, found: "FoundPrime") -> None:
        self.queue.put(found)

    def close(self) -> None:
        self.queue.put(self.sentinel)

    def drain(self) -> List["FoundPrime"]:
        out = []
        while True:
            try:
                item = self.queue.get_nowait()
            except queue.Empty:
                return out
            if item is self.sentinel:
                return out
            out.append(item)
