"""
Frontier bookkeeping shared between crawl workers.

:class:`IdentifierSet` remembers every identifier ever admitted to the
crawl and is the single deduplication point.  :class:`WorkList` is the
ordered batch of identifiers for one generation.  Both are safe to mutate
from several worker threads.
"""

import threading
from typing import Iterable, Iterator


class IdentifierSet:
    """Thread-safe record of identifiers already admitted to the crawl."""

    def __init__(self, seen: Iterable[str] = ()) -> None:
        self._seen: set[str] = set(seen)
        self._lock = threading.Lock()

    def mark_and_check(self, handle: str) -> bool:
        """Record *handle* and return True if it was not seen before.

        Exactly one caller gets True for a given handle, however many
        threads race on it.
        """
        with self._lock:
            if handle in self._seen:
                return False
            self._seen.add(handle)
            return True

    def __contains__(self, handle: object) -> bool:
        with self._lock:
            return handle in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


class WorkList:
    """Append-only list of identifiers awaiting one generation's pass."""

    def __init__(self, handles: Iterable[str] = ()) -> None:
        self._handles: list[str] = list(handles)
        self._lock = threading.Lock()

    def append(self, handle: str) -> None:
        with self._lock:
            self._handles.append(handle)

    def extend(self, handles: Iterable[str]) -> None:
        with self._lock:
            self._handles.extend(handles)

    def snapshot(self) -> list[str]:
        with self._lock:
            return list(self._handles)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __bool__(self) -> bool:
        return len(self) > 0
