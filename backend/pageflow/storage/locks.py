import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class PageLockRegistry:
    """
    One re-entrant lock per page id, created on demand and dropped when no
    thread holds or waits on it. Multiple ids are always taken in sorted
    order so two writers touching the same pair of pages cannot deadlock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[str, List] = {}  # page_id -> [RLock, users]

    def _checkout(self, page_id: str) -> threading.RLock:
        with self._guard:
            entry = self._entries.get(page_id)
            if entry is None:
                entry = self._entries[page_id] = [threading.RLock(), 0]
            entry[1] += 1
            return entry[0]

    def _checkin(self, page_id: str) -> None:
        with self._guard:
            entry = self._entries[page_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[page_id]

    @contextmanager
    def hold(self, *page_ids: str) -> Iterator[None]:
        ordered = sorted(set(page_ids))
        acquired = []
        try:
            for page_id in ordered:
                lock = self._checkout(page_id)
                acquired.append((page_id, lock))
                lock.acquire()
            yield
        finally:
            for page_id, lock in reversed(acquired):
                lock.release()
                self._checkin(page_id)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
