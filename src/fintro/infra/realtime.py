"""In-process change feed emulating real-time collection listeners.

Every subscription is bound to a ``(collection, user_id)`` pair and a fetch
callable returning the current snapshot. Subscribers receive the snapshot
immediately and again after every ``notify`` for their pair.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Callable, Generic, Sequence, TypeVar

from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
SnapshotListener = Callable[[list[T]], None]


class Subscription:
    """Handle returned by ``subscribe``; ``cancel`` stops further deliveries."""

    def __init__(self, on_cancel: Callable[["Subscription"], None]):
        self._on_cancel = on_cancel
        self._lock = threading.Lock()
        self.active = True

    def cancel(self) -> None:
        with self._lock:
            if not self.active:
                return
            self.active = False
        self._on_cancel(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class _Entry(Generic[T]):
    __slots__ = ("subscription", "fetch", "listener")

    def __init__(
        self,
        subscription: Subscription,
        fetch: Callable[[], Sequence[T]],
        listener: SnapshotListener,
    ):
        self.subscription = subscription
        self.fetch = fetch
        self.listener = listener


class ChangeFeed:
    """Fan out collection snapshots to subscribers after each write.

    Fetching and delivering a snapshot happen under a lock per
    ``(collection, user_id)``, so listeners see snapshots in the order they
    were read and the last delivery always reflects the latest write.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[tuple[str, str], list[_Entry]] = defaultdict(list)
        self._delivery_locks: dict[tuple[str, str], threading.RLock] = {}

    def subscribe(
        self,
        collection: str,
        user_id: str,
        fetch: Callable[[], Sequence[T]],
        listener: SnapshotListener,
    ) -> Subscription:
        """Register ``listener`` and deliver the current snapshot right away."""

        key = (collection, user_id)

        def _remove(sub: Subscription) -> None:
            with self._lock:
                self._entries[key] = [e for e in self._entries[key] if e.subscription is not sub]
                if not self._entries[key]:
                    del self._entries[key]
            logger.debug("Listener removed", extra={"collection": collection})

        subscription = Subscription(_remove)
        entry = _Entry(subscription, fetch, listener)
        with self._lock:
            self._entries[key].append(entry)
        logger.debug("Listener added", extra={"collection": collection})
        with self._delivery_lock(key):
            self._deliver(collection, entry)
        return subscription

    def notify(self, collection: str, user_id: str) -> int:
        """Push a fresh snapshot to every listener on the pair; returns count."""

        key = (collection, user_id)
        with self._delivery_lock(key):
            with self._lock:
                entries = list(self._entries.get(key, ()))
            for entry in entries:
                self._deliver(collection, entry)
        return len(entries)

    def listener_count(self, collection: str, user_id: str) -> int:
        with self._lock:
            return len(self._entries.get((collection, user_id), ()))

    def _delivery_lock(self, key: tuple[str, str]) -> threading.RLock:
        # Reentrant: a listener may write to the same collection.
        with self._lock:
            lock = self._delivery_locks.get(key)
            if lock is None:
                lock = self._delivery_locks[key] = threading.RLock()
            return lock

    def _deliver(self, collection: str, entry: _Entry) -> None:
        if not entry.subscription.active:
            return
        try:
            snapshot = list(entry.fetch())
            entry.listener(snapshot)
        except Exception:
            logger.exception("Snapshot listener failed", extra={"collection": collection})
