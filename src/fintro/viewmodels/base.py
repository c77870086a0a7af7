"""Observer plumbing shared by the view-models."""

from __future__ import annotations

from typing import Any, Callable

from ..logging_config import get_logger

logger = get_logger(__name__)

Observer = Callable[[], None]
Dispatcher = Callable[[Callable[[], None]], Any]


def run_inline(task: Callable[[], None]) -> None:
    """Default dispatcher: run the task on the calling thread."""
    task()


class ObservableViewModel:
    """Lets views register callbacks fired whenever published state changes."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add_observer(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a function that removes it."""

        self._observers.append(observer)

        def _remove() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _remove

    def notify_observers(self) -> None:
        for observer in list(self._observers):
            try:
                observer()
            except Exception:
                logger.exception(f"{type(self).__name__} observer failed")
