"""Subject: ordered observer list with synchronous, snapshot-based notification."""

import threading
from typing import TYPE_CHECKING, Any, List, Optional

from internhub.config import DispatchPolicy, default_dispatch_policy
from internhub.dispatch import dispatch
from internhub.observability import Metrics, get_logger

if TYPE_CHECKING:
    from internhub.observer import Observer


class Subject:
    """
    Owns an ordered list of observers. Duplicates are allowed; removal drops the first
    identity match. notify() walks a copy of the list taken at entry, so observers added
    or removed by an update() call only affect later notifications.
    """

    def __init__(
        self,
        name: str = "subject",
        policy: "DispatchPolicy | str | None" = None,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self._name = name
        self._observers: List["Observer"] = []
        self._lock = threading.Lock()
        self._policy = DispatchPolicy.parse(policy) if policy is not None else default_dispatch_policy()
        self._metrics = metrics if metrics is not None else Metrics()
        self._logger = get_logger(f"internhub.subject.{name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def policy(self) -> DispatchPolicy:
        return self._policy

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def add_observer(self, observer: "Observer") -> None:
        """Append an observer to the end of the list."""
        with self._lock:
            self._observers.append(observer)
            count = len(self._observers)
        self._logger.info(
            "observer_added",
            extra={"subject": self._name, "observer": repr(observer), "observer_count": count},
        )

    def remove_observer(self, observer: "Observer") -> None:
        """Remove the first occurrence of observer (by identity); no-op if absent."""
        with self._lock:
            index = self._index_of(observer, 0)
            if index < 0:
                return
            del self._observers[index]
        self._logger.info(
            "observer_removed",
            extra={"subject": self._name, "observer": repr(observer)},
        )

    def notify(self, context: Any = None) -> int:
        """Call update(context) on each observer registered at call time; return how many succeeded."""
        with self._lock:
            observers = list(self._observers)
        self._logger.info(
            "notifying",
            extra={"subject": self._name, "observer_count": len(observers)},
        )
        self._metrics.increment("notifications")
        delivered = dispatch(
            observers,
            lambda observer: observer.update(context),
            self._policy,
            self._logger,
            self._name,
        )
        self._metrics.increment("observer_updates", delivered)
        return delivered

    # ---- list helpers ----

    def count(self) -> int:
        with self._lock:
            return len(self._observers)

    def get(self, index: int) -> Optional["Observer"]:
        """Observer at index, or None when index is out of range (negative indices included)."""
        with self._lock:
            if 0 <= index < len(self._observers):
                return self._observers[index]
            return None

    def index_of(self, observer: "Observer", start: int = 0) -> int:
        """Index of the first identity match at or after start, or -1."""
        with self._lock:
            return self._index_of(observer, start)

    def remove_at(self, index: int) -> None:
        """Remove the observer at index; raises IndexError when out of range."""
        with self._lock:
            if not 0 <= index < len(self._observers):
                raise IndexError(f"observer index {index} out of range")
            del self._observers[index]

    def observers(self) -> List["Observer"]:
        """Return a copy of the observer list (under lock)."""
        with self._lock:
            return list(self._observers)

    def _index_of(self, observer: "Observer", start: int) -> int:
        for i in range(max(start, 0), len(self._observers)):
            if self._observers[i] is observer:
                return i
        return -1

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"Subject(name={self._name!r}, observers={len(self._observers)})"
