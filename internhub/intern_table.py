"""InternTable: flyweight factory returning one shared instance per key (in-memory only)."""

import threading
from typing import Callable, Dict, Generic, Hashable, List, Optional, Set, TypeVar

from internhub.errors import InternHubError
from internhub.observability import Metrics, get_logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InternTable(Generic[K, V]):
    """
    Lazily builds and caches shared values by key. Entries live as long as the table;
    there is no eviction. Values are shared by every caller and must not be mutated.
    """

    def __init__(self, name: str = "default", metrics: Optional[Metrics] = None) -> None:
        self._name = name
        self._entries: Dict[K, V] = {}
        self._building: Set[K] = set()
        self._lock = threading.RLock()
        self._metrics = metrics if metrics is not None else Metrics()
        self._logger = get_logger(f"internhub.intern.{name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """
        Return the value interned under key, calling factory() only on a miss.
        If factory raises, the exception propagates and no entry is stored. A factory may
        intern other keys in this table, but not its own key (InternHubError).
        """
        with self._lock:
            if key in self._entries:
                self._metrics.increment("intern_hits")
                return self._entries[key]
            if key in self._building:
                raise InternHubError(f"factory for {key!r} re-entered its own key in table {self._name!r}")
            self._building.add(key)
            try:
                value = factory()
            finally:
                self._building.discard(key)
            self._entries[key] = value
            self._metrics.increment("intern_misses")
            self._metrics.set_gauge(f"interned.{self._name}", len(self._entries))
        self._logger.debug(
            "interned",
            extra={"table": self._name, "key": repr(key), "size": len(self._entries)},
        )
        return value

    def get(self, key: K) -> Optional[V]:
        """Return the interned value for key, or None; never creates."""
        with self._lock:
            return self._entries.get(key)

    def size(self) -> int:
        """Number of distinct values interned so far."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[K]:
        """Interned keys in creation order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __repr__(self) -> str:
        return f"InternTable(name={self._name!r}, size={len(self._entries)})"
