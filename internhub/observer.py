"""Observer interface and a callable adapter."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class Observer(ABC):
    """Abstract base class for objects notified by a Subject."""

    def __init__(self, observer_id: Optional[str] = None) -> None:
        self._observer_id = observer_id or f"{self.__class__.__name__}@{id(self):x}"

    @property
    def observer_id(self) -> str:
        return self._observer_id

    @abstractmethod
    def update(self, context: Any) -> None:
        """Handle a notification from a subject. Must be implemented by subclasses."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._observer_id!r})"


class FunctionObserver(Observer):
    """Observer that forwards update(context) to a plain callable."""

    def __init__(self, func: Callable[[Any], None], observer_id: Optional[str] = None) -> None:
        super().__init__(observer_id or getattr(func, "__name__", None))
        self._func = func

    def update(self, context: Any) -> None:
        self._func(context)
