"""Exception types raised by the intern table, subjects and topic registry."""

from typing import Any, List, Tuple


class InternHubError(Exception):
    """Base class for internhub errors."""


class ConfigError(InternHubError):
    """Raised when an environment setting has an invalid value."""


class RecordNotFoundError(InternHubError, KeyError):
    """Raised when a library record id is not registered."""

    def __init__(self, record_id: Any) -> None:
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"record {self.record_id!r} not found"


class DispatchError(InternHubError):
    """
    Raised after a CONTINUE dispatch pass in which one or more receivers failed.
    failures holds (receiver, exception) pairs in dispatch order.
    """

    def __init__(self, failures: List[Tuple[Any, BaseException]]) -> None:
        self.failures = list(failures)
        super().__init__(f"{len(self.failures)} receiver(s) failed during dispatch")

    @property
    def exceptions(self) -> List[BaseException]:
        return [exc for _, exc in self.failures]
