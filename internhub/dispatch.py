"""Synchronous fan-out shared by Subject.notify and Topic.deliver."""

import logging
from typing import Any, Callable, Iterable, List, Tuple

from internhub.config import DispatchPolicy
from internhub.errors import DispatchError


def dispatch(
    receivers: Iterable[Any],
    invoke: Callable[[Any], None],
    policy: "DispatchPolicy | str",
    logger: logging.Logger,
    channel: str,
) -> int:
    """
    Call invoke(receiver) for each receiver in order and return how many succeeded.
    STOP re-raises the first failure; CONTINUE finishes the pass, then raises DispatchError.
    """
    stop = DispatchPolicy.parse(policy) is DispatchPolicy.STOP
    failures: List[Tuple[Any, BaseException]] = []
    delivered = 0
    for receiver in receivers:
        try:
            invoke(receiver)
        except Exception as e:
            logger.exception(
                "delivery_failed",
                extra={"channel": channel, "receiver": repr(receiver), "error": str(e)},
            )
            if stop:
                raise
            failures.append((receiver, e))
        else:
            delivered += 1
    if failures:
        raise DispatchError(failures)
    return delivered
