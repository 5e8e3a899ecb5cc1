"""Topic class holding ordered subscriptions and delivering payloads (in-memory only)."""

import threading
from typing import Any, List, Optional

from internhub.config import DispatchPolicy
from internhub.dispatch import dispatch
from internhub.observability import get_logger
from internhub.subscription import Handler, Subscription, SubscriptionHandle


class Topic:
    """Named channel; keeps subscriptions in registration order and delivers to a snapshot of them."""

    def __init__(self, name: str, policy: "DispatchPolicy | str" = DispatchPolicy.STOP) -> None:
        self._name = name
        self._subscriptions: List[Subscription] = []
        self._messages_delivered: int = 0
        self._policy = DispatchPolicy.parse(policy)
        self._lock = threading.Lock()
        self._logger = get_logger("internhub.topic")

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    @property
    def messages_delivered(self) -> int:
        return self._messages_delivered

    def subscribe(self, handler: Handler, handle: Optional[SubscriptionHandle] = None) -> SubscriptionHandle:
        """Append handler and return its handle."""
        handle = handle or SubscriptionHandle(self._name)
        with self._lock:
            self._subscriptions.append(Subscription(handle, handler))
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> bool:
        """Remove the subscription for handle. Returns False if it was not registered."""
        with self._lock:
            for i, subscription in enumerate(self._subscriptions):
                if subscription.handle is handle:
                    del self._subscriptions[i]
                    return True
        return False

    def get_subscriptions(self) -> List[Subscription]:
        """Return a copy of the subscription list (under lock)."""
        with self._lock:
            return list(self._subscriptions)

    def deliver(self, payload: Any) -> int:
        """Call every handler registered at call time with (topic name, payload); return how many succeeded."""
        with self._lock:
            subscriptions = list(self._subscriptions)
            self._messages_delivered += 1
        self._logger.info(
            "delivering",
            extra={
                "topic": self._name,
                "payload_type": type(payload).__name__,
                "subscriber_count": len(subscriptions),
            },
        )
        return dispatch(
            subscriptions,
            lambda subscription: subscription.handler(self._name, payload),
            self._policy,
            self._logger,
            self._name,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topic):
            return False
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Topic(name={self._name!r}, subscribers={len(self._subscriptions)})"
