"""In-memory topic registry: subscribe, unsubscribe and publish by topic name."""

import threading
from typing import Any, Dict, List, Optional

from internhub.config import DispatchPolicy, default_dispatch_policy
from internhub.observability import Metrics, get_logger
from internhub.subscription import Handler, SubscriptionHandle
from internhub.topic import Topic


class TopicRegistry:
    """Maps topic names to Topics. Subscribing creates a topic; publishing never does."""

    def __init__(
        self,
        policy: "DispatchPolicy | str | None" = None,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self._topics: Dict[str, Topic] = {}
        self._lock = threading.Lock()
        self._policy = DispatchPolicy.parse(policy) if policy is not None else default_dispatch_policy()
        self._metrics = metrics if metrics is not None else Metrics()
        self._logger = get_logger("internhub.registry")

    @property
    def policy(self) -> DispatchPolicy:
        return self._policy

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def subscribe(self, topic_name: str, handler: Handler) -> SubscriptionHandle:
        """Register handler under topic_name (creating the topic if needed) and return its handle."""
        topic = self.get_or_create_topic(topic_name)
        handle = topic.subscribe(handler)
        self._metrics.increment("subscriptions")
        self._logger.info(
            "subscribed",
            extra={"topic": topic_name, "subscription": handle.token},
        )
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove exactly the handler registered under handle; no-op if already removed."""
        topic = self.get_topic(handle.topic)
        if topic is None or not topic.unsubscribe(handle):
            return
        self._logger.info(
            "unsubscribed",
            extra={"topic": handle.topic, "subscription": handle.token},
        )

    def publish(self, topic_name: str, payload: Any) -> int:
        """
        Call each handler currently registered for topic_name with (topic_name, payload),
        in registration order. Unknown topics are a no-op. Returns the number of handlers called.
        """
        topic = self.get_topic(topic_name)
        if topic is None:
            self._logger.debug("publish_no_topic", extra={"topic": topic_name})
            return 0
        self._metrics.increment("published")
        self._logger.info("published", extra={"topic": topic_name})
        delivered = topic.deliver(payload)
        self._metrics.increment("handler_calls", delivered)
        return delivered

    def get_or_create_topic(self, name: str) -> Topic:
        """Return existing topic or create and register a new one."""
        with self._lock:
            if name not in self._topics:
                self._topics[name] = Topic(name, self._policy)
            return self._topics[name]

    def get_topic(self, name: str) -> Optional[Topic]:
        """Return topic by name or None."""
        with self._lock:
            return self._topics.get(name)

    def topic_count(self) -> int:
        """Number of topics."""
        with self._lock:
            return len(self._topics)

    def total_subscriber_count(self) -> int:
        """Total number of subscriptions across all topics."""
        return sum(t.subscriber_count for t in self._topic_list())

    def list_topics(self) -> List[Dict[str, Any]]:
        """Return list of {name, subscribers} for each topic."""
        return [
            {"name": t.name, "subscribers": t.subscriber_count}
            for t in self._topic_list()
        ]

    def topic_stats(self) -> Dict[str, Dict[str, int]]:
        """Return { topic_name: { messages, subscribers } } for the stats endpoint."""
        return {
            t.name: {
                "messages": t.messages_delivered,
                "subscribers": t.subscriber_count,
            }
            for t in self._topic_list()
        }

    def _topic_list(self) -> List[Topic]:
        with self._lock:
            return list(self._topics.values())
