"""Subscription handle returned by TopicRegistry.subscribe()."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable

Handler = Callable[[str, Any], None]


def _new_token() -> str:
    return f"sub_{uuid.uuid4().hex}"


@dataclass(frozen=True, eq=False)
class SubscriptionHandle:
    """
    Opaque token naming one registration of a handler on a topic.
    Handles compare by identity: only the object returned by subscribe() removes that registration.
    """

    topic: str
    token: str = field(default_factory=_new_token)


@dataclass(frozen=True, eq=False)
class Subscription:
    handle: SubscriptionHandle
    handler: Handler
