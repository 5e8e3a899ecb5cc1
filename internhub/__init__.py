"""Interned object store with in-process observer and publish/subscribe notification."""

from internhub.config import DispatchPolicy, Settings, load_settings
from internhub.errors import ConfigError, DispatchError, InternHubError, RecordNotFoundError
from internhub.intern_table import InternTable
from internhub.observer import FunctionObserver, Observer
from internhub.registry import TopicRegistry
from internhub.subject import Subject
from internhub.subscription import SubscriptionHandle
from internhub.topic import Topic

__all__ = [
    "ConfigError",
    "DispatchError",
    "DispatchPolicy",
    "FunctionObserver",
    "InternHubError",
    "InternTable",
    "Observer",
    "RecordNotFoundError",
    "Settings",
    "Subject",
    "SubscriptionHandle",
    "Topic",
    "TopicRegistry",
    "load_settings",
]
