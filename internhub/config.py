"""Settings loaded from the environment (and .env via python-dotenv)."""

import enum
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from internhub.errors import ConfigError


class DispatchPolicy(str, enum.Enum):
    """What notify/publish do when a receiver raises."""

    STOP = "stop"
    CONTINUE = "continue"

    @classmethod
    def parse(cls, value: "str | DispatchPolicy") -> "DispatchPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"invalid dispatch policy {value!r}; expected 'stop' or 'continue'"
            ) from None


@dataclass(frozen=True)
class Settings:
    dispatch_policy: DispatchPolicy = DispatchPolicy.STOP
    log_level: str = "INFO"
    api_key: Optional[str] = None


def load_settings(dotenv: bool = True) -> Settings:
    """Read DISPATCH_POLICY, LOG_LEVEL and API_KEY; unset values fall back to defaults."""
    if dotenv:
        load_dotenv()
    return Settings(
        dispatch_policy=DispatchPolicy.parse(os.environ.get("DISPATCH_POLICY") or "stop"),
        log_level=(os.environ.get("LOG_LEVEL") or "INFO").strip().upper(),
        api_key=(os.environ.get("API_KEY") or "").strip() or None,
    )


def default_dispatch_policy() -> DispatchPolicy:
    """Policy used when a Subject or TopicRegistry is built without an explicit one."""
    return load_settings(dotenv=False).dispatch_policy
