"""Response shapes for the HTTP surface (health, topics, stats, publish)."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---- Health ----

@dataclass
class HealthResponse:
    """Response for GET /health."""
    uptime_sec: float
    topics: int
    subscribers: int
    interned: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uptime_sec": int(self.uptime_sec),
            "topics": self.topics,
            "subscribers": self.subscribers,
            "interned": self.interned,
        }


# ---- Publish ----

@dataclass
class PublishResponse:
    """Response for POST /publish. delivered is the number of handlers that ran."""
    status: str
    topic: str
    delivered: int = 0
    error: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if d.get("error") is None:
            d.pop("error", None)
        return d


def topics_list_response(topics: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Response for GET /topics."""
    return {"topics": topics}


def stats_response(
    topics_stats: Dict[str, Dict[str, int]],
    tables: Dict[str, int],
    metrics: Dict[str, Dict[str, int]],
) -> Dict[str, Any]:
    """Response for GET /stats."""
    return {"topics": topics_stats, "tables": tables, "metrics": metrics}


# Error codes (use with error_body)
ERROR_BAD_REQUEST = "BAD_REQUEST"
ERROR_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_DISPATCH_FAILED = "DISPATCH_FAILED"


def error_body(code: str, message: str, **fields: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"error": code, "message": message}
    out.update(fields)
    return out
