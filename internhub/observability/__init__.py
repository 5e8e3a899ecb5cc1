"""Observability: logging and in-memory metrics for interning and dispatch."""

from internhub.observability.logger import get_logger
from internhub.observability.metrics import Metrics

__all__ = ["get_logger", "Metrics"]
