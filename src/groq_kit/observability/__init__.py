# src/groq_kit/observability/__init__.py

"""Metrics hook seam. groq-kit ships no metrics backend of its own."""

from . import names
from .base import MetricsHook, NoOpMetricsHook

__all__ = [
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
]
