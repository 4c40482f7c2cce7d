"""Observability helpers for AI Studio."""

from aistudio.observability.metrics import MetricsRegistry, metrics

__all__ = ["MetricsRegistry", "metrics"]
