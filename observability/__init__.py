"""Observability utilities for the telemetry and report pipeline."""
from .logger import configure_logging, log_event
from .tracing import span

__all__ = ["configure_logging", "log_event", "span"]
