"""Client-side telemetry: debounced snapshot delivery."""
from .autosave import EditorAutosave
from .debouncer import TelemetryDebouncer
from .delivery import DeliveryClient, DeliveryStatus, HttpClient, WebhookConfig
from .scheduler import AsyncioScheduler, Scheduler, ThreadScheduler, TimerHandle

__all__ = [
    "AsyncioScheduler",
    "DeliveryClient",
    "DeliveryStatus",
    "EditorAutosave",
    "HttpClient",
    "Scheduler",
    "TelemetryDebouncer",
    "ThreadScheduler",
    "TimerHandle",
    "WebhookConfig",
]
