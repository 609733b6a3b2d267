"""In-memory registry for pluggable collaborators."""
from typing import Any, Callable, Dict

_REGISTRY: Dict[str, Callable[..., Any]] = {}


def bind_model(key: str, fn: Callable[..., Any]) -> None:
    """Bind a factory callable to a registry key."""
    _REGISTRY[key] = fn


def get_model(key: str) -> Callable[..., Any]:
    """Retrieve a factory from the registry.

    Raises:
        KeyError: If no callable has been bound for ``key``.
    """

    if key not in _REGISTRY:
        raise KeyError(f"Model not bound in registry: {key}")
    return _REGISTRY[key]


def unbind_model(key: str) -> None:
    _REGISTRY.pop(key, None)


STORE_KEY = "collaborators.session_store"
TRANSCRIPT_KEY = "collaborators.transcript_provider"
GENERATOR_KEY = "collaborators.report_generator"
REPORT_ROUTE = "report_synthesis.generate_report"
