"""Configuration package for the interview assistant services."""
from .registry import GENERATOR_KEY, REPORT_ROUTE, STORE_KEY, TRANSCRIPT_KEY, bind_model, get_model, unbind_model
from .routes import AppConfig, LlmRoute, load_config, load_route, resolve_route
from .settings import Settings, settings

__all__ = [
    "AppConfig",
    "LlmRoute",
    "load_config",
    "load_route",
    "resolve_route",
    "GENERATOR_KEY",
    "REPORT_ROUTE",
    "STORE_KEY",
    "TRANSCRIPT_KEY",
    "bind_model",
    "get_model",
    "unbind_model",
    "Settings",
    "settings",
]
