"""LLM route configuration loaded from JSON or YAML."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Literal

import yaml
from pydantic import BaseModel, Field


class LlmRoute(BaseModel):
    """LLM endpoint configuration."""

    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(default=60.0, ge=0.1)
    api_key_env: str | None = None
    api_key_header: str = "Authorization"
    api_style: Literal["openai", "anthropic"] = "openai"
    max_tokens: int = Field(default=4096, ge=1)
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False


class AppConfig(BaseModel):
    """Application configuration root."""

    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk, accepting ``.json`` or ``.yaml``."""

    data = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return AppConfig.model_validate(yaml.safe_load(data) or {})
    return AppConfig.model_validate_json(data)


def resolve_route(cfg: AppConfig, target: str) -> LlmRoute:
    """Look up the route bound to ``target`` in the registry."""

    if target not in cfg.registry:
        raise KeyError(f"Registry entry missing for '{target}'")
    route_id = cfg.registry[target]
    if route_id not in cfg.llm_routes:
        raise KeyError(f"Route '{route_id}' missing for '{target}'")
    return cfg.llm_routes[route_id]


def load_route(path: Path, target: str) -> LlmRoute:
    """Load configuration and resolve a single route."""

    cfg = load_config(path)
    return resolve_route(cfg, target)
