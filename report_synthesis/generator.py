from __future__ import annotations  # Report generator backed by the LLM gateway

from pathlib import Path
from typing import Optional, Protocol

from config import REPORT_ROUTE, LlmRoute, load_route
from llm_gateway import HttpClient, complete


class ReportGenerator(Protocol):  # Opaque text completion service
    def complete(self, prompt: str) -> str: ...


class GatewayReportGenerator:  # Sends report prompts through a configured LLM route
    def __init__(self, route: LlmRoute, *, client: Optional[HttpClient] = None) -> None:
        self.route = route
        self._client = client

    @classmethod
    def from_config(cls, config_path: Path) -> "GatewayReportGenerator":
        return cls(load_route(config_path, REPORT_ROUTE))

    def complete(self, prompt: str) -> str:
        return complete(prompt, cfg=self.route, client=self._client)


__all__ = ["GatewayReportGenerator", "ReportGenerator"]
