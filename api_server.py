from __future__ import annotations  # FastAPI server exposing the webhook and report endpoints

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import reports, webhook
from api.dependencies import bind_defaults
from observability import configure_logging
from services.errors import AssistantError


logger = logging.getLogger(__name__)


async def _assistant_error(request: Request, exc: AssistantError) -> JSONResponse:  # Render taxonomy errors as JSON
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(exc.payload(), status_code=exc.status_code)


def create_app() -> FastAPI:  # Build the application with routers and error handling
    application = FastAPI(title="Interview Assistant API")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(AssistantError, _assistant_error)
    application.include_router(webhook.router)
    application.include_router(reports.router)

    @application.get("/health")
    def health() -> dict:
        return {"status": "ok", "message": "Webhook server is running"}

    return application


configure_logging()
bind_defaults()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=True)
