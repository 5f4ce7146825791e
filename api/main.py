from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from match_display.config import settings
from match_display.logging_config import configure_logging
from match_display.middleware.logging import StructuredLoggingMiddleware
from match_display.routers import display

configure_logging(
    service="match-display",
    environment=settings.environment,
    log_level=settings.log_level,
    source_timezone=settings.source_timezone,
)

app = FastAPI(title="match-display", version="1.0.0")

app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(display.router)


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
