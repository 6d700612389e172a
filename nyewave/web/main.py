"""FastAPI application entry point."""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from nyewave.config.settings import get_settings
from nyewave.tasks.scheduler import scheduler
from nyewave.utils.logging import setup_logging
from .api import (
    events as event_routes,
    meta as meta_routes,
    status as status_routes,
    wave as wave_routes,
)

settings = get_settings()
setup_logging(level=settings.log_level)
logger = logging.getLogger("nyewave.web")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "DELETE"],
    allow_headers=["*"],
)

# Add API routes first, before static file mounting
app.include_router(status_routes.router)
app.include_router(wave_routes.router)
app.include_router(meta_routes.router)
app.include_router(event_routes.router)

static_dir = Path(__file__).parent / "static"
index_file = static_dir / "index.html"
if static_dir.exists() and index_file.exists():
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
else:
    @app.get("/")
    async def index() -> dict:
        return {"message": "Timezone wave API running", "docs": "/docs", "health": "/health"}


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    await scheduler.start()
    await scheduler.tick()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await scheduler.shutdown()
