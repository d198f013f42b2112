from __future__ import annotations

import logging
import socket
import sqlite3
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict

import psutil
import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from guardian import config
from guardian.deps import close_clients
from guardian.model_client import ModelClientError
from guardian.services import contacts
from guardian.services.alert import router as alert_router
from guardian.services.assessment import router as assessment_router
from guardian.services.chat import router as chat_router
from guardian.services.music import router as music_router
from guardian.services.speech import router as speech_router


# ----------------------------
# Logging
# ----------------------------

logger = logging.getLogger("guardian")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(config.LOG_LEVEL)
logger.propagate = False


# ----------------------------
# FastAPI app setup
# ----------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    contacts.init_db()
    logger.info("Contact store ready at %s", contacts.DB_PATH)
    try:
        yield
    finally:
        close_clients()


app = FastAPI(
    title="Guardian Brain",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------
# Health router
# ----------------------------

health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("/ping")
async def ping() -> Dict[str, Any]:
    return {"status": "ok", "message": "Guardian brain is alive"}


@health_router.get("/system")
async def system_health() -> Dict[str, Any]:
    hostname = socket.gethostname()
    boot_time = datetime.fromtimestamp(psutil.boot_time(), tz=timezone.utc)
    now = datetime.now(timezone.utc)
    uptime_seconds = (now - boot_time).total_seconds()

    cpu_percent = psutil.cpu_percent(interval=0.2)
    virtual_mem = psutil.virtual_memory()
    disk_usage = psutil.disk_usage("/")

    return {
        "status": "ok",
        "hostname": hostname,
        "time_utc": now.isoformat(),
        "uptime_seconds": uptime_seconds,
        "cpu_percent": cpu_percent,
        "memory": {
            "total": virtual_mem.total,
            "available": virtual_mem.available,
            "percent": virtual_mem.percent,
        },
        "disk": {
            "total": disk_usage.total,
            "free": disk_usage.free,
            "percent": disk_usage.percent,
        },
    }


@health_router.get("/database")
async def database_health() -> Dict[str, Any]:
    start = time.time()
    db_path = contacts.DB_PATH
    exists = Path(db_path).is_file()
    duration = time.time() - start

    if not exists:
        return {
            "status": "error",
            "message": f"Database file not found at {db_path}",
            "duration_seconds": duration,
        }

    try:
        conn = sqlite3.connect(db_path)
        try:
            conn.execute("SELECT 1 FROM contacts LIMIT 1")
        finally:
            conn.close()
    except sqlite3.Error as exc:
        return {
            "status": "error",
            "message": f"Error accessing DB: {exc}",
            "duration_seconds": duration,
        }

    return {
        "status": "ok",
        "message": "Database accessible",
        "duration_seconds": duration,
    }


@health_router.get("/providers")
async def providers_health() -> Dict[str, Any]:
    # Reports presence only, never the keys.
    return {
        "status": "ok",
        "gemini": {
            "configured": bool(config.GEMINI_API_KEY),
            "text_model": config.GEMINI_TEXT_MODEL,
            "tts_model": config.GEMINI_TTS_MODEL,
        },
        "elevenlabs": {
            "configured": bool(config.ELEVENLABS_API_KEY),
            "model_id": config.ELEVENLABS_MODEL_ID,
        },
    }


# ----------------------------
# Core routes
# ----------------------------

@app.get("/", include_in_schema=False)
async def root() -> Dict[str, Any]:
    return {
        "message": "Guardian brain is running",
        "text_model": config.GEMINI_TEXT_MODEL,
    }


# ----------------------------
# Exception handlers
# ----------------------------

@app.exception_handler(ModelClientError)
async def model_client_error_handler(
    request: Request, exc: ModelClientError
) -> JSONResponse:
    logger.error("Unhandled model client error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": f"Model client error: {exc}"},
    )


# ----------------------------
# Mount routers
# ----------------------------

app.include_router(health_router)

app.include_router(contacts.router)
app.include_router(alert_router)
app.include_router(assessment_router)
app.include_router(speech_router)
app.include_router(chat_router)
app.include_router(music_router)


def run() -> None:
    uvicorn.run("guardian.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
