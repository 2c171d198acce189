"""
FastAPI application for the code execution service.

This module configures logging, builds the execution pipeline from the
environment and registers the HTTP routes.  The collaboration server
forwards ``{code, language}`` from authenticated users to
``POST /api/execute`` and relays the ``{success, output|error}`` reply.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..config import Config
from ..executor import ExecutionPipeline, supported_languages
from ..models import ExecuteRequest, ExecuteResponse, HealthResponse, LanguagesResponse


logger = logging.getLogger("collabexec")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[collabexec] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


config = Config.from_env()

logger.setLevel(config.log_level)

logger.info(
    "Loaded config: workspace_root=%s, timeout=%ss, max_concurrency=%s, queue_timeout=%ss",
    config.workspace_root,
    config.timeout_seconds,
    config.max_concurrency,
    config.queue_timeout_seconds,
)

pipeline = ExecutionPipeline(
    workspace_root=config.workspace_root,
    timeout=config.timeout_seconds,
    max_concurrency=config.max_concurrency,
    queue_timeout=config.queue_timeout_seconds,
)

# Paths reachable without an API key
PUBLIC_PATHS = {"/api/health"}


app = FastAPI(title="Code Execution Service", version="0.1.0")


@app.middleware("http")
async def authenticate(request: Request, call_next):
    """Log every request and enforce the optional service API key."""
    path = request.url.path
    method = request.method
    client = getattr(request.client, "host", "unknown")

    logger.info("Incoming request: %s %s from %s", method, path, client)

    if config.api_key and path not in PUBLIC_PATHS:
        if request.headers.get("x-api-key") != config.api_key:
            logger.warning("Invalid API key for %s %s from %s", method, path, client)
            return JSONResponse(status_code=401, content={"success": False, "error": "Invalid API key"})

    response = await call_next(request)
    logger.info("Response: %s %s -> %s", method, path, response.status_code)
    return response


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return a simple health check response."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@app.get("/api/languages", response_model=LanguagesResponse)
async def languages() -> LanguagesResponse:
    """List the language identifiers accepted by ``/api/execute``."""
    return LanguagesResponse(languages=supported_languages())


@app.post("/api/execute", response_model=ExecuteResponse, response_model_exclude_none=True)
async def execute(req: ExecuteRequest):
    """Compile and/or run a snippet and report its output or error."""
    if not req.code or not req.language:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Code and language are required"},
        )

    try:
        # Blocks on child processes.
        outcome = await run_in_threadpool(pipeline.execute, req.code, req.language)
    except Exception as exc:
        logger.exception("[/api/execute] Unhandled error during execution: %s", exc)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    return ExecuteResponse.from_outcome(outcome)
