"""
Main application entry point - FastAPI app exposing the probing engine.
Run with: uvicorn qaprobe.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from qaprobe.core.config import settings
from qaprobe.engine.contracts import ProbeError
from qaprobe.routers import probe
from qaprobe.schemas.probe import ProbeErrorResponse

logging.getLogger("qaprobe").setLevel(settings.LOG_LEVEL.upper())

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# probe.router: /probe/suite, /probe/monitor
app.include_router(probe.router)


# ---------------------------------------------------------------------------
# ERROR ENVELOPE
# ---------------------------------------------------------------------------
@app.exception_handler(ProbeError)
async def probe_error_handler(request: Request, exc: ProbeError) -> JSONResponse:
    """
    Render an invocation that faulted outside every probe.

    The body reports what was captured before the fault so a failed run
    still carries diagnostic value.
    """
    body = ProbeErrorResponse(
        error=exc.message,
        partial_results=len(exc.partial_results),
        partial_signals=len(exc.partial_signals),
        results=[r.to_dict() for r in exc.partial_results],
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT launch a browser; it only confirms the API process is up.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
