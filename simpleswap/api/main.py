"""FastAPI application for the pool service.

The pool itself raises PoolError subclasses for every rejected operation;
they are returned as 400 responses carrying the error name and reason, the
same information a reverted transaction would surface.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from simpleswap import __version__
from simpleswap.api.endpoints import router
from simpleswap.errors import PoolError
from simpleswap.logs import configure_logging
from simpleswap.models.api import ErrorResponse

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SIMPLESWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("SIMPLESWAP_PORT", "8000"))
DEBUG = os.environ.get("SIMPLESWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("SIMPLESWAP_LOG_LEVEL", "INFO")

logger = structlog.get_logger()

app = FastAPI(
    title="SimpleSwap",
    description="Two-asset constant product pool",
    version=__version__,
)


@app.exception_handler(PoolError)
async def pool_error_handler(request: Request, exc: PoolError) -> JSONResponse:
    """Report a rejected pool operation as 400 with the error name and reason."""
    logger.warning(
        "pool_operation_failed",
        path=request.url.path,
        error=type(exc).__name__,
        reason=str(exc),
    )
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - SIMPLESWAP_HOST: Host to bind to (default: 0.0.0.0)
    - SIMPLESWAP_PORT: Port to bind to (default: 8000)
    - SIMPLESWAP_DEBUG: Enable debug/reload mode (default: false)
    - SIMPLESWAP_LOG_LEVEL: Minimum log level (default: INFO)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "simpleswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
