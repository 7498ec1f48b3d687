import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api import mint, system
from .config import get_settings
from .logging_config import setup_logging

setup_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

app = FastAPI(title="Mint Dashboard")

app.include_router(system.router, prefix="/api", tags=["system"])
app.include_router(mint.router, prefix="/api", tags=["mint"])


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
