import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mint_dashboard.models.system import ErrorResponse
from mint_dashboard.services import mint_client

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {500: {"model": ErrorResponse}}


async def _proxy(fetch, what: str):
    try:
        return await fetch()
    except mint_client.MintUpstreamError as exc:
        logger.error("Mint %s request rejected: %s", what, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})
    except mint_client.MintUnavailableError:
        logger.exception("Error retrieving mint %s", what)
        return JSONResponse(status_code=500, content={"error": "unexpected"})


@router.get("/mint-info", responses=_ERROR_RESPONSES, summary="Mint info")
async def mint_info():
    """Forward the upstream mint's /v1/info JSON unchanged."""
    return await _proxy(mint_client.fetch_mint_info, "information")


@router.get("/mint-settings", responses=_ERROR_RESPONSES, summary="Mint settings")
async def mint_settings():
    """Forward the upstream mint's /v1/settings JSON unchanged."""
    return await _proxy(mint_client.fetch_mint_settings, "settings")
