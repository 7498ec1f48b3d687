import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mint_dashboard.models.system import ErrorResponse, SystemInfoResponse
from mint_dashboard.services import resource_sampler
from mint_dashboard.services.sources import SamplingError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/system-info",
    response_model=SystemInfoResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Host CPU and disk utilisation",
)
async def system_info():
    """
    Return current CPU usage and root filesystem capacity of the host.

    Each request takes its own ~100 ms CPU measurement. If CPU counters
    cannot be read, a HTTP 500 with a generic error message is returned; the
    cause is only logged.
    """
    sampler = resource_sampler.get_resource_sampler()
    try:
        snapshot = await sampler.sample()
    except SamplingError:
        logger.exception("Error getting system information")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to retrieve system information"},
        )

    return snapshot.to_response()
