from fastapi import APIRouter, Depends, Response, status

from pcdm_manifests.api.dependencies import get_gateway
from pcdm_manifests.api.schemas import HealthResponse, ReadinessResponse
from pcdm_manifests.core.solr import SolrGateway

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    gateway: SolrGateway = Depends(get_gateway),
) -> ReadinessResponse:
    """Readiness probe: can Solr be reached?"""
    if await gateway.ping():
        return ReadinessResponse(status="ok", solr="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", solr="down")
