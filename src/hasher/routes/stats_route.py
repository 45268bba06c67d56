from fastapi import APIRouter, Depends
from fastapi.responses import Response

from hasher.models import StatsResponse
from hasher.responses import json_response
from hasher.services import Services, get_services

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(services: Services = Depends(get_services)) -> Response:
    """Count of completed jobs and their average latency in microseconds."""
    snapshot = services.stats.snapshot()
    return json_response(StatsResponse(total=snapshot.total, average=snapshot.average))
