import time

from fastapi import APIRouter, Depends

from hasher.models import HealthResponse
from hasher.services import Services, get_services

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz(services: Services = Depends(get_services)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        jobs=len(services.store),
        last_job_id=services.ids.last_issued,
        pending_jobs=services.store.pending_count(),
        running_workers=services.scheduler.running,
        in_flight_requests=services.coordinator.in_flight,
        uptime_seconds=round(time.monotonic() - services.started_at, 2),
    )
