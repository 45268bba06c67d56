from pydantic import BaseModel


class HashAccepted(BaseModel):
    id: int


class StatsResponse(BaseModel):
    total: int
    average: int


class HealthResponse(BaseModel):
    status: str
    jobs: int
    last_job_id: int
    pending_jobs: int
    running_workers: int
    in_flight_requests: int
    uptime_seconds: float
