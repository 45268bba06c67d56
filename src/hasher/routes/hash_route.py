import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse, Response

from hasher.models import HashAccepted
from hasher.responses import CORS_HEADERS, json_response
from hasher.services import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter()

HASH_ROUTE = "/hash"


def job_location(job_id: int) -> str:
    return f"{HASH_ROUTE}/{job_id}"


@router.post(HASH_ROUTE, response_model=HashAccepted, status_code=202)
async def submit_hash(
    password: str = Form(""),
    services: Services = Depends(get_services),
) -> Response:
    """Accept a password for hashing and return its job id right away.

    The digest is computed by a background worker; poll the Location
    header for the result.
    """
    job_id = services.ids.next_id()
    services.store.create(job_id)
    services.scheduler.schedule(job_id, password)
    logger.info("Accepted hash job %d", job_id)

    return json_response(
        HashAccepted(id=job_id),
        status_code=202,
        headers={"Location": job_location(job_id)},
    )


@router.get(HASH_ROUTE + "/{job_id:int}")
async def get_hash(job_id: int, services: Services = Depends(get_services)) -> Response:
    """Result of a hash job: 200 with the digest, 202 while pending, 404 if unknown.

    Only unsigned decimal ids match this route, so `/hash/-1` is an unmatched
    path (404 for every method) rather than a 405.
    """
    job = services.store.get(job_id)
    if job is None:
        logger.debug("Hash job %d not found", job_id)
        return Response(status_code=404)

    if not job.completed:
        return Response(status_code=202, headers={"Location": job_location(job_id)})

    return PlainTextResponse(job.result, headers=CORS_HEADERS)
