import logging

from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def json_response(
    model: BaseModel, status_code: int = 200, headers: dict[str, str] | None = None
) -> Response:
    """Encode a model as a JSON response with the cross-origin header.

    Encoding failures surface as a 500 carrying the raw error text.
    """
    try:
        body = model.model_dump_json()
    except (TypeError, ValueError) as e:
        logger.exception("Failed to encode %s", type(model).__name__)
        return PlainTextResponse(str(e), status_code=500)

    return Response(
        content=body,
        status_code=status_code,
        media_type="application/json",
        headers={**(headers or {}), **CORS_HEADERS},
    )
