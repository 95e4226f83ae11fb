"""
GPS data lookup endpoint.

One route: GET /get-data. The handler runs four steps in order and
stops at the first failure:

1. Validate the five query parameters
2. Build the object key (month number -> month name)
3. Download the object from the configured bucket
4. Return the payload as application/json

Failures raise GatewayError subclasses; the exception handlers
registered in main turn them into plain-text responses.

The route is a plain `def` so FastAPI runs it on its threadpool and
the blocking boto3 call never stalls the event loop.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Query, Response

from ...core.errors import LocalIOError
from ...core.keys import LookupRequest, build_object_key
from ..dependencies import KeyLayoutDep, ObjectStoreDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()

# Error cases documented for OpenAPI; bodies are text/plain
ERROR_RESPONSES = {
    400: {
        "description": "Missing query parameters / Invalid month format",
        "content": {"text/plain": {}},
    },
    500: {
        "description": "Failed to retrieve object / Failed to read downloaded file",
        "content": {"text/plain": {}},
    },
}


@router.get(
    "/get-data",
    summary="Fetch one day of GPS data",
    description="Returns the stored JSON document for a user, vehicle and date.",
    response_class=Response,
    responses={
        200: {"content": {"application/json": {}}},
        **ERROR_RESPONSES,
    },
)
def get_data(
    settings: SettingsDep,
    layout: KeyLayoutDep,
    store: ObjectStoreDep,
    user_id: Annotated[Optional[str], Query()] = None,
    vehicle_id: Annotated[Optional[str], Query()] = None,
    year: Annotated[Optional[str], Query()] = None,
    month: Annotated[Optional[str], Query(description="Zero-padded month number, 01-12")] = None,
    day: Annotated[Optional[str], Query()] = None,
) -> Response:
    """
    Look up the GPS document for a user, vehicle and date.

    Parameters are declared optional so that a missing one reaches our
    own validation (400, plain text) instead of FastAPI's 422.
    """
    lookup = LookupRequest.from_params(user_id, vehicle_id, year, month, day)
    key = build_object_key(lookup, layout)
    bucket = settings.bucket_name

    # Store failures are logged by the store and surface as ObjectStoreError
    with store.download(bucket, key) as payload:
        try:
            body = payload.read()
        except OSError as e:
            logger.error(
                "Failed to read downloaded file",
                extra={"bucket": bucket, "key": key, "error": str(e)}
            )
            raise LocalIOError(f"Reading buffered payload failed: {e}") from e

    logger.info(
        "Served GPS data",
        extra={"key": key, "size_bytes": len(body)}
    )

    return Response(content=body, media_type="application/json")
