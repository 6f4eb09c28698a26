"""Jupiter proxy endpoints.

Each handler validates its input, makes at most one upstream call and
reshapes the result. Validation and upstream failures are answered here;
anything else propagates to the application's catch-all handler.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from swapgate.aggregator.jupiter import JupiterClient
from swapgate.api.responses import error_response, ok_response
from swapgate.contracts import parse_quote_request, parse_swap_request
from swapgate.errors import (
    PayloadTooLargeError,
    RequestValidationFailed,
    UpstreamError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["jupiter"])


def _jupiter(request: Request) -> JupiterClient:
    return request.app.state.jupiter


async def read_json_body(request: Request) -> Any:
    """Read and decode the request body; an empty body reads as ``{}``.

    The size cap is checked against Content-Length up front and against
    the running total while streaming, so oversized chunked bodies are cut
    off without being buffered.

    Raises:
        PayloadTooLargeError: body exceeds MAX_BODY_BYTES
        RequestValidationFailed: body is not valid JSON
    """
    max_bytes = request.app.state.settings.max_body_bytes
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(max_bytes)

    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise PayloadTooLargeError(max_bytes)
        chunks.append(chunk)

    body = b"".join(chunks)
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise RequestValidationFailed(f"Malformed JSON body: {e}") from e


@router.get("/tokens")
async def list_tokens(request: Request) -> JSONResponse:
    """Token list passthrough, filtered to the essentials."""
    try:
        tokens = await _jupiter(request).list_tokens()
    except UpstreamError as e:
        logger.warning(f"Token list failed: {e}")
        return error_response(500, e.message)
    return ok_response(tokens=tokens)


@router.post("/quote")
async def get_quote(request: Request) -> JSONResponse:
    """Get a Jupiter quote for an exact-in swap."""
    try:
        quote_request = parse_quote_request(await read_json_body(request))
        quote = await _jupiter(request).get_quote(quote_request)
    except (RequestValidationFailed, UpstreamError) as e:
        return error_response(400, e.message)
    return ok_response(quote=quote)


@router.post("/swap")
async def build_swap(request: Request) -> JSONResponse:
    """Get a serialized swap transaction for the client to sign and send.

    NO signing or broadcasting happens server-side.
    """
    try:
        swap_request = parse_swap_request(await read_json_body(request))
        swap_transaction = await _jupiter(request).build_swap(swap_request)
    except (RequestValidationFailed, UpstreamError) as e:
        return error_response(400, e.message)
    return ok_response(swapTransaction=swap_transaction)
