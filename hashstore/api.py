"""HTTP interface to a :class:`RecordService`.

Routes live under ``/oss``:

* ``POST /oss/record`` stores the raw request body, with optional
  ``Record-Origin-Name`` and ``Record-Origin-Type`` headers, and answers
  ``{"code": 0, "result": "<key>"}``.
* ``GET /oss/record/{key}`` answers the raw payload with the origin headers.

Failures answer ``{"code": -1, "error": "<message>"}``.
"""

import asyncio
import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from starlette.requests import ClientDisconnect

from .__meta__ import __summary__, __title__, __version__
from .errors import HashStoreError, HttpBodyReadError, HttpHeaderNotFound, RecordTooBig
from .service import RecordService

logger = logging.getLogger(__name__)

ORIGIN_NAME_HEADER = "record-origin-name"
ORIGIN_TYPE_HEADER = "record-origin-type"

TIMEOUT_MESSAGE = "request timed out"
OVERLOADED_MESSAGE = "service is overloaded, try again later"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code,
                        content={"code": -1, "error": message})


def create_app(service: RecordService,
               request_timeout: float = 10.0,
               concurrency_limit: int = 1024) -> FastAPI:
    """Build the application serving `service`.

    Args:
        service: Record service the routes call into.
        request_timeout: Seconds before a request is abandoned with ``408``.
        concurrency_limit: Requests allowed in flight at once; requests
            beyond it are shed with ``503`` instead of queueing.
    """
    app = FastAPI(title=__title__, description=__summary__, version=__version__)
    app.state.service = service

    slots = asyncio.Semaphore(concurrency_limit)

    @app.middleware("http")
    async def limit_requests(request: Request, call_next):
        if slots.locked():
            logger.warning("Shedding %s %s", request.method, request.url.path)
            return error_response(503, OVERLOADED_MESSAGE)

        async with slots:
            try:
                return await asyncio.wait_for(call_next(request), request_timeout)
            except asyncio.TimeoutError:
                logger.warning("%s %s timed out after %ss",
                               request.method, request.url.path, request_timeout)
                return error_response(408, TIMEOUT_MESSAGE)

    @app.exception_handler(HashStoreError)
    async def handle_hashstore_error(request: Request, exc: HashStoreError):
        if exc.is_server_fault:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Unhandled internal error: {0}".format(exc))

    @app.get("/health")
    def health():
        return {"status": "online", "version": __version__}

    app.include_router(record_routes(service), prefix="/oss")

    return app


def record_routes(service: RecordService) -> APIRouter:
    router = APIRouter()

    @router.get("/record/{key}")
    async def get_record_by_key(key: str):
        record = await run_in_threadpool(service.retrieve, key)

        headers = {
            ORIGIN_NAME_HEADER: text_to_header(record.origin_name),
            ORIGIN_TYPE_HEADER: text_to_header(record.origin_type),
        }
        return Response(content=record.content,
                        media_type="application/octet-stream",
                        headers=headers)

    @router.post("/record")
    async def store_record(request: Request):
        declared = declared_length(request)
        # Reject on the declared length before any of the body is buffered.
        service.check_size(declared)

        origin_name = header_to_text(request.headers.get(ORIGIN_NAME_HEADER))
        origin_type = header_to_text(request.headers.get(ORIGIN_TYPE_HEADER))

        content = await read_body(request, declared)
        key = await run_in_threadpool(service.store, content, origin_name, origin_type)

        return {"code": 0, "result": key}

    return router


def header_to_text(value):
    """Decode an origin header sent as UTF-8 bytes.

    Starlette hands header values over as latin-1 text. Values that are not
    valid UTF-8 are kept as they were decoded.
    """
    if value is None:
        return None

    try:
        return value.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return value


def text_to_header(text):
    """Return `text` as a header value carrying its UTF-8 bytes on the wire."""
    if not text:
        return ""
    return text.encode("utf-8").decode("latin-1")


def declared_length(request: Request) -> int:
    """Return the request's ``Content-Length``.

    Raises:
        HttpHeaderNotFound: If the header is missing or not a plain
            non-negative integer.
    """
    value = request.headers.get("content-length", "").strip()

    if not (value.isascii() and value.isdigit()):
        raise HttpHeaderNotFound()

    return int(value)


async def read_body(request: Request, limit: int) -> bytes:
    """Buffer the request body, failing as soon as it grows past `limit`."""
    chunks = []
    size = 0

    try:
        async for chunk in request.stream():
            size += len(chunk)
            if size > limit:
                raise RecordTooBig()
            chunks.append(chunk)
    except ClientDisconnect as exc:
        raise HttpBodyReadError() from exc

    return b"".join(chunks)
