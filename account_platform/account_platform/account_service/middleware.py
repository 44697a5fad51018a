"""
Request tracing for the account service.

Every response carries an ``X-Request-ID`` (the caller's, when it sent one)
and the handling time, and one access line is logged per request. Headers
and bodies are never logged, so tokens and passwords stay out of the log.
"""
import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
# Longer caller-supplied ids are replaced rather than echoed into logs
MAX_REQUEST_ID_LENGTH = 64


def resolve_request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


def register_middleware(app: FastAPI) -> None:
    """Attach the request tracing middleware to ``app``."""

    @app.middleware("http")
    async def trace_request(request: Request, call_next):
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"
        log = logger.warning if response.status_code >= 500 else logger.debug
        log(
            "request_id=%s %s %s status=%s elapsed=%.3fs",
            request_id, request.method, request.url.path, response.status_code, elapsed
        )
        return response
