import logging

from extensions.ext_logging import trace_id_generator, trace_id_var

from .models import Request, Response
from .types import Middleware, NextFn

TRACE_ID_HEADER = "X-Trace-ID"


def timeout_middleware(timeout: float) -> Middleware:
    async def middleware(request: Request, next: NextFn) -> Response:
        return await next(request.set_timeout(timeout))

    return middleware


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    log = logger or logging.getLogger(__name__)

    async def middleware(request: Request, next: NextFn) -> Response:
        log.info(f"-> {request.method} {request.url} [{request.format}]")
        response = await next(request)
        log.info(f"<- {response.status_code} ({response.latency_ms}ms)")
        return response

    return middleware


def headers_middleware(**headers: str) -> Middleware:
    async def middleware(request: Request, next: NextFn) -> Response:
        request.add_headers(headers)
        return await next(request)

    return middleware


def trace_middleware() -> Middleware:
    """Propagate the current trace id to the outgoing request, generating one when unset."""

    async def middleware(request: Request, next: NextFn) -> Response:
        trace_id = request.headers.get(TRACE_ID_HEADER) or trace_id_var.get() or trace_id_generator()
        trace_id_var.set(trace_id)
        request.headers.set(TRACE_ID_HEADER, trace_id)
        return await next(request)

    return middleware
