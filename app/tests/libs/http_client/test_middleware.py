import logging

import httpx
import pytest

from extensions.ext_logging import trace_id_var
from libs.http_client.headers import HeaderCollection
from libs.http_client.models import Request, Response
from libs.http_client.middleware import (
    TRACE_ID_HEADER,
    headers_middleware,
    logging_middleware,
    timeout_middleware,
    trace_middleware,
)


def make_next_fn(received: list[Request], status_code: int = 200):
    async def next_fn(r: Request) -> Response:
        received.append(r)
        return Response(status_code=status_code, latency_ms=12, request=r)

    return next_fn


class TestTimeoutMiddleware:
    @pytest.mark.asyncio
    async def test_timeout_override(self):
        req = Request(method="GET", url="https://example.com", timeout=30.0)
        received: list[Request] = []

        middleware = timeout_middleware(60.0)
        await middleware(req, make_next_fn(received))

        assert received[0].timeout == 60.0


class TestHeadersMiddleware:
    @pytest.mark.asyncio
    async def test_headers_added(self):
        req = Request(method="GET", url="https://example.com", headers={"Accept": "text/html"})
        received: list[Request] = []

        middleware = headers_middleware(Authorization="Bearer token")
        await middleware(req, make_next_fn(received))

        headers = received[0].headers
        assert headers.get("authorization") == "Bearer token"
        assert headers.get("accept") == "text/html"


class TestLoggingMiddleware:
    @pytest.mark.asyncio
    async def test_logs_request_and_response(self, caplog):
        req = Request(method="POST", url="https://example.com", format="json")
        logger = logging.getLogger("test.http_client")

        middleware = logging_middleware(logger)
        with caplog.at_level(logging.INFO, logger="test.http_client"):
            response = await middleware(req, make_next_fn([], status_code=201))

        assert response.status_code == 201
        assert "-> POST https://example.com [json]" in caplog.text
        assert "<- 201 (12ms)" in caplog.text


class TestTraceMiddleware:
    @pytest.mark.asyncio
    async def test_generates_trace_id(self):
        req = Request(method="GET", url="https://example.com")
        received: list[Request] = []

        await trace_middleware()(req, make_next_fn(received))

        trace_id = received[0].headers.get(TRACE_ID_HEADER)
        assert trace_id
        assert trace_id_var.get() == trace_id

    @pytest.mark.asyncio
    async def test_keeps_existing_trace_id(self):
        req = Request(method="GET", url="https://example.com", headers={"x-trace-id": "abc"})
        received: list[Request] = []

        await trace_middleware()(req, make_next_fn(received))

        assert received[0].headers.get_list(TRACE_ID_HEADER) == ["abc"]

    @pytest.mark.asyncio
    async def test_uses_context_trace_id(self):
        trace_id_var.set("from-context")
        req = Request(method="GET", url="https://example.com")
        received: list[Request] = []

        await trace_middleware()(req, make_next_fn(received))

        assert received[0].headers.get(TRACE_ID_HEADER) == "from-context"


class TestNonAsciiResponseHeaders:
    @pytest.mark.asyncio
    async def test_trace_id_added_next_to_utf8_header(self):
        headers = HeaderCollection.from_httpx(httpx.Headers([(b"x-name", "café".encode("utf-8"))]))
        req = Request(method="GET", url="https://example.com", headers=headers)
        received: list[Request] = []

        await trace_middleware()(req, make_next_fn(received))

        assert received[0].headers.get("x-name") == "café"
        assert received[0].headers.get(TRACE_ID_HEADER)
