import time
from collections.abc import Mapping
from typing import Any

import httpx

from configs import app_config

from .headers import HeaderCollection, HeaderValue
from .models import Request, Response
from .types import FormatterFactory, Middleware, ParserFactory

# methods whose data travels in the query string instead of the body
QUERY_METHODS = frozenset({"GET", "HEAD"})


class HttpClient:
    def __init__(
        self,
        middlewares: list[Middleware] | None = None,
        default_timeout: float | None = None,
        default_headers: dict[str, str] | None = None,
        formatters: Mapping[str, FormatterFactory] | None = None,
        parsers: Mapping[str, ParserFactory] | None = None,
    ):
        self._middlewares = middlewares or []
        self._default_timeout = default_timeout or app_config.HTTP_CLIENT_TIMEOUT
        self._default_headers = default_headers or {}
        self._formatters = dict(formatters or {})
        self._parsers = dict(parsers or {})
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._default_timeout)
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()

    def create_request(
        self,
        method: str = "GET",
        url: str = "",
        headers: Mapping[str, HeaderValue] | None = None,
        data: dict[str, Any] | None = None,
        content: str | None = None,
        format: str | None = None,
        timeout: float | None = None,
    ) -> Request:
        request = Request(
            method=method,
            url=url,
            headers=dict(self._default_headers),
            data=data,
            content=content,
            format=format,
            timeout=timeout or self._default_timeout,
            formatters=self._formatters,
            parsers=self._parsers,
        )
        if headers:
            request.add_headers(headers)
        return request

    async def request(self, method: str, url: str, **kwargs: Any) -> Response:
        return await self.send(self.create_request(method, url, **kwargs))

    async def send(self, request: Request) -> Response:
        if self._middlewares:
            return await self._execute_with_middleware(request, 0)
        return await self._do_request(request)

    async def _execute_with_middleware(self, request: Request, index: int) -> Response:
        if index >= len(self._middlewares):
            return await self._do_request(request)

        middleware = self._middlewares[index]

        async def next_fn(req: Request) -> Response:
            return await self._execute_with_middleware(req, index + 1)

        return await middleware(request, next_fn)

    async def _do_request(self, request: Request) -> Response:
        client = await self._ensure_client()

        # body first: formatting may add a Content-Type header
        params = None
        body = b""
        if request.method in QUERY_METHODS:
            params = request.data or None
        else:
            body = (request.content or "").encode("utf-8")

        start_time = time.time()
        http_response = await client.request(
            method=request.method,
            url=request.url,
            params=params,
            headers=request.headers.to_httpx(),
            content=body,
            timeout=request.timeout,
        )
        latency_ms = int((time.time() - start_time) * 1000)

        return Response(
            status_code=http_response.status_code,
            headers=HeaderCollection.from_httpx(http_response.headers),
            content=http_response.text,
            latency_ms=latency_ms,
            request=request,
            formatters=self._formatters,
            parsers=self._parsers,
        )

    async def get(self, url: str, **kwargs: Any) -> Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Response:
        return await self.request("DELETE", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Response:
        return await self.request("PATCH", url, **kwargs)
