import re
from collections.abc import Mapping
from typing import Any

from configs import app_config

from .headers import HeaderCollection, HeaderValue
from .message import Message
from .types import FormatterFactory, MessageFormat, ParserFactory

_JSON_CONTENT_RE = re.compile(r"^\s*[\[{].*[\]}]\s*$", re.DOTALL)
_XML_CONTENT_RE = re.compile(r"^\s*<.*>\s*$", re.DOTALL)
_URLENCODED_CONTENT_RE = re.compile(r"^[^=&]+=[^=&]*(&[^=&]+=[^=&]*)*$")


class Request(Message):
    def __init__(
        self,
        method: str = "GET",
        url: str = "",
        headers: HeaderCollection | Mapping[str, HeaderValue] | None = None,
        content: str | None = None,
        data: dict[str, Any] | None = None,
        format: str | None = None,
        timeout: float | None = None,
        formatters: Mapping[str, FormatterFactory] | None = None,
        parsers: Mapping[str, ParserFactory] | None = None,
    ):
        super().__init__(
            headers=headers,
            content=content,
            data=data,
            format=format,
            formatters=formatters,
            parsers=parsers,
        )
        self.method = method.upper()
        self.url = url
        self.timeout = timeout if timeout is not None else app_config.HTTP_CLIENT_TIMEOUT

    def set_method(self, method: str) -> "Request":
        self.method = method.upper()
        return self

    def set_url(self, url: str) -> "Request":
        self.url = url
        return self

    def set_timeout(self, timeout: float) -> "Request":
        self.timeout = timeout
        return self

    def to_string(self) -> str:
        return f"{self.method} {self.url}\n" + super().to_string()


class Response(Message):
    def __init__(
        self,
        status_code: int,
        headers: HeaderCollection | Mapping[str, HeaderValue] | None = None,
        content: str | None = None,
        data: dict[str, Any] | None = None,
        format: str | None = None,
        latency_ms: int = 0,
        request: Request | None = None,
        formatters: Mapping[str, FormatterFactory] | None = None,
        parsers: Mapping[str, ParserFactory] | None = None,
    ):
        super().__init__(
            headers=headers,
            content=content,
            data=data,
            format=format,
            formatters=formatters,
            parsers=parsers,
        )
        self.status_code = int(status_code)
        self.latency_ms = latency_ms
        self.request = request

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def default_format(self) -> str:
        """Detect the body format from the `Content-Type` header, then from the raw content."""
        return (
            detect_format_by_headers(self.headers)
            or detect_format_by_content(self._content)
            or super().default_format()
        )


def detect_format_by_headers(headers: HeaderCollection) -> str | None:
    content_type = (headers.get("Content-Type") or "").split(";")[0].strip().lower()
    if not content_type:
        return None
    if content_type == "application/json" or content_type.endswith("+json"):
        return MessageFormat.JSON
    if content_type == "application/x-www-form-urlencoded":
        return MessageFormat.URLENCODED
    if content_type in ("application/xml", "text/xml") or content_type.endswith("+xml"):
        return MessageFormat.XML
    return None


def detect_format_by_content(content: str | None) -> str | None:
    if not content:
        return None
    if _JSON_CONTENT_RE.match(content):
        return MessageFormat.JSON
    if _XML_CONTENT_RE.match(content):
        return MessageFormat.XML
    if _URLENCODED_CONTENT_RE.match(content):
        return MessageFormat.URLENCODED
    return None
