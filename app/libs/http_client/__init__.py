"""
HTTP Client module.

`Message` holds headers and a body readable as raw `content` or as
structured `data`; the missing side is converted lazily by the codec
registered for the message `format`. `HttpClient` sends `Request`
messages through httpx and returns `Response` messages.

Logging is set up with `init_logging()`, configured by `LOG_*` settings.
"""

from extensions.ext_logging import init_logging

from .client import HttpClient
from .exceptions import ContentFormatError, ContentParseError, HttpClientError, UnrecognizedFormatError
from .formatters import JsonFormatter, UrlEncodedFormatter, XmlFormatter
from .headers import HeaderCollection
from .message import DisplayResult, Message
from .middleware import (
    headers_middleware,
    logging_middleware,
    timeout_middleware,
    trace_middleware,
)
from .models import Request, Response
from .parsers import JsonParser, UrlEncodedParser, XmlParser
from .registry import create_formatter, create_parser
from .types import Formatter, FormatterFactory, MessageFormat, Middleware, NextFn, Parser, ParserFactory

__all__ = [
    "init_logging",
    "HttpClient",
    "Message",
    "Request",
    "Response",
    "DisplayResult",
    "HeaderCollection",
    "MessageFormat",
    "Formatter",
    "Parser",
    "FormatterFactory",
    "ParserFactory",
    "UrlEncodedFormatter",
    "JsonFormatter",
    "XmlFormatter",
    "UrlEncodedParser",
    "JsonParser",
    "XmlParser",
    "create_formatter",
    "create_parser",
    "HttpClientError",
    "UnrecognizedFormatError",
    "ContentParseError",
    "ContentFormatError",
    "Middleware",
    "NextFn",
    "timeout_middleware",
    "logging_middleware",
    "headers_middleware",
    "trace_middleware",
]
