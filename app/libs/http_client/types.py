from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .message import Message
    from .models import Request, Response


class MessageFormat(StrEnum):
    URLENCODED = "urlencoded"
    JSON = "json"
    XML = "xml"


class Formatter(Protocol):
    def format(self, message: "Message") -> str: ...


class Parser(Protocol):
    def parse(self, message: "Message") -> dict[str, Any]: ...


FormatterFactory = Callable[[], Formatter]
ParserFactory = Callable[[], Parser]

NextFn = Callable[["Request"], Awaitable["Response"]]
Middleware = Callable[["Request", NextFn], Awaitable["Response"]]
