import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .headers import HeaderCollection, HeaderValue
from .registry import create_formatter, create_parser
from .types import Formatter, FormatterFactory, MessageFormat, Parser, ParserFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayResult:
    """Outcome of rendering a message for display: the text, or the error that prevented it."""

    value: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Message:
    """
    Base HTTP message whose body is available both as raw `content` and as
    structured `data`.

    Whichever side was not set is computed on first read through the
    formatter or parser registered for the current `format`, then cached.
    Setting one side never clears the other, and changing `format` only
    affects the next computation.

    `formatters` and `parsers` map a format identifier to a factory and take
    precedence over the built-in codecs.
    """

    def __init__(
        self,
        headers: HeaderCollection | Mapping[str, HeaderValue] | None = None,
        content: str | None = None,
        data: dict[str, Any] | None = None,
        format: str | None = None,
        formatters: Mapping[str, FormatterFactory] | None = None,
        parsers: Mapping[str, ParserFactory] | None = None,
    ):
        self.formatters: dict[str, FormatterFactory] = dict(formatters or {})
        self.parsers: dict[str, ParserFactory] = dict(parsers or {})
        # exactly one of these is set once headers were given
        self._raw_headers: Mapping[str, HeaderValue] | None = None
        self._header_collection: HeaderCollection | None = None
        self._content = content
        self._data = data
        self._format = format
        if headers is not None:
            self.set_headers(headers)

    # headers

    def set_headers(self, headers: HeaderCollection | Mapping[str, HeaderValue]) -> "Message":
        if isinstance(headers, HeaderCollection):
            self._header_collection = headers
            self._raw_headers = None
        else:
            self._raw_headers = headers
            self._header_collection = None
        return self

    @property
    def headers(self) -> HeaderCollection:
        if self._header_collection is None:
            self._header_collection = HeaderCollection(self._raw_headers)
            self._raw_headers = None
        return self._header_collection

    @headers.setter
    def headers(self, headers: HeaderCollection | Mapping[str, HeaderValue]) -> None:
        self.set_headers(headers)

    def add_headers(self, headers: Mapping[str, HeaderValue]) -> "Message":
        collection = self.headers
        for name, value in headers.items():
            collection.add(name, value)
        return self

    # content / data

    def set_content(self, content: str | None) -> "Message":
        self._content = content
        return self

    @property
    def content(self) -> str | None:
        if self._content is None and self._data:
            self._content = self.create_formatter().format(self)
        return self._content

    @content.setter
    def content(self, content: str | None) -> None:
        self.set_content(content)

    def set_data(self, data: dict[str, Any] | None) -> "Message":
        self._data = data
        return self

    @property
    def data(self) -> dict[str, Any] | None:
        if self._data is None and self._content:
            self._data = self.create_parser().parse(self)
        return self._data

    @data.setter
    def data(self, data: dict[str, Any] | None) -> None:
        self.set_data(data)

    # format

    def set_format(self, format: str | None) -> "Message":
        self._format = format
        return self

    @property
    def format(self) -> str:
        if self._format is None:
            self._format = self.default_format()
        return self._format

    @format.setter
    def format(self, format: str | None) -> None:
        self.set_format(format)

    def default_format(self) -> str:
        return MessageFormat.URLENCODED

    def create_formatter(self) -> Formatter:
        return create_formatter(self.format, self.formatters)

    def create_parser(self) -> Parser:
        return create_parser(self.format, self.parsers)

    # string representation

    def to_string(self) -> str:
        """
        Render headers and content for diagnostics.

        Content is computed before the header lines are collected, so a
        `Content-Type` added by the formatter shows up in the output.
        Formatting errors propagate.
        """
        content = self.content or ""
        header_lines = [f"{name} : {value}" for name, values in self.headers for value in values]
        return "\n".join(header_lines) + "\n\n" + content

    def to_display_string(self) -> DisplayResult:
        try:
            return DisplayResult(value=self.to_string())
        except Exception as e:
            return DisplayResult(value="", error=e)

    def __str__(self) -> str:
        result = self.to_display_string()
        if not result.ok:
            logger.warning(f"Unable to render {type(self).__name__}: {result.error!r}")
        return result.value
