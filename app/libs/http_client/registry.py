"""Resolves a format identifier to a formatter or parser instance."""

import logging
from collections.abc import Mapping

from .exceptions import UnrecognizedFormatError
from .formatters import JsonFormatter, UrlEncodedFormatter
from .parsers import JsonParser, UrlEncodedParser, XmlParser
from .types import Formatter, FormatterFactory, MessageFormat, Parser, ParserFactory

logger = logging.getLogger(__name__)

DEFAULT_FORMATTERS: Mapping[str, FormatterFactory] = {
    MessageFormat.URLENCODED: UrlEncodedFormatter,
    MessageFormat.JSON: JsonFormatter,
}

DEFAULT_PARSERS: Mapping[str, ParserFactory] = {
    MessageFormat.URLENCODED: UrlEncodedParser,
    MessageFormat.JSON: JsonParser,
    MessageFormat.XML: XmlParser,
}


def create_formatter(format: str, overrides: Mapping[str, FormatterFactory] | None = None) -> Formatter:
    """
    Create the formatter for `format`.

    User overrides win over the built-in table, even for built-in formats.

    Raises:
        UnrecognizedFormatError: neither table knows the format
    """
    if overrides and format in overrides:
        logger.debug(f"Using overridden formatter for format '{format}'")
        return overrides[format]()
    if format in DEFAULT_FORMATTERS:
        return DEFAULT_FORMATTERS[format]()
    raise UnrecognizedFormatError(format)


def create_parser(format: str, overrides: Mapping[str, ParserFactory] | None = None) -> Parser:
    """
    Create the parser for `format`.

    Raises:
        UnrecognizedFormatError: neither table knows the format
    """
    if overrides and format in overrides:
        logger.debug(f"Using overridden parser for format '{format}'")
        return overrides[format]()
    if format in DEFAULT_PARSERS:
        return DEFAULT_PARSERS[format]()
    raise UnrecognizedFormatError(format)
