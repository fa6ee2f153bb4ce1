import json
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode
from xml.etree import ElementTree

from configs import app_config

from .exceptions import ContentFormatError
from .types import MessageFormat

if TYPE_CHECKING:
    from .message import Message


CONTENT_TYPE_URLENCODED = "application/x-www-form-urlencoded; charset=UTF-8"
CONTENT_TYPE_JSON = "application/json; charset=UTF-8"
CONTENT_TYPE_XML = "application/xml; charset=UTF-8"

# letter or underscore first, no colon: namespaces are not supported
_XML_NAME_RE = re.compile(r"^[^\W\d][\w.\-]*$")


def _ensure_content_type(message: "Message", content_type: str) -> None:
    headers = message.headers
    if not headers.has("Content-Type"):
        headers.set("Content-Type", content_type)


class UrlEncodedFormatter:
    """
    Serializes message data as `application/x-www-form-urlencoded`.

    Nested mappings and sequences are flattened with bracket notation
    (`a[b]=c`, `tags[0]=x`), booleans are written as `1`/`0` and `None`
    values are omitted.
    """

    def format(self, message: "Message") -> str:
        _ensure_content_type(message, CONTENT_TYPE_URLENCODED)
        return urlencode(list(_flatten(message.data or {})))


def _flatten(data: Mapping[Any, Any], prefix: str | None = None) -> Iterator[tuple[str, str]]:
    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            yield from _flatten(value, name)
        elif isinstance(value, Sequence) and not isinstance(value, str | bytes):
            yield from _flatten(dict(enumerate(value)), name)
        elif isinstance(value, bool):
            yield name, "1" if value else "0"
        else:
            yield name, str(value)


class JsonFormatter:
    """Serializes message data as a JSON document."""

    def __init__(self, ensure_ascii: bool | None = None):
        if ensure_ascii is None:
            ensure_ascii = app_config.HTTP_CLIENT_JSON_ENSURE_ASCII
        self.ensure_ascii = ensure_ascii

    def format(self, message: "Message") -> str:
        _ensure_content_type(message, CONTENT_TYPE_JSON)
        return json.dumps(message.data or {}, ensure_ascii=self.ensure_ascii)


class XmlFormatter:
    """
    Serializes message data as an XML document.

    Not registered as a built-in; add it to `Message.formatters` under
    `MessageFormat.XML` to send XML bodies. Nested mappings become child
    elements and sequences become repeated `item_tag` elements. Keys that
    are not valid XML element names raise `ContentFormatError`.
    """

    def __init__(self, root_tag: str | None = None, item_tag: str = "item"):
        self.root_tag = root_tag or app_config.HTTP_CLIENT_XML_ROOT_TAG
        self.item_tag = item_tag

    def format(self, message: "Message") -> str:
        _ensure_content_type(message, CONTENT_TYPE_XML)
        root = ElementTree.Element(_xml_name(self.root_tag))
        self._fill(root, message.data or {})
        body = ElementTree.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'

    def _fill(self, element: ElementTree.Element, value: Any) -> None:
        if isinstance(value, Mapping):
            for key, item in value.items():
                self._fill(ElementTree.SubElement(element, _xml_name(str(key))), item)
        elif isinstance(value, Sequence) and not isinstance(value, str | bytes):
            for item in value:
                self._fill(ElementTree.SubElement(element, _xml_name(self.item_tag)), item)
        elif isinstance(value, bool):
            element.text = "true" if value else "false"
        elif value is not None:
            element.text = str(value)


def _xml_name(name: str) -> str:
    if not _XML_NAME_RE.fullmatch(name):
        raise ContentFormatError(MessageFormat.XML, f"Invalid XML element name: {name!r}")
    return name
