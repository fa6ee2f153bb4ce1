import json
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl
from xml.etree import ElementTree

from .exceptions import ContentParseError
from .types import MessageFormat

if TYPE_CHECKING:
    from .message import Message

_BRACKET_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


class UrlEncodedParser:
    """
    Parses `application/x-www-form-urlencoded` content.

    Never fails: anything that does not look like a pair is kept as a key
    with an empty value. Bracketed keys (`a[b]=c`, `a[]=1`, `a[0]=1`) are
    rebuilt into nested mappings, and mappings keyed `0..n-1` become lists.
    Repeated plain keys are collected into a list.
    """

    def parse(self, message: "Message") -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, value in parse_qsl(message.content or "", keep_blank_values=True):
            match = _BRACKET_KEY_RE.match(key)
            if match:
                segments = [match.group(1), *_SEGMENT_RE.findall(match.group(2))]
                _assign(data, segments, value)
            elif key not in data:
                data[key] = value
            elif isinstance(data[key], list):
                data[key].append(value)
            else:
                data[key] = [data[key], value]
        return {key: _listify(value) for key, value in data.items()}


def _assign(data: dict[str, Any], segments: list[str], value: str) -> None:
    container = data
    for segment in segments[:-1]:
        if segment == "":
            segment = str(len(container))
        child = container.get(segment)
        if not isinstance(child, dict):
            child = container[segment] = {}
        container = child
    last = segments[-1]
    container[str(len(container)) if last == "" else last] = value


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    converted = {key: _listify(item) for key, item in value.items()}
    if converted and list(converted) == [str(i) for i in range(len(converted))]:
        return list(converted.values())
    return converted


class JsonParser:
    def parse(self, message: "Message") -> dict[str, Any]:
        content = message.content or ""
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ContentParseError(MessageFormat.JSON, f"Malformed JSON content: {e}") from e
        if not isinstance(data, dict):
            raise ContentParseError(
                MessageFormat.JSON,
                f"JSON content must be an object, got {type(data).__name__}",
            )
        return data


class XmlParser:
    """
    Parses XML content into a mapping keyed by the root element's children.

    Elements with children become nested mappings, repeated sibling tags
    become lists and leaf elements become their stripped text. Attributes
    are kept under the `@attributes` key.
    """

    ATTRIBUTES_KEY = "@attributes"
    TEXT_KEY = "#text"

    def parse(self, message: "Message") -> dict[str, Any]:
        content = message.content or ""
        if not content.strip():
            return {}
        try:
            root = ElementTree.fromstring(content)
        except ElementTree.ParseError as e:
            raise ContentParseError(MessageFormat.XML, f"Malformed XML content: {e}") from e
        data = self._convert(root)
        if isinstance(data, dict):
            return data
        # text-only root element
        return {root.tag: data} if data else {}

    def _convert(self, element: ElementTree.Element) -> Any:
        children = list(element)
        text = (element.text or "").strip()
        if not children and not element.attrib:
            return text

        result: dict[str, Any] = {}
        if element.attrib:
            result[self.ATTRIBUTES_KEY] = dict(element.attrib)
        if not children:
            if text:
                result[self.TEXT_KEY] = text
            return result

        for child in children:
            value = self._convert(child)
            if child.tag not in result:
                result[child.tag] = value
            elif isinstance(result[child.tag], list):
                result[child.tag].append(value)
            else:
                result[child.tag] = [result[child.tag], value]
        return result
