from collections.abc import Iterator, Mapping, Sequence

import httpx

HeaderValue = str | Sequence[str]


class HeaderCollection:
    """Case-insensitive, ordered, multi-value header store backed by `httpx.Headers`."""

    def __init__(self, headers: Mapping[str, HeaderValue] | None = None):
        self._headers = httpx.Headers()
        if headers:
            for name, value in headers.items():
                self.add(name, value)

    @classmethod
    def from_httpx(cls, headers: httpx.Headers) -> "HeaderCollection":
        collection = cls()
        collection._headers = httpx.Headers(headers.raw)
        return collection

    def to_httpx(self) -> httpx.Headers:
        return self._headers

    def add(self, name: str, value: HeaderValue) -> "HeaderCollection":
        # kept as bytes: httpx encodes str pairs as ASCII
        items = self._headers.raw
        items.extend((name.encode("utf-8"), v.encode("utf-8")) for v in _values(value))
        self._headers = httpx.Headers(items)
        return self

    def set(self, name: str, value: HeaderValue) -> "HeaderCollection":
        self.remove(name)
        return self.add(name, value)

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self._headers.get_list(name)
        return values[0] if values else default

    def get_list(self, name: str) -> list[str]:
        return self._headers.get_list(name)

    def has(self, name: str) -> bool:
        return name in self._headers

    def remove(self, name: str) -> list[str]:
        values = self._headers.get_list(name)
        if values:
            del self._headers[name]
        return values

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        for name in self._headers.keys():
            yield name, self._headers.get_list(name)

    def __len__(self) -> int:
        return len(self._headers.keys())

    def __repr__(self) -> str:
        return f"HeaderCollection({self._headers.multi_items()!r})"


def _values(value: HeaderValue) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        return [str(value)]
    return [str(v) for v in value]
