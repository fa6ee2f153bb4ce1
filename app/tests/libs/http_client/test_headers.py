import httpx

from libs.http_client import HeaderCollection


class TestHeaderCollection:
    def test_case_insensitive(self):
        headers = HeaderCollection({"Content-Type": "text/plain"})
        assert headers.get("content-type") == "text/plain"
        assert headers.has("CONTENT-TYPE")
        assert "Content-type" in headers

    def test_add_multiple_values(self):
        headers = HeaderCollection()
        headers.add("Accept", "text/html").add("accept", ["application/json", "text/plain"])
        assert headers.get_list("Accept") == ["text/html", "application/json", "text/plain"]
        assert headers.get("Accept") == "text/html"
        assert len(headers) == 1

    def test_scalar_values_stringified(self):
        headers = HeaderCollection({"Content-Length": 42})
        assert headers.get("content-length") == "42"

    def test_set_replaces(self):
        headers = HeaderCollection({"X-Foo": ["a", "b"]})
        headers.set("x-foo", "c")
        assert headers.get_list("X-Foo") == ["c"]

    def test_remove(self):
        headers = HeaderCollection({"X-Foo": ["a", "b"], "X-Bar": "c"})
        assert headers.remove("x-foo") == ["a", "b"]
        assert headers.remove("x-foo") == []
        assert "x-foo" not in headers
        assert headers.get("x-bar") == "c"

    def test_missing(self):
        headers = HeaderCollection()
        assert headers.get("X-Missing") is None
        assert headers.get("X-Missing", "default") == "default"
        assert headers.get_list("X-Missing") == []

    def test_iteration_groups_values(self):
        headers = HeaderCollection({"X-Foo": ["a", "b"], "Accept": "*/*"})
        assert list(headers) == [("x-foo", ["a", "b"]), ("accept", ["*/*"])]

    def test_httpx_conversion(self):
        headers = HeaderCollection.from_httpx(httpx.Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]))
        assert headers.get_list("set-cookie") == ["a=1", "b=2"]
        assert isinstance(headers.to_httpx(), httpx.Headers)
        assert headers.to_httpx().get_list("Set-Cookie") == ["a=1", "b=2"]

    def test_non_ascii_values(self):
        headers = HeaderCollection({"X-Name": "café"})
        headers.add("X-Name", "naïve").set("X-City", "Zürich")
        assert headers.get_list("x-name") == ["café", "naïve"]
        assert headers.get("x-city") == "Zürich"

    def test_non_ascii_values_from_httpx(self):
        headers = HeaderCollection.from_httpx(httpx.Headers([(b"x-name", "café".encode("utf-8"))]))
        headers.add("X-Trace-ID", "abc")
        headers.set("X-Name", "crème")
        assert headers.get("x-name") == "crème"
        assert headers.get("x-trace-id") == "abc"
