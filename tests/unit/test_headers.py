import httpx

from http_intercept.headers import HeaderSet, overlay_headers


class TestHeaderSet:
    def test_names_are_lower_cased(self):
        headers = HeaderSet({"X-Custom": "hello"})
        assert headers.keys() == ["x-custom"]
        assert headers.get("X-CUSTOM") == "hello"
        assert "x-Custom" in headers

    def test_set_get_delete_clear(self):
        headers = HeaderSet()
        headers.set("a", "1")
        headers["B"] = "2"
        assert headers["b"] == "2"
        assert len(headers) == 2
        headers.delete("A")
        assert not headers.has("a")
        headers.delete("missing")
        headers.clear()
        assert len(headers) == 0

    def test_replacing_keeps_position(self):
        headers = HeaderSet([("a", "1"), ("b", "2")])
        headers.set("A", "3")
        assert headers.items() == [("a", "3"), ("b", "2")]

    def test_values_are_strings(self):
        headers = HeaderSet({"content-length": 12})  # type: ignore[dict-item]
        assert headers.get("content-length") == "12"

    def test_accepts_httpx_headers(self):
        headers = HeaderSet(httpx.Headers({"X-Id": "7"}))
        assert headers.get("x-id") == "7"

    def test_equality_with_mapping(self):
        assert HeaderSet({"A": "1"}) == {"a": "1"}
        assert HeaderSet({"A": "1"}) == HeaderSet({"a": "1"})

    def test_iteration_tolerates_mutation(self):
        headers = HeaderSet({"a": "1", "b": "2"})
        for name in headers:
            headers.delete(name)
        assert len(headers) == 0


class TestOverlayHeaders:
    def test_caller_value_wins(self):
        defaults = HeaderSet({"authorization": "global"})
        merged = overlay_headers({"Authorization": "local"}, defaults)
        assert merged.get("authorization") == "local"

    def test_defaults_fill_missing(self):
        defaults = HeaderSet({"x-one": "1", "x-two": "2"})
        merged = overlay_headers({"x-request-id": "123"}, defaults)
        assert merged == {"x-request-id": "123", "x-one": "1", "x-two": "2"}

    def test_no_caller_headers(self):
        defaults = HeaderSet({"authorization": "Bearer abc"})
        merged = overlay_headers(None, defaults)
        assert merged == {"authorization": "Bearer abc"}

    def test_returns_fresh_set(self):
        caller = HeaderSet({"a": "1"})
        defaults = HeaderSet({"b": "2"})
        merged = overlay_headers(caller, defaults)
        assert merged is not caller
        assert "b" not in caller
        merged.set("c", "3")
        assert "c" not in defaults
