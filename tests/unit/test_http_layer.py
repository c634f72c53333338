# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import threading
import time
from contextlib import contextmanager

import httpx

from netcheck.config import HttpSettings
from netcheck.configuration import ConnectivityConfiguration
from netcheck.http.adapters import StubHttpClient
from netcheck.http.cache import ResponseCache, send_with_cache
from netcheck.http.httpx_client import HttpxClient
from netcheck.http.models import HttpRequest, HttpResponse, RequestCachePolicy
from netcheck.http.url import parse_probe_url
from netcheck.probe import EXPECT_200, Probe


class CountingHttpClient:
    def __init__(self, response: HttpResponse):
        self._response = response
        self.calls = 0

    def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
        self.calls += 1
        return self._response

    def close(self) -> None:  # pragma: no cover - not exercised
        return None


def _httpx_client(handler, **settings_overrides) -> HttpxClient:
    settings = HttpSettings(**settings_overrides)
    return HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_http_request_is_hashable_and_compares_by_value():
    a = HttpRequest(url="http://example", timeout=3.0)
    b = HttpRequest(url="http://example", timeout=3.0)
    c = HttpRequest(url="http://example", timeout=4.0)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2
    assert a.cache_key == ("GET", "http://example")


def test_http_response_without_status_is_not_http():
    assert HttpResponse(ok=True).is_http is False
    assert HttpResponse(ok=False, status_code=500).is_http is False


def test_parse_probe_url():
    assert parse_probe_url("http://captive.apple.com") == "http://captive.apple.com"
    assert parse_probe_url("  https://example.com/x  ") == "https://example.com/x"
    assert parse_probe_url("") is None
    assert parse_probe_url(None) is None
    assert parse_probe_url("not a url") is None
    assert parse_probe_url("ftp://example.com") is None
    assert parse_probe_url("http://") is None
    assert parse_probe_url("http://example.com:notaport/") is None


def test_httpx_client_returns_status_and_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = dict(request.headers)
        return httpx.Response(200, text="Success", headers={"X-Probe": "1"})

    client = _httpx_client(handler, user_agent="TestAgent/1.0")
    resp = client.request(
        HttpRequest(
            url="http://captive.test/",
            cache_policy=RequestCachePolicy.RELOAD_IGNORING_CACHE_DATA,
            timeout=3.0,
        )
    )

    assert resp.ok is True
    assert resp.status_code == 200
    assert resp.content == b"Success"
    assert resp.text == "Success"
    assert resp.headers["x-probe"] == "1"
    assert seen["headers"]["user-agent"] == "TestAgent/1.0"
    assert seen["headers"]["cache-control"] == "no-cache"
    assert seen["headers"]["pragma"] == "no-cache"


def test_httpx_client_omits_no_cache_headers_when_cache_allowed():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = dict(request.headers)
        return httpx.Response(204)

    client = _httpx_client(handler)
    resp = client.request(HttpRequest(url="http://gen.test/generate_204"))
    assert resp.status_code == 204
    assert "pragma" not in seen["headers"]


def test_httpx_client_truncates_large_bodies():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, content=b"x" * 100)

    client = _httpx_client(handler, max_body_bytes=10)
    resp = client.request(HttpRequest(url="http://big.test/"))
    assert resp.content == b"x" * 10
    assert resp.meta["body_truncated"] is True
    assert resp.meta["body_bytes_limit"] == 10


def test_httpx_client_converts_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _httpx_client(handler)
    resp = client.request(HttpRequest(url="http://down.test/"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_type == "ConnectError"
    assert resp.meta["error_category"] == "CONNECTION_ERROR"
    assert resp.url == "http://down.test/"


def test_httpx_client_converts_timeouts():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _httpx_client(handler)
    resp = client.request(HttpRequest(url="http://slow.test/", timeout=0.1))
    assert resp.ok is False
    assert resp.error_type == "ReadTimeout"


def test_httpx_client_refuses_metered_access_on_metered_network():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(204)

    client = _httpx_client(handler, metered_network=True)
    denied = client.request(HttpRequest(url="http://gen.test/", allows_metered_access=False))
    allowed = client.request(HttpRequest(url="http://gen.test/", allows_metered_access=True))

    assert denied.ok is False
    assert denied.error_type == "MeteredAccessDenied"
    assert allowed.status_code == 204
    assert len(calls) == 1


def test_send_with_cache_bypasses_store_when_ignoring_cache():
    cache = ResponseCache()
    client = CountingHttpClient(HttpResponse(ok=True, status_code=204))
    request = HttpRequest(url="http://gen.test/", cache_policy=RequestCachePolicy.RELOAD_IGNORING_CACHE_DATA)

    send_with_cache(client, request, cache=cache)
    send_with_cache(client, request, cache=cache)

    assert client.calls == 2
    assert len(cache) == 0


def test_send_with_cache_return_cache_data_else_load():
    cache = ResponseCache()
    client = CountingHttpClient(HttpResponse(ok=True, status_code=200, content=b"ok"))
    request = HttpRequest(url="http://gen.test/", cache_policy=RequestCachePolicy.RETURN_CACHE_DATA_ELSE_LOAD)

    first = send_with_cache(client, request, cache=cache)
    second = send_with_cache(client, request, cache=cache)

    assert client.calls == 1
    assert first.status_code == 200
    assert second.status_code == 200
    assert second.meta["from_cache"] is True
    assert "from_cache" not in first.meta


def test_send_with_cache_dont_load_misses_without_io():
    cache = ResponseCache()
    client = CountingHttpClient(HttpResponse(ok=True, status_code=200))
    request = HttpRequest(url="http://gen.test/", cache_policy=RequestCachePolicy.RETURN_CACHE_DATA_DONT_LOAD)

    resp = send_with_cache(client, request, cache=cache)
    assert resp.ok is False
    assert resp.error_type == "CacheMiss"

    no_store = send_with_cache(client, request, cache=None)
    assert no_store.ok is False
    assert client.calls == 0


def test_send_with_cache_protocol_policy_always_loads_and_stores():
    cache = ResponseCache()
    client = CountingHttpClient(HttpResponse(ok=True, status_code=204))
    request = HttpRequest(url="http://gen.test/")

    send_with_cache(client, request, cache=cache)
    send_with_cache(client, request, cache=cache)

    assert client.calls == 2
    assert cache.get(request).status_code == 204


def test_response_cache_skips_failures():
    cache = ResponseCache()
    request = HttpRequest(url="http://gen.test/")
    cache.store(request, HttpResponse(ok=False, error_message="boom"))
    assert cache.get(request) is None
    cache.store(request, HttpResponse(ok=True, status_code=204))
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_stub_client_simulates_timeouts():
    client = StubHttpClient(
        {"http://slow.test/": HttpResponse(ok=True, status_code=204)},
        delays={"http://slow.test/": 0.5},
    )
    resp = client.request(HttpRequest(url="http://slow.test/", timeout=0.05))
    assert resp.ok is False
    assert resp.error_type == "TimeoutException"

    missing = client.request(HttpRequest(url="http://unknown.test/"))
    assert missing.ok is False
    assert len(client.requests) == 2
    assert len(client.completed) == 2


@contextmanager
def trickling_server(body: bytes, interval: float):
    """Serve one 200 response whose body arrives one byte per ``interval`` seconds."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5)
    host, port = listener.getsockname()

    def serve():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            data = b""
            while b"\r\n\r\n" not in data:
                chunk = conn.recv(4096)
                if not chunk:
                    return
                data += chunk
            try:
                conn.sendall(b"HTTP/1.1 200 OK\r\nContent-Length: %d\r\nConnection: close\r\n\r\n" % len(body))
                for byte in body:
                    time.sleep(interval)
                    conn.sendall(bytes([byte]))
            except OSError:
                return

    worker = threading.Thread(target=serve, daemon=True)
    worker.start()
    try:
        yield f"http://{host}:{port}/"
    finally:
        listener.close()
        worker.join(timeout=5)


def test_httpx_client_timeout_bounds_slow_body():
    with trickling_server(b"Success", interval=0.4) as url:
        client = HttpxClient(HttpSettings())
        started = time.monotonic()
        try:
            resp = client.request(HttpRequest(url=url, timeout=1.0))
        finally:
            client.close()
        elapsed = time.monotonic() - started

    assert resp.ok is False
    assert resp.error_type == "TimeoutException"
    assert resp.meta["error_category"] == "TIMEOUT"
    assert elapsed < 2.0


def test_slow_body_past_timeout_is_not_connectivity():
    config = ConnectivityConfiguration.DEFAULT.with_timeout(1.0)
    with trickling_server(b"Success", interval=0.4) as url:
        client = HttpxClient(HttpSettings())
        started = time.monotonic()
        try:
            assert Probe.from_url(url, EXPECT_200, config).execute(client) is False
        finally:
            client.close()
    assert time.monotonic() - started < 2.0


def test_httpx_client_fast_body_within_timeout_succeeds():
    with trickling_server(b"ok", interval=0.01) as url:
        client = HttpxClient(HttpSettings())
        try:
            resp = client.request(HttpRequest(url=url, timeout=2.0))
        finally:
            client.close()

    assert resp.ok is True
    assert resp.status_code == 200
    assert resp.content == b"ok"
