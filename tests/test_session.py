"""Session bootstrap: XSRF cookie discovery and HTTP client setup."""

import asyncio

import pytest
from curl_cffi import CurlError, CurlHttpVersion, CurlOpt

import config
import EmailnatorAPI.session as session_module
from EmailnatorAPI import RateLimited, TransportError, bootstrap
from EmailnatorAPI.session import decode_xsrf_cookie, extract_xsrf_token

from fakes import FakeAsyncSession, FakeResponse


def homepage(*cookies: str) -> FakeResponse:
    return FakeResponse(200, "<html></html>", headers=[("set-cookie", c) for c in cookies])


def test_decode_strips_prefix_and_attributes() -> None:
    header = "XSRF-TOKEN=eyJpdiI6IkFCQyJ9%3D%3D; expires=Sun, 19 Oct 2026 04:00:00 GMT; Max-Age=7200; path=/; samesite=lax"
    assert decode_xsrf_cookie(header) == "eyJpdiI6IkFCQyJ9=="


def test_decode_without_attributes() -> None:
    assert decode_xsrf_cookie("XSRF-TOKEN=abc") == "abc"


@pytest.mark.parametrize("header", [
    "laravel_session=abc%3D; path=/; httponly",
    "xsrf-token=abc",
    " XSRF-TOKEN=abc",
    "XSRF-TOKEN=; path=/",
    "XSRF-TOKEN=%FF%FE; path=/",
])
def test_decode_rejects(header: str) -> None:
    assert decode_xsrf_cookie(header) is None


def test_decode_is_idempotent_on_decoded_values() -> None:
    decoded = decode_xsrf_cookie("XSRF-TOKEN=a%2Bb%2Fc%3D%20d; path=/")
    assert decoded == "a+b/c= d"
    assert decode_xsrf_cookie(f"XSRF-TOKEN={decoded}") == decoded


def test_extract_returns_first_match_in_order() -> None:
    headers = [
        "laravel_session=zzz; path=/",
        "XSRF-TOKEN=%FF; path=/",
        "XSRF-TOKEN=first%3D; path=/",
        "XSRF-TOKEN=second; path=/",
    ]
    assert extract_xsrf_token(headers) == "first="


def test_extract_without_match() -> None:
    assert extract_xsrf_token([]) is None
    assert extract_xsrf_token(["laravel_session=zzz"]) is None


def test_bootstrap_builds_session_from_cookie() -> None:
    http = FakeAsyncSession({
        config.HOMEPAGE_URL: homepage("laravel_session=s1; path=/", "XSRF-TOKEN=tok%3D; path=/"),
    })

    session = asyncio.run(bootstrap(http=http))

    assert session.xsrf_token == "tok="
    assert session.http is http
    assert [(c["method"], c["url"]) for c in http.calls] == [("GET", config.HOMEPAGE_URL)]
    assert not http.closed


def test_bootstrap_without_cookie_is_rate_limited() -> None:
    http = FakeAsyncSession({config.HOMEPAGE_URL: homepage("laravel_session=s1; path=/")})

    with pytest.raises(RateLimited):
        asyncio.run(bootstrap(http=http))

    # Injected clients belong to the caller
    assert not http.closed


def test_bootstrap_closes_its_own_client_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    http = FakeAsyncSession({config.HOMEPAGE_URL: homepage()})
    monkeypatch.setattr(session_module, "build_http_client", lambda use_tor=False: http)

    with pytest.raises(RateLimited):
        asyncio.run(bootstrap())

    assert http.closed


def test_bootstrap_transport_failure() -> None:
    http = FakeAsyncSession({config.HOMEPAGE_URL: CurlError("Failed to connect to www.emailnator.com port 443")})

    with pytest.raises(TransportError, match="Failed to connect") as excinfo:
        asyncio.run(bootstrap(http=http))

    assert isinstance(excinfo.value.__cause__, CurlError)


def test_session_repr_masks_token() -> None:
    http = FakeAsyncSession({config.HOMEPAGE_URL: homepage("XSRF-TOKEN=secretvalue")})
    session = asyncio.run(bootstrap(http=http))
    assert "secretvalue" not in repr(session)


def test_build_http_client_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(session_module, "AsyncSession", FakeAsyncSession)

    http = session_module.build_http_client()

    assert http.kwargs["headers"] == {"User-Agent": config.USER_AGENT}
    assert http.kwargs["allow_redirects"] is True
    assert http.kwargs["max_redirects"] == 2
    assert http.kwargs["http_version"] == CurlHttpVersion.V2_0
    assert http.kwargs["proxies"] == {}
    assert http.kwargs["curl_options"][CurlOpt.TCP_KEEPIDLE] == 80


def test_build_http_client_with_tor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(session_module, "AsyncSession", FakeAsyncSession)

    http = session_module.build_http_client(use_tor=True)

    assert http.kwargs["proxies"]["https"] == f"socks5://127.0.0.1:{config.TOR_PORT}"
