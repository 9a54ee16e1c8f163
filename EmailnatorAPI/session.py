"""
Session bootstrap for emailnator.com.

The service only accepts state-changing requests that echo back the value of
its ``XSRF-TOKEN`` cookie. A session is established by loading the homepage
once, reading the cookie out of the ``Set-Cookie`` headers and keeping the
same HTTP client (and therefore the same cookie jar) for every later call.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import unquote

from curl_cffi import CurlError, CurlHttpVersion, CurlOpt
from curl_cffi.requests import AsyncSession

from config import (
    HOMEPAGE_URL,
    MAX_REDIRECTS,
    REQUEST_TIMEOUT,
    TCP_KEEPALIVE,
    TOR_PORT,
    USER_AGENT,
    XSRF_COOKIE_PREFIX,
    XSRF_COOKIE_SEPARATOR,
)
from utils import format_error, logger, mask

from .exceptions import RateLimited, TransportError


@dataclass(frozen=True)
class Session:
    """
    Bootstrapped HTTP client paired with its XSRF token.

    Attributes:
        http: Cookie-persistent async HTTP client shared by every request.
        xsrf_token: URL-decoded token sent back in the X-XSRF-TOKEN header.
    """
    http: AsyncSession
    xsrf_token: str

    def __repr__(self) -> str:
        return f"Session(xsrf_token={mask(self.xsrf_token)!r})"


def build_http_client(use_tor: bool = False) -> AsyncSession:
    """
    Create the async HTTP client used for a session.

    Args:
        use_tor: Route requests through the local Tor SOCKS proxy.

    Returns:
        A configured curl_cffi AsyncSession.
    """
    proxies = {}
    if use_tor:
        proxies = {
            "http": f"socks5://127.0.0.1:{TOR_PORT}",
            "https": f"socks5://127.0.0.1:{TOR_PORT}"
        }

    return AsyncSession(
        headers={"User-Agent": USER_AGENT},
        timeout=REQUEST_TIMEOUT,
        allow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        http_version=CurlHttpVersion.V2_0,
        proxies=proxies,
        curl_options={
            CurlOpt.TCP_KEEPALIVE: 1,
            CurlOpt.TCP_KEEPIDLE: TCP_KEEPALIVE,
            CurlOpt.TCP_KEEPINTVL: TCP_KEEPALIVE,
        },
    )


def decode_xsrf_cookie(header: str) -> Optional[str]:
    """
    Extract the XSRF token from a single Set-Cookie header value.

    Args:
        header: Raw header value, e.g. ``XSRF-TOKEN=abc%3D; path=/``.

    Returns:
        The percent-decoded token, or None if the header is not the XSRF
        cookie or its value cannot be decoded.
    """
    if not isinstance(header, str) or not header.startswith(XSRF_COOKIE_PREFIX):
        return None

    raw = header[len(XSRF_COOKIE_PREFIX):].split(XSRF_COOKIE_SEPARATOR, 1)[0]

    try:
        token = unquote(raw, errors="strict")
    except UnicodeDecodeError:
        return None

    return token or None


def extract_xsrf_token(headers: Iterable[str]) -> Optional[str]:
    """Return the token from the first Set-Cookie header that yields one."""
    for header in headers:
        token = decode_xsrf_cookie(header)
        if token is not None:
            return token
    return None


async def bootstrap(
    http: Optional[AsyncSession] = None,
    use_tor: bool = False,
    level: int = 0
) -> Session:
    """
    Load the homepage and build a Session from its XSRF cookie.

    Args:
        http: Existing client to bootstrap. A new one is built when omitted.
        use_tor: Route requests through Tor (only used when building a client).
        level: Logging indentation level.

    Returns:
        A ready Session.

    Raises:
        TransportError: The homepage request failed.
        RateLimited: No Set-Cookie header carried a usable XSRF token.
    """
    owned = http is None
    if owned:
        http = build_http_client(use_tor=use_tor)

    logger("[######] Bootstrapping session...", level=level)

    try:
        try:
            response = await http.get(HOMEPAGE_URL)
        except CurlError as e:
            raise TransportError(format_error(e)) from e

        token = extract_xsrf_token(response.headers.get_list("set-cookie"))
        if token is None:
            raise RateLimited()
    except BaseException:
        if owned:
            await http.close()
        raise

    logger(f"✅ XSRF token: {mask(token)}", level=level + 1)
    return Session(http=http, xsrf_token=token)
