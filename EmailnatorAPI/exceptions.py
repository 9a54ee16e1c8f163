"""
Errors raised by the Emailnator client.

Every failure surfaces as a subclass of :class:`EmailnatorError`. Nothing is
retried internally; retry and backoff policy belong to the caller.
"""


class EmailnatorError(Exception):
    """Base exception for Emailnator client errors."""
    pass


class TransportError(EmailnatorError):
    """The HTTP layer failed (DNS, connect, TLS, timeout, malformed response)."""
    pass


class DecodeError(EmailnatorError):
    """A response body did not match the expected JSON shape."""
    pass


class RateLimited(EmailnatorError):
    """
    The service is throttling this client.

    Raised when bootstrap finds no usable XSRF cookie, and when any API call
    gets HTTP 429. Both cases are the same kind on purpose.
    """

    def __init__(self, message: str = "Rate limited by Cloudflare. Retry later"):
        super().__init__(message)


class NoEmailKinds(EmailnatorError, ValueError):
    """create_emails was called without any email kind."""

    def __init__(self, message: str = "No email kinds provided. Must provide at least one"):
        super().__init__(message)


class ZeroCount(EmailnatorError, ValueError):
    """create_emails was asked for zero addresses."""

    def __init__(self, message: str = "Count cannot be zero. Must provide at least one"):
        super().__init__(message)
