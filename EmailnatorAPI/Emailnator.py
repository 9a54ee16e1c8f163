"""
Emailnator temporary email service integration.

Website: https://www.emailnator.com
Features: XSRF-signed requests, Gmail alias generation, async curl_cffi transport
"""

import asyncio
import json
import time
from typing import Any, Dict, Iterable, List, Optional, Union

from curl_cffi import CurlError
from curl_cffi.requests import Response

from config import (
    APPLICATION_JSON,
    GENERATE_EMAIL_URL,
    INBOX_URL,
    X_XSRF_TOKEN,
)
from utils import format_error, logger

from .exceptions import (
    DecodeError,
    NoEmailKinds,
    RateLimited,
    TransportError,
    ZeroCount,
)
from .models import EmailKind, Inbox, MailHeader
from .session import Session, bootstrap

TOO_MANY_REQUESTS = 429


class Emailnator:
    """
    Emailnator temporary email service client.

    Holds one bootstrapped Session for its whole lifetime. The token is never
    refreshed; after persistent RateLimited errors, discard the client and
    create a new one.

    Instances are safe to share between concurrent tasks.

    Attributes:
        session: The immutable HTTP client + XSRF token pair.
    """

    def __init__(self, session: Session):
        """
        Initialize the client from an already bootstrapped session.

        Args:
            session: Result of :func:`EmailnatorAPI.session.bootstrap`.
        """
        self.session = session

    @classmethod
    async def create(cls, use_tor: bool = False, level: int = 0) -> "Emailnator":
        """
        Bootstrap a new session and return a ready client.

        Args:
            use_tor: Route requests through Tor network.
            level: Logging indentation level.

        Raises:
            TransportError: The homepage could not be loaded.
            RateLimited: The service withheld the XSRF cookie.
        """
        logger("🚀 Initializing Emailnator...", level=level)
        session = await bootstrap(use_tor=use_tor, level=level + 1)
        logger("✅ API ready", level=level)
        return cls(session)

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.session.http.close()

    async def __aenter__(self) -> "Emailnator":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _post(self, url: str, payload: Dict[str, Any]) -> Response:
        """
        POST a JSON payload signed with the session's XSRF token.

        Args:
            url: Endpoint URL.
            payload: JSON-serializable request body.

        Returns:
            The response, already checked for throttling.

        Raises:
            TransportError: The request failed at the HTTP layer.
            RateLimited: The service answered 429.
        """
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        headers = {
            "Content-Type": APPLICATION_JSON,
            X_XSRF_TOKEN: self.session.xsrf_token,
        }

        try:
            response = await self.session.http.post(url, data=body, headers=headers)
        except CurlError as e:
            raise TransportError(format_error(e)) from e

        if response.status_code == TOO_MANY_REQUESTS:
            raise RateLimited()

        return response

    @staticmethod
    def _json(response: Response) -> Any:
        try:
            return json.loads(response.content)
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodeError(f"Invalid JSON (status {response.status_code}): {e}") from e

    async def create_emails(
        self,
        kinds: Union[Iterable[Union[EmailKind, str]], EmailKind, str],
        count: int,
        level: int = 0
    ) -> List[str]:
        """
        Generate temporary email addresses.

        Args:
            kinds: Aliasing strategies the service may pick from. A single
                kind is treated as a one-element collection.
            count: Number of addresses requested.
            level: Logging indentation level.

        Returns:
            Addresses in the order returned. The service may return fewer
            than requested.

        Raises:
            NoEmailKinds: ``kinds`` is empty.
            ZeroCount: ``count`` is less than one.
        """
        if isinstance(kinds, str):
            kinds = [kinds]
        kinds = list(dict.fromkeys(EmailKind(kind) for kind in kinds))
        if not kinds:
            raise NoEmailKinds()
        if count < 1:
            raise ZeroCount()

        logger(f"[######] Generating {count} email(s)...", level=level)

        payload = {
            "email": [kind.value for kind in kinds],
            "emailNo": count
        }
        response = await self._post(GENERATE_EMAIL_URL, payload)
        data = self._json(response)

        try:
            emails = data["email"]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"Missing 'email' in response: {data!r}") from e
        if not isinstance(emails, list) or not all(isinstance(item, str) for item in emails):
            raise DecodeError(f"'email' must be a list of strings: {emails!r}")

        for email in emails:
            logger(f"✅ Email: {email}", level=level + 1)

        return emails

    async def generate_email(
        self,
        kind: Union[EmailKind, str] = EmailKind.DOMAIN,
        level: int = 0
    ) -> str:
        """
        Generate a single temporary email address.

        Args:
            kind: Aliasing strategy.
            level: Logging indentation level.

        Returns:
            The generated address.
        """
        emails = await self.create_emails([kind], 1, level=level)
        if not emails:
            raise DecodeError("Service returned no email address")
        return emails[0]

    async def fetch_inbox(self, email: str, level: int = 0) -> Inbox:
        """
        Retrieve the message headers delivered to an address.

        Args:
            email: Address previously generated by this service.
            level: Logging indentation level.

        Returns:
            Inbox snapshot.
        """
        response = await self._post(INBOX_URL, {"email": email})
        data = self._json(response)

        try:
            inbox = Inbox.from_dict(data)
        except (KeyError, TypeError) as e:
            raise DecodeError(f"Unexpected inbox payload: {e}") from e

        logger(f"📬 Found {len(inbox)} emails", level=level)
        return inbox

    async def read_message(self, email: str, message_id: str, level: int = 0) -> str:
        """
        Retrieve the raw content of one message.

        Args:
            email: Address the message was delivered to.
            message_id: ``MailHeader.id`` of the message.
            level: Logging indentation level.

        Returns:
            Message body (HTML or plain text) exactly as served.
        """
        payload = {
            "email": email,
            "messageID": message_id
        }
        response = await self._post(INBOX_URL, payload)

        logger(f"📧 Retrieved email: {message_id}", level=level)
        try:
            return response.text
        except (LookupError, UnicodeDecodeError):
            # Unknown or lying charset
            return response.content.decode("utf-8", errors="replace")

    async def wait_for_email(
        self,
        email: str,
        timeout: int = 60,
        interval: int = 3,
        known_ids: Iterable[str] = (),
        level: int = 0
    ) -> Optional[MailHeader]:
        """
        Wait for a new email to arrive in the inbox.

        Errors from fetch_inbox are not retried and propagate to the caller.

        Args:
            email: Address to watch.
            timeout: Maximum wait time in seconds.
            interval: Poll interval in seconds.
            known_ids: Message ids to ignore (already seen).
            level: Logging indentation level.

        Returns:
            First header not in ``known_ids``, or None if timeout.
        """
        logger(f"⏳ Waiting for email (timeout: {timeout}s)...", level=level)
        known = set(known_ids)
        start = time.monotonic()

        while True:
            inbox = await self.fetch_inbox(email, level=level + 1)

            for header in inbox:
                if header.id not in known:
                    logger("✅ New email received!", level=level + 1)
                    return header

            elapsed = time.monotonic() - start
            if elapsed + interval > timeout:
                break

            logger(f"⏳ Waiting... ({int(elapsed)}/{timeout}s)", level=level + 1)
            await asyncio.sleep(interval)

        logger("⏰ Timeout - no email received", level=level + 1)
        return None

    async def print_inbox(self, email: str, level: int = 0) -> None:
        """
        Print formatted inbox contents.

        The listing is printed even when progress logging is off.

        Args:
            email: Address to list.
            level: Logging indentation level.
        """
        inbox = await self.fetch_inbox(email, level=level)

        if not inbox:
            logger("📭 Inbox is empty", level=level, force=True)
            return

        logger(f"📬 Inbox for: {email}", level=level, force=True)

        for i, header in enumerate(inbox, 1):
            logger(f"📩 Email #{i}", level=level + 1, force=True)
            logger(f"ID: {header.id}", level=level + 2, force=True)
            logger(f"From: {header.sender}", level=level + 2, force=True)
            logger(f"Subject: {header.subject}", level=level + 2, force=True)


async def main() -> None:
    async with await Emailnator.create() as api:
        address = await api.generate_email(EmailKind.DOT_GMAIL)
        print(f"\n📧 Your temporary email: {address}")

        inbox = await api.fetch_inbox(address)
        await api.print_inbox(address)

        header = await api.wait_for_email(address, timeout=120, known_ids=inbox.ids())
        if header:
            content = await api.read_message(address, header.id)
            print(f"\nFrom: {header.sender}")
            print(f"Subject: {header.subject}")
            print(f"\nBody:\n{content}")


if __name__ == "__main__":
    asyncio.run(main())
