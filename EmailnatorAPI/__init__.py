"""
EmailnatorAPI - Async client for the emailnator.com temporary email service.

Usage:
- Emailnator.create() -> bootstrapped client (XSRF cookie harvested once)
- create_emails(kinds, count) -> list of addresses
- fetch_inbox(email) -> Inbox of MailHeader records
- read_message(email, message_id) -> raw message body
- wait_for_email(email, timeout) -> first new MailHeader
"""

from .Emailnator import Emailnator
from .exceptions import (
    DecodeError,
    EmailnatorError,
    NoEmailKinds,
    RateLimited,
    TransportError,
    ZeroCount,
)
from .models import EmailKind, Inbox, MailHeader
from .session import Session, bootstrap

__all__ = [
    'Emailnator',
    'EmailKind',
    'Inbox',
    'MailHeader',
    'Session',
    'bootstrap',
    'EmailnatorError',
    'TransportError',
    'DecodeError',
    'RateLimited',
    'NoEmailKinds',
    'ZeroCount',
]
