"""Data shapes exchanged with emailnator.com."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List


class EmailKind(str, Enum):
    """Aliasing strategy used when generating an address."""
    DOMAIN = "domain"
    PLUS_GMAIL = "plusGmail"
    DOT_GMAIL = "dotGmail"
    GOOGLE_MAIL = "googleMail"


@dataclass(frozen=True)
class MailHeader:
    """
    Summary of one message in an inbox.

    Attributes:
        id: Opaque message identifier (``messageID`` on the wire).
        sender: Sender address or display string (``from`` on the wire).
        subject: Message subject.
    """
    id: str
    sender: str
    subject: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MailHeader":
        """Build a header from its wire representation."""
        values = (data["messageID"], data["from"], data["subject"])
        if not all(isinstance(value, str) for value in values):
            raise TypeError(f"Mail header fields must be strings: {data!r}")
        return cls(id=values[0], sender=values[1], subject=values[2])

    def to_dict(self) -> Dict[str, str]:
        return {
            "messageID": self.id,
            "from": self.sender,
            "subject": self.subject,
        }


@dataclass(frozen=True)
class Inbox:
    """Snapshot of a mailbox at request time, in the order returned."""
    messages: List[MailHeader] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Inbox":
        """Build an inbox from a ``{"messageData": [...]}`` envelope."""
        entries = data["messageData"]
        if not isinstance(entries, list):
            raise TypeError(f"messageData must be a list, got {type(entries).__name__}")
        return cls(messages=[MailHeader.from_dict(entry) for entry in entries])

    def ids(self) -> List[str]:
        return [message.id for message in self.messages]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[MailHeader]:
        return iter(self.messages)
