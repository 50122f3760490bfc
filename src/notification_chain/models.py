"""Request and outcome models shared by every handler in a chain."""

import itertools
import threading
from datetime import datetime, timezone
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from notification_chain.enums import DeliveryStatus, Priority

DEFAULT_SENDER = "system"
DEFAULT_RECIPIENT = "default-recipient"

_id_sequence = itertools.count(1)
_id_lock = threading.Lock()


def new_outcome_id(prefix: str, at: datetime | None = None) -> str:
    """Return a process-unique outcome id such as ``EMAIL-1760000000000-00002A``.

    The millisecond component comes from *at* (the outcome timestamp) when
    given; uniqueness comes from a process-wide sequence.
    """
    with _id_lock:
        seq = next(_id_sequence)
    if at is None:
        at = datetime.now(timezone.utc)
    millis = int(at.timestamp() * 1000)
    return f"{prefix}-{millis}-{seq:06X}"


class NotificationRequest(BaseModel):
    """One notification attempt, consumed read-only by every handler."""

    model_config = ConfigDict(frozen=True)

    message: str
    destination: str | None = None
    priority: Priority = Priority.NORMAL
    subject: str | None = None
    sender: str = DEFAULT_SENDER
    scheduled_at: datetime | None = None
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("scheduled_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def default(cls, message: str) -> Self:
        return cls(message=message, destination=DEFAULT_RECIPIENT)

    @classmethod
    def for_destination(cls, destination: str, message: str) -> Self:
        return cls(message=message, destination=destination)

    @classmethod
    def urgent(cls, destination: str, subject: str, message: str) -> Self:
        return cls(
            message=message,
            destination=destination,
            subject=subject,
            priority=Priority.URGENT,
        )

    @property
    def has_destination(self) -> bool:
        return bool(self.destination and self.destination.strip())

    @property
    def is_high_priority(self) -> bool:
        return self.priority.is_immediate

    def is_scheduled(self, now: datetime | None = None) -> bool:
        """True iff ``scheduled_at`` is set and lies after *now*."""
        if self.scheduled_at is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        return self.scheduled_at > now

    def attribute(self, key: str) -> str | None:
        return self.attributes.get(key)


class DeliveryOutcome(BaseModel):
    """Result of a single handler's delivery attempt.

    ``succeeded`` is derived from ``status`` so the two can never disagree.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    status: DeliveryStatus
    channel_tag: str
    message_body: str
    destination: str | None = None
    error_detail: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return self.status.is_success

    @classmethod
    def sent(
        cls,
        channel_tag: str,
        destination: str | None,
        message_body: str,
        *,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._build(channel_tag, DeliveryStatus.SENT, destination, message_body, timestamp)

    @classmethod
    def pending(
        cls,
        channel_tag: str,
        destination: str | None,
        message_body: str,
        *,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._build(channel_tag, DeliveryStatus.PENDING, destination, message_body, timestamp)

    @classmethod
    def failure(
        cls,
        channel_tag: str,
        message_body: str,
        error_detail: str,
        *,
        destination: str | None = None,
        timestamp: datetime | None = None,
    ) -> Self:
        return cls._build(
            channel_tag,
            DeliveryStatus.FAILED,
            destination,
            message_body,
            timestamp,
            error_detail=error_detail,
        )

    @classmethod
    def _build(
        cls,
        channel_tag: str,
        status: DeliveryStatus,
        destination: str | None,
        message_body: str,
        timestamp: datetime | None,
        error_detail: str | None = None,
    ) -> Self:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        return cls(
            id=new_outcome_id(channel_tag, timestamp),
            status=status,
            channel_tag=channel_tag,
            destination=destination,
            message_body=message_body,
            error_detail=error_detail,
            timestamp=timestamp,
        )

    def __str__(self) -> str:
        error = f", error={self.error_detail!r}" if self.error_detail else ""
        return (
            f"DeliveryOutcome(id={self.id!r}, status={self.status.name}, "
            f"channel={self.channel_tag!r}, destination={self.destination!r}{error})"
        )
