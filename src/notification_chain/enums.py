from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def level(self) -> int:
        return _PRIORITY_LEVELS[self]

    @property
    def description(self) -> str:
        return f"{self.value.capitalize()} Priority"

    @property
    def is_immediate(self) -> bool:
        """HIGH and URGENT notifications take the fast delivery path."""
        return self in (Priority.HIGH, Priority.URGENT)

    def is_higher_than(self, other: "Priority") -> bool:
        return self.level > other.level

    # StrEnum compares lexically; order by level instead.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.level >= other.level


_PRIORITY_LEVELS: dict[str, int] = {
    Priority.LOW: 1,
    Priority.NORMAL: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}


class DeliveryStatus(StrEnum):
    SENT = "sent"
    PENDING = "pending"
    FAILED = "failed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETRYING = "retrying"

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    @property
    def is_success(self) -> bool:
        return self in (DeliveryStatus.SENT, DeliveryStatus.DELIVERED)

    @property
    def is_final(self) -> bool:
        return self not in (DeliveryStatus.PENDING, DeliveryStatus.RETRYING)


_STATUS_DESCRIPTIONS: dict[str, str] = {
    DeliveryStatus.SENT: "Notification sent successfully",
    DeliveryStatus.PENDING: "Notification pending processing",
    DeliveryStatus.FAILED: "Notification failed to send",
    DeliveryStatus.DELIVERED: "Notification delivered and confirmed",
    DeliveryStatus.CANCELLED: "Notification sending cancelled",
    DeliveryStatus.RETRYING: "Retrying notification send",
}


class ChannelTag(StrEnum):
    LOG = "LOG"
    EMAIL = "EMAIL"
    SMS = "SMS"
    CHAT = "CHAT"
