"""Abstract channel handler interface."""

from abc import ABC, abstractmethod

from notification_chain.models import DeliveryOutcome, NotificationRequest


class ChannelHandler(ABC):
    """Capability contract shared by every handler in a chain."""

    @property
    @abstractmethod
    def channel_tag(self) -> str:
        """Short label such as 'EMAIL' used in outcomes and descriptions."""

    @abstractmethod
    def send(self, request: NotificationRequest) -> DeliveryOutcome:
        """Attempt delivery and return exactly one outcome.

        Implementations must not raise for delivery problems; return a
        FAILED outcome instead.
        """

    @abstractmethod
    def can_handle(self, request: NotificationRequest) -> bool:
        """Pure check of whether this handler (or anything it wraps) can act."""

    @abstractmethod
    def describe_channels(self) -> str:
        """Pipeline label, e.g. 'EMAIL + LOG'."""
