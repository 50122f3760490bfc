"""Terminal handler: the innermost, log-only base case of a chain."""

import logging

from notification_chain.clock import Clock, SystemClock
from notification_chain.config import DEFAULT_SYSTEM_NAME, DEFAULT_TERMINAL_LATENCY_MS
from notification_chain.enums import ChannelTag
from notification_chain.handlers.base import ChannelHandler
from notification_chain.models import DeliveryOutcome, NotificationRequest
from notification_chain.sinks import DeliverySink, LoggingSink

logger = logging.getLogger(__name__)


class TerminalHandler(ChannelHandler):
    """Records every request it receives and reports it as sent.

    The only way it fails is a missing or blank destination.
    """

    def __init__(
        self,
        system_name: str = DEFAULT_SYSTEM_NAME,
        *,
        sink: DeliverySink | None = None,
        clock: Clock | None = None,
        latency_ms: int = DEFAULT_TERMINAL_LATENCY_MS,
    ) -> None:
        self._system_name = system_name
        self._sink = sink or LoggingSink()
        self._clock = clock or SystemClock()
        self._latency_ms = latency_ms

    @property
    def channel_tag(self) -> str:
        return ChannelTag.LOG

    @property
    def system_name(self) -> str:
        return self._system_name

    def can_handle(self, request: NotificationRequest) -> bool:
        return request.has_destination

    def describe_channels(self) -> str:
        return self.channel_tag

    def send(self, request: NotificationRequest) -> DeliveryOutcome:
        if not self.can_handle(request):
            logger.warning(
                "Destination missing, cannot log notification",
                extra={"system_name": self._system_name},
            )
            return DeliveryOutcome.failure(
                self.channel_tag,
                request.message,
                "Validation failed for base notification",
                timestamp=self._clock.now(),
            )

        destination = request.destination or ""
        try:
            self._sink.emit(
                self.channel_tag,
                destination,
                f"[{self._system_name}] Logging notification for {destination}: {request.message}",
            )
            self._clock.sleep(self._latency_ms / 1000)
        except Exception as exc:
            logger.exception(
                "Terminal handler error",
                extra={"system_name": self._system_name, "destination": destination},
            )
            return DeliveryOutcome.failure(
                self.channel_tag,
                request.message,
                f"Unexpected error in base notifier: {exc}",
                destination=destination,
                timestamp=self._clock.now(),
            )

        return DeliveryOutcome.sent(
            self.channel_tag,
            destination,
            request.message,
            timestamp=self._clock.now(),
        )

    def __repr__(self) -> str:
        return f"TerminalHandler(system_name={self._system_name!r})"
