"""SMS channel handler (simulated gateway)."""

import logging
import math
import random
import re

from notification_chain.clock import Clock
from notification_chain.config import SMSConfig
from notification_chain.enums import ChannelTag, Priority
from notification_chain.handlers.base import ChannelHandler
from notification_chain.handlers.link import ChainLink
from notification_chain.models import DeliveryOutcome, NotificationRequest
from notification_chain.sinks import DeliverySink

logger = logging.getLogger(__name__)

# E.164
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
ELLIPSIS = "..."


class SMSHandler(ChainLink):
    """Sends to phone-number destinations, then delegates inward.

    Bodies over ``max_length`` characters are cut to fit, ending in an
    ellipsis. NORMAL-priority messages may come back PENDING to model
    carrier queuing; HIGH and URGENT never do.
    """

    def __init__(
        self,
        inner: ChannelHandler,
        config: SMSConfig | None = None,
        *,
        sink: DeliverySink | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        parallel: bool = False,
    ) -> None:
        super().__init__(inner, sink=sink, clock=clock, parallel=parallel)
        self._config = config or SMSConfig()
        self._rng = rng or random.Random()

    @property
    def channel_tag(self) -> str:
        return ChannelTag.SMS

    @property
    def display_name(self) -> str:
        return "SMS"

    @property
    def config(self) -> SMSConfig:
        return self._config

    def accepts(self, request: NotificationRequest) -> bool:
        if not request.has_destination:
            return False
        return PHONE_PATTERN.match(request.destination.strip()) is not None  # type: ignore[union-attr]

    def truncate(self, message: str) -> str:
        """Fit *message* into a single SMS of ``max_length`` characters."""
        limit = self._config.max_length
        if len(message) <= limit:
            return message
        return message[: limit - len(ELLIPSIS)] + ELLIPSIS

    def requires_multiple_parts(self, message: str | None) -> bool:
        return message is not None and len(message) > self._config.max_length

    def calculate_sms_parts(self, message: str | None) -> int:
        if not message:
            return 0
        return math.ceil(len(message) / self._config.max_length)

    def attempt_delivery(self, request: NotificationRequest) -> DeliveryOutcome:
        recipient = request.destination.strip()  # type: ignore[union-attr]
        body = self.truncate(request.message)

        self._sink.emit(self.channel_tag, recipient, body)
        self._clock.sleep(self._config.delay_seconds(request.priority.is_immediate))

        log_ctx = {
            "destination": recipient,
            "provider": self._config.provider,
            "body_preview": body[:50] if body else "(empty)",
        }
        if (
            request.priority == Priority.NORMAL
            and self._rng.random() < self._config.pending_probability
        ):
            logger.info("SMS queued by carrier (stub)", extra=log_ctx)
            return DeliveryOutcome.pending(
                self.channel_tag, recipient, body, timestamp=self._clock.now()
            )

        logger.info("SMS sent (stub)", extra=log_ctx)
        return DeliveryOutcome.sent(
            self.channel_tag, recipient, body, timestamp=self._clock.now()
        )
