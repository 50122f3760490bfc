"""Email channel handler (simulated SMTP)."""

import logging
import re

from notification_chain.clock import Clock
from notification_chain.config import EmailConfig
from notification_chain.enums import ChannelTag
from notification_chain.handlers.base import ChannelHandler
from notification_chain.handlers.link import ChainLink
from notification_chain.models import DeliveryOutcome, NotificationRequest
from notification_chain.renderer import render_template
from notification_chain.sinks import DeliverySink

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")


class EmailHandler(ChainLink):
    """Sends to email-shaped destinations, then delegates inward.

    The rendered transcript (envelope plus body) goes to the sink; the
    outcome carries the original message as its body.
    """

    def __init__(
        self,
        inner: ChannelHandler,
        config: EmailConfig | None = None,
        *,
        sink: DeliverySink | None = None,
        clock: Clock | None = None,
        parallel: bool = False,
    ) -> None:
        super().__init__(inner, sink=sink, clock=clock, parallel=parallel)
        self._config = config or EmailConfig()

    @property
    def channel_tag(self) -> str:
        return ChannelTag.EMAIL

    @property
    def display_name(self) -> str:
        return "Email"

    @property
    def config(self) -> EmailConfig:
        return self._config

    def accepts(self, request: NotificationRequest) -> bool:
        if not request.has_destination:
            return False
        return EMAIL_PATTERN.match(request.destination.strip()) is not None  # type: ignore[union-attr]

    def attempt_delivery(self, request: NotificationRequest) -> DeliveryOutcome:
        recipient = request.destination.strip()  # type: ignore[union-attr]
        subject = request.subject or self._config.default_subject

        transcript = render_template(
            self._config.transcript_template,
            {
                "server": self._config.smtp_server,
                "port": self._config.port,
                "sender": self._config.sender_email,
                "recipient": recipient,
                "subject": subject,
                "priority": request.priority.description,
                "body": request.message,
            },
        )
        self._sink.emit(self.channel_tag, recipient, transcript)
        self._clock.sleep(self._config.delay_seconds(request.priority.is_immediate))

        logger.info(
            "Email sent (stub)",
            extra={"destination": recipient, "subject": subject, "priority": request.priority},
        )
        return DeliveryOutcome.sent(
            self.channel_tag,
            recipient,
            request.message,
            timestamp=self._clock.now(),
        )
