"""Chat channel handler (simulated Slack-style workspace)."""

import logging
import random
import re

from notification_chain.clock import Clock
from notification_chain.config import ChatConfig
from notification_chain.enums import ChannelTag, Priority
from notification_chain.handlers.base import ChannelHandler
from notification_chain.handlers.link import ChainLink
from notification_chain.models import DEFAULT_SENDER, DeliveryOutcome, NotificationRequest
from notification_chain.sinks import DeliverySink

logger = logging.getLogger(__name__)

CHAT_USER_PATTERN = re.compile(r"^@[a-zA-Z0-9._-]+$")
CHAT_CHANNEL_PATTERN = re.compile(r"^#[a-zA-Z0-9_-]+$")

_PRIORITY_BANNERS: dict[str, str] = {
    Priority.URGENT: ":rotating_light: *URGENT*\n",
    Priority.HIGH: ":zap: *HIGH PRIORITY*\n",
    Priority.LOW: ":information_source: ",
}


def is_channel(destination: str) -> bool:
    return destination.startswith("#")


class ChatHandler(ChainLink):
    """Posts to ``#channel`` or ``@user`` destinations, then delegates inward."""

    def __init__(
        self,
        inner: ChannelHandler,
        config: ChatConfig | None = None,
        *,
        default_sender: str = DEFAULT_SENDER,
        sink: DeliverySink | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        parallel: bool = False,
    ) -> None:
        super().__init__(inner, sink=sink, clock=clock, parallel=parallel)
        self._config = config or ChatConfig()
        self._default_sender = default_sender
        self._rng = rng or random.Random()

    @property
    def channel_tag(self) -> str:
        return ChannelTag.CHAT

    @property
    def display_name(self) -> str:
        return "Chat"

    @property
    def config(self) -> ChatConfig:
        return self._config

    def accepts(self, request: NotificationRequest) -> bool:
        if not request.has_destination:
            return False
        destination = request.destination.strip()  # type: ignore[union-attr]
        return bool(
            CHAT_USER_PATTERN.match(destination) or CHAT_CHANNEL_PATTERN.match(destination)
        )

    def format_message(self, request: NotificationRequest) -> str:
        """Apply chat markup: priority banner, bold subject, sender attribution."""
        parts = [_PRIORITY_BANNERS.get(request.priority, "")]
        if request.subject:
            parts.append(f"*{request.subject}*\n")
        parts.append(request.message)
        if request.sender and request.sender not in (DEFAULT_SENDER, self._default_sender):
            parts.append(f"\n_Sent by: {request.sender}_")
        return "".join(parts)

    def attempt_delivery(self, request: NotificationRequest) -> DeliveryOutcome:
        recipient = request.destination.strip()  # type: ignore[union-attr]
        body = self.format_message(request)

        self._sink.emit(self.channel_tag, recipient, body)
        self._clock.sleep(self._config.delay_ms / 1000)
        if self._rng.random() < self._config.rate_limit_probability:
            logger.info("Chat API rate limited, backing off", extra={"destination": recipient})
            self._clock.sleep(self._config.rate_limit_delay_ms / 1000)

        logger.info(
            "Chat message sent (stub)",
            extra={
                "destination": recipient,
                "message_type": "channel" if is_channel(recipient) else "direct",
                "bot_name": self._config.bot_name,
            },
        )
        return DeliveryOutcome.sent(
            self.channel_tag, recipient, body, timestamp=self._clock.now()
        )
