"""Channel handlers and chain composition."""

import random
from typing import Any

from notification_chain.clock import Clock, SystemClock
from notification_chain.config import ChainSettings, ChatConfig, EmailConfig, SMSConfig
from notification_chain.handlers.base import ChannelHandler
from notification_chain.handlers.chat import ChatHandler
from notification_chain.handlers.email import EmailHandler
from notification_chain.handlers.link import ChainLink
from notification_chain.handlers.sms import SMSHandler
from notification_chain.handlers.terminal import TerminalHandler
from notification_chain.sinks import DeliverySink, LoggingSink

__all__ = [
    "ChainBuilder",
    "ChainLink",
    "ChannelHandler",
    "ChatHandler",
    "EmailHandler",
    "SMSHandler",
    "TerminalHandler",
    "create_default_chain",
]


class ChainBuilder:
    """Composes a chain from the innermost handler outwards.

    Usage:
        chain = (
            ChainBuilder(TerminalHandler("Alerts"))
            .wrap(EmailHandler)
            .wrap(SMSHandler, rng=random.Random(7))
            .build()
        )
    """

    def __init__(self, terminal: ChannelHandler) -> None:
        if terminal is None:
            raise ValueError("Chain requires an innermost handler")
        self._head = terminal

    def wrap(self, link_cls: type[ChainLink], **kwargs: Any) -> "ChainBuilder":
        """Wrap the current chain in a new *link_cls* layer."""
        self._head = link_cls(self._head, **kwargs)
        return self

    def build(self) -> ChannelHandler:
        return self._head


def create_default_chain(
    settings: ChainSettings | None = None,
    *,
    sink: DeliverySink | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> ChannelHandler:
    """Create the full Chat -> SMS -> Email -> Terminal chain."""
    settings = settings or ChainSettings()
    sink = sink or LoggingSink()
    clock = clock or SystemClock()
    rng = rng or random.Random(settings.random_seed)
    shared = {"sink": sink, "clock": clock, "parallel": settings.parallel_delegation}

    return (
        ChainBuilder(
            TerminalHandler(
                settings.system_name,
                sink=sink,
                clock=clock,
                latency_ms=settings.terminal_latency_ms,
            )
        )
        .wrap(EmailHandler, config=EmailConfig(), **shared)
        .wrap(SMSHandler, config=SMSConfig(), rng=rng, **shared)
        .wrap(
            ChatHandler,
            config=ChatConfig(),
            default_sender=settings.default_sender,
            rng=rng,
            **shared,
        )
        .build()
    )
