"""Shared fixtures: deterministic clock, in-memory sink, seeded randomness."""

import random
from collections.abc import Callable

import pytest

from notification_chain.clock import ManualClock
from notification_chain.config import ChatConfig, EmailConfig, SMSConfig
from notification_chain.handlers import (
    ChainBuilder,
    ChannelHandler,
    ChatHandler,
    EmailHandler,
    SMSHandler,
    TerminalHandler,
)
from notification_chain.sinks import MemorySink


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def terminal(sink: MemorySink, clock: ManualClock) -> TerminalHandler:
    return TerminalHandler("TestSystem", sink=sink, clock=clock)


@pytest.fixture()
def sms_config() -> SMSConfig:
    """SMS config that never returns PENDING."""
    return SMSConfig(pending_probability=0.0)


@pytest.fixture()
def chat_config() -> ChatConfig:
    """Chat config that never simulates rate limiting."""
    return ChatConfig(rate_limit_probability=0.0)


@pytest.fixture()
def make_chain(
    sink: MemorySink,
    clock: ManualClock,
    rng: random.Random,
    sms_config: SMSConfig,
    chat_config: ChatConfig,
) -> Callable[..., ChannelHandler]:
    """Factory for the Chat -> SMS -> Email -> Terminal chain."""

    def _make(terminal: ChannelHandler | None = None, parallel: bool = False) -> ChannelHandler:
        inner = terminal or TerminalHandler("TestSystem", sink=sink, clock=clock)
        shared = {"sink": sink, "clock": clock, "parallel": parallel}
        return (
            ChainBuilder(inner)
            .wrap(EmailHandler, config=EmailConfig(), **shared)
            .wrap(SMSHandler, config=sms_config, rng=rng, **shared)
            .wrap(ChatHandler, config=chat_config, rng=rng, **shared)
            .build()
        )

    return _make
