"""Tests for the chat channel handler."""

import random

import pytest

from notification_chain.clock import ManualClock
from notification_chain.config import ChatConfig
from notification_chain.enums import DeliveryStatus, Priority
from notification_chain.handlers import ChatHandler, TerminalHandler
from notification_chain.handlers.chat import is_channel
from notification_chain.models import NotificationRequest
from notification_chain.sinks import MemorySink


@pytest.fixture()
def chat(
    terminal: TerminalHandler, sink: MemorySink, clock: ManualClock, chat_config: ChatConfig
) -> ChatHandler:
    return ChatHandler(terminal, chat_config, sink=sink, clock=clock, rng=random.Random(0))


class TestChatAccepts:
    @pytest.mark.parametrize("destination", ["#alerts", "#dev_ops-1", "@validuser", "@first.last"])
    def test_valid(self, chat: ChatHandler, destination: str) -> None:
        assert chat.accepts(NotificationRequest(message="m", destination=destination))

    @pytest.mark.parametrize(
        "destination", ["alerts", "#", "@", "#bad.channel", "#with space", "user@example.com", "+15551234567"]
    )
    def test_invalid(self, chat: ChatHandler, destination: str) -> None:
        assert not chat.accepts(NotificationRequest(message="m", destination=destination))

    def test_is_channel(self) -> None:
        assert is_channel("#alerts")
        assert not is_channel("@someone")


class TestChatFormatting:
    def test_urgent_banner_subject_and_sender(self, chat: ChatHandler) -> None:
        request = NotificationRequest(
            message="Production issue detected!",
            destination="#alerts",
            priority=Priority.URGENT,
            subject="Production Alert",
            sender="DevOps",
        )

        assert chat.format_message(request) == (
            ":rotating_light: *URGENT*\n*Production Alert*\nProduction issue detected!\n_Sent by: DevOps_"
        )

    def test_high_banner(self, chat: ChatHandler) -> None:
        request = NotificationRequest(message="m", destination="#a", priority=Priority.HIGH)
        assert chat.format_message(request) == ":zap: *HIGH PRIORITY*\nm"

    def test_low_marker(self, chat: ChatHandler) -> None:
        request = NotificationRequest(message="m", destination="#a", priority=Priority.LOW)
        assert chat.format_message(request) == ":information_source: m"

    def test_normal_plain(self, chat: ChatHandler) -> None:
        request = NotificationRequest(message="m", destination="@u")
        assert chat.format_message(request) == "m"

    def test_model_default_sender_not_attributed_with_custom_default(
        self, terminal: TerminalHandler
    ) -> None:
        handler = ChatHandler(terminal, ChatConfig(), default_sender="ops-bot")
        request = NotificationRequest(message="m", destination="@u")
        assert handler.format_message(request) == "m"

    def test_default_sender_not_attributed(self, terminal: TerminalHandler) -> None:
        handler = ChatHandler(terminal, ChatConfig(), default_sender="ops-bot")
        request = NotificationRequest(message="m", destination="@u", sender="ops-bot")
        assert handler.format_message(request) == "m"


class TestChatSend:
    def test_formatted_body_in_outcome(self, chat: ChatHandler, sink: MemorySink) -> None:
        request = NotificationRequest(message="Deploy done", destination="#releases", priority=Priority.HIGH)

        outcome = chat.send(request)

        assert outcome.succeeded is True
        assert outcome.status == DeliveryStatus.SENT
        assert outcome.channel_tag == "CHAT"
        assert outcome.message_body == ":zap: *HIGH PRIORITY*\nDeploy done"
        assert sink.for_channel("CHAT")[0].text == outcome.message_body
        assert sink.for_channel("LOG")[0].text.endswith(": Deploy done")

    def test_fixed_latency(self, chat: ChatHandler, clock: ManualClock) -> None:
        chat.send(NotificationRequest(message="m", destination="@u"))
        assert clock.sleeps[0] == pytest.approx(0.075)

    def test_rate_limit_adds_delay(self, terminal: TerminalHandler, clock: ManualClock) -> None:
        handler = ChatHandler(
            terminal,
            ChatConfig(rate_limit_probability=1.0),
            sink=MemorySink(),
            clock=clock,
            rng=random.Random(0),
        )

        outcome = handler.attempt_delivery(NotificationRequest(message="m", destination="@u"))

        assert outcome.status == DeliveryStatus.SENT
        assert clock.sleeps == [pytest.approx(0.075), pytest.approx(0.1)]

    def test_describe_channels(self, chat: ChatHandler) -> None:
        assert chat.describe_channels() == "CHAT + LOG"
