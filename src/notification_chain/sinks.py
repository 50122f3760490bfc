"""Delivery sinks: where simulated channel transmissions end up."""

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SinkRecord:
    channel_tag: str
    destination: str
    text: str


class DeliverySink(Protocol):
    def emit(self, channel_tag: str, destination: str, text: str) -> None:
        """Record one simulated transmission."""
        ...


class LoggingSink:
    """Default sink that writes each transmission as a structured log record.

    Ready for replacement by real SMTP/SMS/chat clients: swap the sink,
    the handlers stay the same.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def emit(self, channel_tag: str, destination: str, text: str) -> None:
        self._logger.info(
            "Notification dispatched (stub)",
            extra={
                "channel": channel_tag,
                "destination": destination,
                "body_preview": text[:50] if text else "(empty)",
            },
        )


class MemorySink:
    """Sink that keeps every transmission in memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.records: list[SinkRecord] = []

    def emit(self, channel_tag: str, destination: str, text: str) -> None:
        with self._lock:
            self.records.append(SinkRecord(channel_tag, destination, text))

    def for_channel(self, channel_tag: str) -> list[SinkRecord]:
        return [r for r in self.records if r.channel_tag == channel_tag]

    @property
    def channel_tags(self) -> list[str]:
        return [r.channel_tag for r in self.records]
