"""ChainLink: decorator base for every concrete channel handler."""

import logging
from abc import abstractmethod
from concurrent.futures import ThreadPoolExecutor

from notification_chain.clock import Clock, SystemClock
from notification_chain.handlers.base import ChannelHandler
from notification_chain.models import DeliveryOutcome, NotificationRequest
from notification_chain.sinks import DeliverySink, LoggingSink

logger = logging.getLogger(__name__)


class ChainLink(ChannelHandler):
    """Wraps one inner handler and runs validate, attempt, delegate, reconcile.

    Every capable layer attempts its own delivery *and* delegates the
    same request inward. The outcome returned to the caller is this
    layer's outcome if it succeeded, otherwise the inner one. A
    successful inner delivery can therefore mask a failed outer one, but
    a failed inner delivery never masks a successful outer one: best
    result wins, outermost preferred.

    With ``parallel=True`` the inner delegation runs on a worker thread
    while this layer attempts delivery. Both are joined before
    reconciliation, so the result does not depend on scheduling.
    """

    def __init__(
        self,
        inner: ChannelHandler,
        *,
        sink: DeliverySink | None = None,
        clock: Clock | None = None,
        parallel: bool = False,
    ) -> None:
        if inner is None:
            raise ValueError("Wrapped handler cannot be None")
        if not isinstance(inner, ChannelHandler):
            raise TypeError(
                f"Wrapped handler must be a ChannelHandler, got {type(inner).__name__}"
            )
        self._inner = inner
        self._sink = sink or LoggingSink()
        self._clock = clock or SystemClock()
        self._parallel = parallel

    @property
    def inner(self) -> ChannelHandler:
        return self._inner

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable channel name used in error details."""

    @abstractmethod
    def accepts(self, request: NotificationRequest) -> bool:
        """Channel-specific address check for this layer only."""

    @abstractmethod
    def attempt_delivery(self, request: NotificationRequest) -> DeliveryOutcome:
        """Perform this layer's delivery. May raise; ``send`` contains it."""

    def send(self, request: NotificationRequest) -> DeliveryOutcome:
        log_ctx = {"channel": self.channel_tag, "destination": request.destination}

        if not self.accepts(request):
            logger.info("Destination not accepted, delegating", extra=log_ctx)
            return self._inner.send(request)

        if self._parallel:
            with ThreadPoolExecutor(max_workers=1) as pool:
                inner_future = pool.submit(self._inner.send, request)
                outcome_here = self._attempt(request)
                outcome_inner = inner_future.result()
        else:
            outcome_here = self._attempt(request)
            outcome_inner = self._inner.send(request)

        if outcome_here.succeeded:
            return outcome_here

        logger.info(
            "Layer did not succeed, returning inner outcome",
            extra={
                **log_ctx,
                "status": outcome_here.status,
                "inner_channel": outcome_inner.channel_tag,
            },
        )
        return outcome_inner

    def _attempt(self, request: NotificationRequest) -> DeliveryOutcome:
        try:
            return self.attempt_delivery(request)
        except Exception as exc:
            logger.exception(
                "Delivery attempt error",
                extra={"channel": self.channel_tag, "destination": request.destination},
            )
            return DeliveryOutcome.failure(
                self.channel_tag,
                request.message,
                f"{self.display_name} notification failed: {exc}",
                destination=request.destination,
                timestamp=self._clock.now(),
            )

    def can_handle(self, request: NotificationRequest) -> bool:
        return self.accepts(request) or self._inner.can_handle(request)

    def describe_channels(self) -> str:
        return f"{self.channel_tag} + {self._inner.describe_channels()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(wrapping={self._inner!r})"
