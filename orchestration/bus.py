"""Event bus - EventBusProtocol and InMemoryEventBus for lifecycle events."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from core.infrastructure.logging import get_logger

from .events import Event

EventHandler = Callable[[Event], Awaitable[None]]

WILDCARD_SUFFIX = ".*"


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    async def publish(self, event: Event) -> None:
        """Deliver an event to its subscribers."""
        ...

    def subscribe(self, pattern: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name or a ``prefix.*`` pattern."""
        ...


def matches(pattern: str, event_name: str) -> bool:
    """Check an event name against an exact name or a ``prefix.*`` pattern.

    ``orchestration.step.*`` matches ``orchestration.step.failed`` but not
    ``orchestration.failed``; ``*`` matches everything.
    """
    if pattern == "*":
        return True
    if pattern.endswith(WILDCARD_SUFFIX):
        return event_name.startswith(pattern[: -len(WILDCARD_SUFFIX)] + ".")
    return pattern == event_name


class InMemoryEventBus(EventBusProtocol):
    """In-process event bus.

    Handlers run sequentially in subscription order. A failing handler is
    logged and does not stop the others or reach the publisher.
    """

    def __init__(self) -> None:
        self._subscriptions: list[tuple[str, EventHandler]] = []
        self._logger = get_logger("orchestration.event_bus")

    def subscribe(self, pattern: str, handler: EventHandler) -> None:
        self._subscriptions.append((pattern, handler))

    def unsubscribe(self, pattern: str, handler: EventHandler) -> bool:
        """Remove a subscription.

        Returns:
            True if the subscription existed
        """
        try:
            self._subscriptions.remove((pattern, handler))
        except ValueError:
            return False
        return True

    def handlers_for(self, event_name: str) -> list[EventHandler]:
        return [handler for pattern, handler in self._subscriptions if matches(pattern, event_name)]

    async def publish(self, event: Event) -> None:
        handlers = self.handlers_for(event.name)
        if not handlers:
            return

        self._logger.debug(
            f"{event.name} [{event.metadata.orchestration_id}] -> {len(handlers)} handler(s)"
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as exc:
                self._logger.error(
                    f"Event handler {getattr(handler, '__name__', handler)!r} "
                    f"failed on {event.name}: {exc}",
                    exc_info=True,
                )
