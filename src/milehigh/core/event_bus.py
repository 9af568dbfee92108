"""Synchronous event bus for planner diagnostics.

The planner publishes what it decided on each tick (predicted collisions,
landing clearances, touchdowns). Log sinks, dashboards or tests subscribe
to the event types they care about. Dispatch is immediate and in priority
order; there is no queue and no thread.

Typical usage example:
    from milehigh.core.event_bus import EventBus, EventPriority
    from milehigh.planning.events import AircraftLandedEvent

    bus = EventBus()
    bus.subscribe(AircraftLandedEvent, on_landed, EventPriority.HIGH)
    planner = Planner(event_bus=bus)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventPriority(Enum):
    """Order in which handlers of one event type run.

    CRITICAL handlers run first, LOW handlers last.
    """

    CRITICAL = auto()
    HIGH = auto()
    NORMAL = auto()
    LOW = auto()


@dataclass
class Event:
    """Base class for all events.

    Attributes:
        timestamp: Wall-clock time the event was created. Informational
            only, planning never reads it.
    """

    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Any], None]


class EventBus:
    """Publish/subscribe hub keyed by event class.

    Examples:
        >>> bus = EventBus()
        >>> landed = []
        >>> bus.subscribe(AircraftLandedEvent, landed.append)
        >>> bus.publish(AircraftLandedEvent(aircraft_id="AC1", landed_count=1))
        >>> landed[0].aircraft_id
        'AC1'
    """

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: dict[type[Event], list[tuple[Handler, EventPriority]]] = {}

    def subscribe(
        self,
        event_type: type[Event],
        handler: Handler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> None:
        """Register a handler for an event type.

        Args:
            event_type: Event class to listen for. Subclasses are not matched.
            handler: Callable receiving the event.
            priority: Position among the handlers of this event type.
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append((handler, priority))
        # Stable sort keeps subscription order within a priority.
        handlers.sort(key=lambda entry: entry[1].value)

    def publish(self, event: Event) -> None:
        """Deliver an event to every handler of its exact type.

        Handler exceptions propagate to the publisher.
        """
        for handler, _ in list(self._handlers.get(type(event), [])):
            handler(event)

