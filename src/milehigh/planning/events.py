"""Diagnostic events published by the planner.

Subscribe on an EventBus to feed a log sink or a dashboard:

    bus.subscribe(AircraftLandedEvent, lambda event: print(event.landed_count))
"""

from dataclasses import dataclass, field

from milehigh.core.event_bus import Event
from milehigh.physics.collision import CollisionRecord


@dataclass
class CollisionsDetectedEvent(Event):
    """Collisions predicted on a tick (only published when there are some)."""

    tick: int = 0
    collisions: list[CollisionRecord] = field(default_factory=list)


@dataclass
class LanderSelectedEvent(Event):
    """Aircraft cleared to land on a tick."""

    tick: int = 0
    aircraft_id: str | int | None = None


@dataclass
class LanderReleasedEvent(Event):
    """The assigned lander vanished and its clearance was dropped."""

    tick: int = 0
    aircraft_id: str | int | None = None


@dataclass
class AircraftLandedEvent(Event):
    """Touchdown of the assigned lander."""

    tick: int = 0
    aircraft_id: str | int | None = None
    landed_count: int = 0
