"""World snapshot types and input parsing."""

from milehigh.world.entities import (
    Aircraft,
    Boundary,
    EntityKind,
    Obstacle,
    Runway,
    TickState,
    WaypointDecision,
)

__all__ = [
    "Aircraft",
    "Boundary",
    "EntityKind",
    "Obstacle",
    "Runway",
    "TickState",
    "WaypointDecision",
]
