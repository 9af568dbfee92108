"""Entities making up one simulation tick.

The movement integrator owns the world and hands the planner a fresh
snapshot every tick. Entities arrive as category-tagged objects and are
narrowed once, at the boundary, into the types defined here.

Typical usage example:
    from milehigh.world.entities import Aircraft, Runway, TickState

    state = TickState(aircraft=[plane], obstacles=[], runway=Runway(Point(100, 50)),
                      boundary=Boundary(Point(0, 0), Point(800, 600)))
    state.validate()
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from milehigh.errors import ValidationError
from milehigh.physics.geometry import Point


class EntityKind(Enum):
    """Category tag carried by every simulation object."""

    AIRCRAFT = "plane"
    OBSTACLE = "obstacle"


@dataclass
class Aircraft:
    """Simulated aircraft.

    Attributes:
        id: Identifier, unique within a tick.
        position: Current position.
        rotation: Heading in degrees, within (-180, 180].
        speed: Distance covered per tick.
        turn_speed: Distance used when shaping turns and evasive moves.
        collision_radius: Radius of the aircraft's protected area (> 0).
        fuel: Remaining fuel, reported by the simulation.
        score: Score value of the aircraft.
        category: Entity category tag.
    """

    id: str | int
    position: Point
    rotation: float
    speed: float
    turn_speed: float
    collision_radius: float
    fuel: float = 0.0
    score: float = 0.0
    category: EntityKind = EntityKind.AIRCRAFT

    @staticmethod
    def validate_id(aircraft_id: object) -> None:
        """Raise ValidationError unless the id is a string or an integer."""
        if isinstance(aircraft_id, bool) or not isinstance(aircraft_id, (str, int)):
            raise ValidationError(
                f"aircraft: field 'id' must be a string or integer, got {aircraft_id!r}"
            )

    def validate(self) -> None:
        """Check the id and the numeric invariants of the aircraft.

        Raises:
            ValidationError: If the id is not a string or integer, a value is
                non-finite, the rotation lies outside (-180, 180] or the
                collision radius is not positive.
        """
        self.validate_id(self.id)

        for name, value in (
            ("position.x", self.position.x),
            ("position.y", self.position.y),
            ("rotation", self.rotation),
            ("speed", self.speed),
            ("turn_speed", self.turn_speed),
            ("collision_radius", self.collision_radius),
            ("fuel", self.fuel),
            ("score", self.score),
        ):
            if not math.isfinite(value):
                raise ValidationError(f"aircraft {self.id!r}: {name} is not finite ({value!r})")

        if not -180.0 < self.rotation <= 180.0:
            raise ValidationError(
                f"aircraft {self.id!r}: rotation must be within (-180, 180] "
                f"(got {self.rotation!r})"
            )

        if self.collision_radius <= 0:
            raise ValidationError(
                f"aircraft {self.id!r}: collision_radius must be positive "
                f"(got {self.collision_radius!r})"
            )


@dataclass(frozen=True)
class Boundary:
    """Axis-aligned rectangle given by its minimum and maximum corners."""

    min: Point
    max: Point

    def validate(self, owner: str = "boundary") -> None:
        """Check that both corners are finite and ordered.

        Raises:
            ValidationError: If a coordinate is non-finite or min > max.
        """
        for name, value in (
            ("min.x", self.min.x),
            ("min.y", self.min.y),
            ("max.x", self.max.x),
            ("max.y", self.max.y),
        ):
            if not math.isfinite(value):
                raise ValidationError(f"{owner}: {name} is not finite ({value!r})")

        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValidationError(f"{owner}: min corner {self.min} exceeds max corner {self.max}")

    def to_dict(self) -> dict:
        """JSON-friendly representation."""
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}


@dataclass(frozen=True)
class Obstacle:
    """Static no-fly region, immutable for the whole simulation."""

    boundary: Boundary
    category: EntityKind = EntityKind.OBSTACLE


@dataclass(frozen=True)
class Runway:
    """Landing target.

    Attributes:
        position: Touchdown point.
        heading: Forward heading in degrees used for landing alignment.
    """

    position: Point
    heading: float = 0.0

    def validate(self) -> None:
        """Raise ValidationError if any coordinate is non-finite."""
        for name, value in (
            ("position.x", self.position.x),
            ("position.y", self.position.y),
            ("heading", self.heading),
        ):
            if not math.isfinite(value):
                raise ValidationError(f"runway: {name} is not finite ({value!r})")


@dataclass
class TickState:
    """Snapshot of the world handed to the planner once per tick.

    Attributes:
        aircraft: Aircraft in input order.
        obstacles: Static obstacles.
        runway: Landing target.
        boundary: Playable-area extent.
    """

    aircraft: list[Aircraft]
    runway: Runway
    boundary: Boundary
    obstacles: list[Obstacle] = field(default_factory=list)

    @property
    def top_area_height(self) -> float:
        """Height of the area between the top edge and the runway."""
        return self.runway.position.y - self.boundary.min.y

    def validate(self) -> None:
        """Validate every entity and the uniqueness of aircraft ids.

        Raises:
            ValidationError: On the first malformed entity found.
        """
        self.runway.validate()
        self.boundary.validate()

        seen: set[str | int] = set()
        for plane in self.aircraft:
            plane.validate()
            if plane.id in seen:
                raise ValidationError(f"duplicate aircraft id {plane.id!r}")
            seen.add(plane.id)

        for index, obstacle in enumerate(self.obstacles):
            obstacle.boundary.validate(owner=f"obstacle[{index}]")


@dataclass(frozen=True)
class WaypointDecision:
    """Navigation target chosen for one aircraft on one tick."""

    aircraft_id: str | int
    waypoint: Point

    def to_dict(self) -> dict:
        """Wire representation consumed by the movement integrator."""
        return {"plane_id": self.aircraft_id, "waypoint": self.waypoint.to_dict()}
