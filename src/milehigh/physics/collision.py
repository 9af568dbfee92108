"""Short-horizon collision prediction.

Each aircraft is projected a couple of ticks ahead along its current
heading and wrapped in a square box. Overlapping boxes between two
aircraft, or between an aircraft and an obstacle's boundary, are reported
as collision records.

Typical usage:
    from milehigh.physics.collision import CollisionDetector

    detector = CollisionDetector()
    for record in detector.find_collisions(state.aircraft, state.obstacles):
        print(record.kind, record.aircraft.id)
"""

import logging
from dataclasses import dataclass
from enum import Enum

from milehigh.physics.geometry import Point, project
from milehigh.world.entities import Aircraft, Boundary, Obstacle

logger = logging.getLogger(__name__)


class CollisionKind(Enum):
    """What an aircraft is predicted to collide with."""

    AIRCRAFT = "aircraft"  # Another aircraft
    OBSTACLE = "obstacle"  # Static obstacle boundary


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box.

    Attributes:
        min_x: Left edge.
        min_y: Lower edge.
        max_x: Right edge.
        max_y: Upper edge.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def centered(cls, center: Point, side: float) -> "BoundingBox":
        """Create a square box of the given side around a point."""
        half = side / 2.0
        return cls(center.x - half, center.y - half, center.x + half, center.y + half)

    @classmethod
    def from_boundary(cls, boundary: Boundary) -> "BoundingBox":
        """Create a box covering an obstacle or area boundary."""
        return cls(boundary.min.x, boundary.min.y, boundary.max.x, boundary.max.y)

    def intersects(self, other: "BoundingBox") -> bool:
        """Check for overlap with another box.

        Boxes that only touch along an edge do not intersect.

        Examples:
            >>> a = BoundingBox(0, 0, 10, 10)
            >>> a.intersects(BoundingBox(5, 5, 15, 15))
            True
            >>> a.intersects(BoundingBox(10, 0, 20, 10))
            False
        """
        return (
            self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )


@dataclass(frozen=True)
class CollisionRecord:
    """Predicted collision between an aircraft and another entity.

    Both kinds of collision share this shape: ``aircraft`` is always the
    first participant, ``other`` is either a second Aircraft or an Obstacle.

    Attributes:
        kind: Kind of collision.
        aircraft: First aircraft involved.
        other: Second aircraft or the obstacle.
    """

    kind: CollisionKind
    aircraft: Aircraft
    other: Aircraft | Obstacle

    @property
    def aircraft_ids(self) -> tuple:
        """Ids of every aircraft taking part in the collision."""
        if isinstance(self.other, Aircraft):
            return (self.aircraft.id, self.other.id)
        return (self.aircraft.id,)

    def to_dict(self) -> dict:
        """Pair-shaped representation for diagnostics output.

        ``other`` is the second aircraft id, or the obstacle boundary.

        Examples:
            >>> record.to_dict()
            {'kind': 'aircraft', 'aircraft': 'A', 'other': 'B'}
        """
        if isinstance(self.other, Aircraft):
            other = self.other.id
        else:
            other = self.other.boundary.to_dict()
        return {"kind": self.kind.value, "aircraft": self.aircraft.id, "other": other}

    def __str__(self) -> str:
        if isinstance(self.other, Aircraft):
            return f"{self.aircraft.id} <-> {self.other.id}"
        return f"{self.aircraft.id} <-> obstacle {self.other.boundary}"


class CollisionDetector:
    """Predicts collisions a fixed number of ticks ahead.

    Work is quadratic in the number of aircraft, which is fine for the
    tens of aircraft a game holds.

    Examples:
        >>> detector = CollisionDetector(prediction_time=2.0, box_scale=3.0)
        >>> records = detector.find_collisions(aircraft, obstacles)
    """

    def __init__(self, prediction_time: float = 2.0, box_scale: float = 3.0) -> None:
        """Initialize the detector.

        Args:
            prediction_time: Ticks to project each aircraft forward.
            box_scale: Box side length as a multiple of the collision radius.
        """
        self.prediction_time = prediction_time
        self.box_scale = box_scale

    def predict_position(self, aircraft: Aircraft) -> Point:
        """Project an aircraft along its heading by the prediction horizon."""
        return project(aircraft.position, aircraft.rotation, aircraft.speed, self.prediction_time)

    def predicted_box(self, aircraft: Aircraft) -> BoundingBox:
        """Box around the aircraft's predicted position."""
        return BoundingBox.centered(
            self.predict_position(aircraft), self.box_scale * aircraft.collision_radius
        )

    def find_collisions(
        self, aircraft: list[Aircraft], obstacles: list[Obstacle] | None = None
    ) -> list[CollisionRecord]:
        """Report predicted collisions.

        Args:
            aircraft: Aircraft in tick order.
            obstacles: Static obstacles.

        Returns:
            Deduplicated collision records, aircraft pairs first in input
            order, then aircraft/obstacle pairs.
        """
        obstacles = obstacles or []
        boxes = [self.predicted_box(plane) for plane in aircraft]
        obstacle_boxes = [BoundingBox.from_boundary(obstacle.boundary) for obstacle in obstacles]

        records: list[CollisionRecord] = []
        seen: set[tuple] = set()

        for i, first in enumerate(aircraft):
            for j in range(i + 1, len(aircraft)):
                second = aircraft[j]
                key = (CollisionKind.AIRCRAFT, frozenset((first.id, second.id)))
                if key in seen or not boxes[i].intersects(boxes[j]):
                    continue
                seen.add(key)
                records.append(CollisionRecord(CollisionKind.AIRCRAFT, first, second))

        for i, plane in enumerate(aircraft):
            for j, obstacle in enumerate(obstacles):
                key = (CollisionKind.OBSTACLE, plane.id, j)
                if key in seen or not boxes[i].intersects(obstacle_boxes[j]):
                    continue
                seen.add(key)
                records.append(CollisionRecord(CollisionKind.OBSTACLE, plane, obstacle))

        for record in records:
            logger.debug("Predicted %s collision: %s", record.kind.value, record)

        return records
