"""Plane geometry used by the traffic planner.

Headings follow the simulation convention: 0 degrees points "up" the
screen (+y), positive rotation turns toward -x. Rotations are kept in
the half-open range (-180, 180].

Typical usage example:
    from milehigh.physics.geometry import Point, distance, project

    origin = Point(100.0, 100.0)
    ahead = project(origin, heading_deg=0.0, speed=10.0, dt=2.0)
    distance(origin, ahead)  # 20.0
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Point:
    """Point in the simulation plane.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.

    Examples:
        >>> Point(1.0, 2.0) + Point(3.0, 4.0)
        Point(x=4.0, y=6.0)
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return distance(self, other)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Convert to numpy array [x, y]."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: npt.NDArray[np.float64]) -> "Point":
        """Create point from the first two elements of a numpy array."""
        return cls(float(arr[0]), float(arr[1]))

    def to_dict(self) -> dict[str, float]:
        """Wire representation used by the simulation server."""
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return f"Point(x={self.x:.2f}, y={self.y:.2f})"


def project(origin: Point, heading_deg: float, speed: float, dt: float) -> Point:
    """Move a point along a heading.

    Travels ``speed * dt`` units from ``origin``. Heading 0 moves along +y,
    so ``x' = x - d*sin(theta)`` and ``y' = y + d*cos(theta)``.

    Args:
        origin: Starting point.
        heading_deg: Heading in degrees.
        speed: Distance covered per time unit.
        dt: Number of time units.

    Returns:
        Projected point.

    Examples:
        >>> project(Point(0.0, 0.0), 0.0, 10.0, 2.0)
        Point(x=0.0, y=20.0)
    """
    travelled = speed * dt
    radians = math.radians(heading_deg)
    return Point(
        origin.x - travelled * math.sin(radians),
        origin.y + travelled * math.cos(radians),
    )


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points.

    Examples:
        >>> distance(Point(0.0, 0.0), Point(3.0, 4.0))
        5.0
    """
    return math.hypot(a.x - b.x, a.y - b.y)


def normalize_heading(heading_deg: float) -> float:
    """Wrap a heading into (-180, 180].

    Examples:
        >>> normalize_heading(-190.0)
        170.0
        >>> normalize_heading(-180.0)
        180.0
    """
    wrapped = math.fmod(heading_deg, 360.0)
    if wrapped <= -180.0:
        wrapped += 360.0
    elif wrapped > 180.0:
        wrapped -= 360.0
    return wrapped
