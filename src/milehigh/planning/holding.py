"""Holding circles around the runway.

Every aircraft gets its own circle, centered on the runway, with a
radius it covers in a fixed number of ticks. When two aircraft would
share a radius, the later one is pushed outward by its collision radius
until its circle is free. Radius and circle points are cached per
aircraft id in the planner session.
"""

import logging
import math

import numpy as np

from milehigh.physics.geometry import Point, distance
from milehigh.planning.session import PlannerSession
from milehigh.world.entities import Aircraft, Runway

logger = logging.getLogger(__name__)


def circle_radius(
    session: PlannerSession, aircraft: Aircraft, lap_ticks: float = 50.0
) -> float:
    """Holding radius for an aircraft, cached in the session.

    The base radius is ``speed * lap_ticks / (2*pi)``. Radii already held
    by other aircraft are skipped by adding the aircraft's collision radius.
    """
    if aircraft.id in session.radius_cache:
        return session.radius_cache[aircraft.id]

    taken = [r for other_id, r in session.radius_cache.items() if other_id != aircraft.id]
    radius = aircraft.speed * lap_ticks / (2 * math.pi)
    while any(math.isclose(radius, r) for r in taken):
        radius += aircraft.collision_radius

    session.radius_cache[aircraft.id] = radius
    return radius


def circle_points(center: Point, radius: float, count: int = 32) -> list[Point]:
    """Evenly spaced points on a circle, counter-clockwise from +x."""
    angles = np.arange(count) * (2 * np.pi / count)
    xs = center.x + radius * np.cos(angles)
    ys = center.y + radius * np.sin(angles)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def next_circle_point(
    session: PlannerSession,
    aircraft: Aircraft,
    runway: Runway,
    point_count: int = 32,
    lap_ticks: float = 50.0,
    advance_distance: float = 10.0,
) -> Point:
    """Next holding waypoint for an aircraft.

    Picks the circle point nearest to the aircraft, or the one after it
    when the aircraft is already within ``advance_distance`` of it.

    Args:
        session: Session caching radius and circle points.
        aircraft: Holding aircraft.
        runway: Circle center.
        point_count: Points per circle.
        lap_ticks: Ticks needed for one lap at the aircraft's speed.
        advance_distance: Distance under which a point counts as reached.

    Returns:
        Holding waypoint.
    """
    points = session.circle_cache.get(aircraft.id)
    if points is None:
        radius = circle_radius(session, aircraft, lap_ticks)
        points = circle_points(runway.position, radius, point_count)
        session.circle_cache[aircraft.id] = points
        logger.debug("Holding circle for %s: radius %.1f", aircraft.id, radius)

    distances = [distance(aircraft.position, point) for point in points]
    index = int(np.argmin(distances))
    if distances[index] < advance_distance:
        index = (index + 1) % len(points)
    return points[index]
