"""Evasive waypoints for aircraft on a predicted collision course."""

from milehigh.physics.geometry import Point, project
from milehigh.world.entities import Aircraft


def avoidance_heading(rotation: float, turn_deg: float = 90.0) -> float:
    """Heading after a right-hand break turn.

    Turns by ``-turn_deg`` and wraps back above -180 degrees.

    Examples:
        >>> avoidance_heading(0.0)
        -90.0
        >>> avoidance_heading(-120.0)
        150.0
    """
    heading = rotation - turn_deg
    if heading <= -180.0:
        heading += 360.0
    return heading


def avoidance_waypoint(aircraft: Aircraft, turn_deg: float = 90.0, dt: float = 1.0) -> Point:
    """Short waypoint perpendicular-right of the aircraft's heading.

    Args:
        aircraft: Aircraft that has to evade.
        turn_deg: Size of the break turn in degrees.
        dt: Time units flown at turn speed along the new heading.

    Returns:
        Evasive waypoint.
    """
    heading = avoidance_heading(aircraft.rotation, turn_deg)
    return project(aircraft.position, heading, aircraft.turn_speed, dt)
