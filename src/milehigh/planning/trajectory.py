"""Approach trajectories toward the runway.

Aircraft already in the approach half-plane fly straight to the runway.
Everyone else follows a cubic Bezier curve that bends from the current
heading toward a landing anchor beside the runway. Only a point close to
the start of the curve is handed out, so the aircraft turns gradually and
the curve is recomputed every tick.
"""

import math

import numpy as np
import numpy.typing as npt

from milehigh.physics.geometry import Point, project
from milehigh.planning.landing import LandingScheduler
from milehigh.world.entities import Aircraft, Runway


def bezier_point(control_points: list[Point], t: float) -> Point:
    """Evaluate a Bezier curve in Bernstein form.

    Args:
        control_points: Control polygon, first and last points are the
            curve's end points.
        t: Curve parameter in [0, 1].

    Returns:
        Point on the curve.

    Examples:
        >>> bezier_point([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)], 0.5)
        Point(x=5.0, y=7.5)
    """
    degree = len(control_points) - 1
    polygon: npt.NDArray[np.float64] = np.array(
        [point.to_array() for point in control_points], dtype=np.float64
    )
    weights = np.array(
        [math.comb(degree, i) * (1 - t) ** (degree - i) * t**i for i in range(degree + 1)],
        dtype=np.float64,
    )
    return Point.from_array(weights @ polygon)


class TrajectoryPlanner:
    """Builds approach waypoints for aircraft that are not yet landing.

    Examples:
        >>> planner = TrajectoryPlanner()
        >>> waypoint = planner.plan(aircraft, runway, state.top_area_height)
    """

    def __init__(
        self,
        curve_t: float = 0.2,
        anchor_heading_deg: float = 30.0,
        control_point_time: float = 3.0,
    ) -> None:
        """Initialize the planner.

        Args:
            curve_t: Curve parameter of the handed-out waypoint.
            anchor_heading_deg: Heading offset at the landing anchor.
            control_point_time: Time units flown at turn speed to place the
                inner control points.
        """
        self.curve_t = curve_t
        self.anchor_heading_deg = anchor_heading_deg
        self.control_point_time = control_point_time

    @staticmethod
    def direct_approach_possible(aircraft: Aircraft, runway: Runway) -> bool:
        """Check whether the aircraft may fly straight to the runway."""
        return LandingScheduler.is_eligible(aircraft, runway)

    @staticmethod
    def landing_anchor(aircraft: Aircraft, runway: Runway, top_area_height: float) -> Point:
        """Far end point of the approach curve.

        Sits half the top-area height before the runway, on the right for
        aircraft with a negative rotation and on the left otherwise.
        """
        offset = top_area_height / 2.0
        side = 1.0 if aircraft.rotation < 0 else -1.0
        return Point(runway.position.x + side * offset, runway.position.y - offset)

    def anchor_heading(self, aircraft: Aircraft) -> float:
        """Heading the aircraft should have when passing the anchor."""
        return self.anchor_heading_deg if aircraft.rotation < 0 else -self.anchor_heading_deg

    def control_polygon(
        self, aircraft: Aircraft, runway: Runway, top_area_height: float
    ) -> list[Point]:
        """Cubic control polygon from the aircraft to the landing anchor."""
        anchor = self.landing_anchor(aircraft, runway, top_area_height)
        heading = self.anchor_heading(aircraft)
        reversed_heading = heading - 180.0 if heading > 0 else heading + 180.0

        return [
            aircraft.position,
            project(
                aircraft.position, aircraft.rotation, aircraft.turn_speed, self.control_point_time
            ),
            project(anchor, reversed_heading, aircraft.turn_speed, self.control_point_time),
            anchor,
        ]

    def turn_in_waypoint(self, aircraft: Aircraft, runway: Runway, top_area_height: float) -> Point:
        """Lookahead point on the approach curve."""
        return bezier_point(self.control_polygon(aircraft, runway, top_area_height), self.curve_t)

    def plan(self, aircraft: Aircraft, runway: Runway, top_area_height: float) -> Point:
        """Waypoint for an aircraft that is neither evading nor landing.

        Args:
            aircraft: Aircraft to plan for.
            runway: Landing target.
            top_area_height: Distance between the top edge of the playable
                area and the runway.

        Returns:
            The runway position on final approach, otherwise a point on the
            turn-in curve.
        """
        if self.direct_approach_possible(aircraft, runway):
            return runway.position
        return self.turn_in_waypoint(aircraft, runway, top_area_height)
