"""Landing sequencing.

Only one aircraft at a time is cleared to head straight for the runway.
The clearance is sticky: it holds across ticks until the aircraft lands
or disappears from the simulation, even if another aircraft later gets
closer to the runway.
"""

import logging

from milehigh.physics.geometry import distance, normalize_heading
from milehigh.planning.session import PlannerSession
from milehigh.world.entities import Aircraft, Runway

logger = logging.getLogger(__name__)


class LandingScheduler:
    """Chooses and tracks the aircraft cleared to land.

    Examples:
        >>> scheduler = LandingScheduler()
        >>> lander = scheduler.select_next_lander(session, state.aircraft, state.runway)
        >>> if lander and scheduler.has_landed(lander, state.runway):
        ...     scheduler.record_landing(session, lander)
    """

    def __init__(self, landing_distance: float = 5.0, alignment_deg: float = 87.0) -> None:
        """Initialize the scheduler.

        Args:
            landing_distance: Touchdown happens strictly inside this distance.
            alignment_deg: Largest heading deviation from the runway heading
                that still counts as aligned.
        """
        self.landing_distance = landing_distance
        self.alignment_deg = alignment_deg

    @staticmethod
    def is_eligible(aircraft: Aircraft, runway: Runway) -> bool:
        """Check whether the aircraft has entered the approach half-plane."""
        return aircraft.position.y <= runway.position.y

    def select_next_lander(
        self, session: PlannerSession, aircraft: list[Aircraft], runway: Runway
    ) -> Aircraft | None:
        """Return the aircraft cleared to land this tick.

        A lander already assigned in the session keeps its clearance while it
        is still present. An assignment whose aircraft vanished is dropped.
        Otherwise the eligible aircraft closest to the runway is chosen, the
        first one encountered winning ties. The choice is stored in the
        session.

        Args:
            session: Planner session holding the current assignment.
            aircraft: Live aircraft in tick order.
            runway: Landing target.

        Returns:
            The cleared aircraft, or None when nobody is eligible.
        """
        if session.assigned_lander is not None:
            for plane in aircraft:
                if plane.id == session.assigned_lander:
                    return plane

            logger.info(
                "Assigned lander %s left the simulation, releasing clearance",
                session.assigned_lander,
            )
            session.clear_lander()

        best: Aircraft | None = None
        best_distance = float("inf")
        for plane in aircraft:
            if session.has_landed(plane.id) or not self.is_eligible(plane, runway):
                continue
            d = distance(plane.position, runway.position)
            if d < best_distance:
                best_distance = d
                best = plane

        if best is not None:
            session.assign_lander(best.id)
            logger.info("Aircraft %s cleared to land (%.1f from runway)", best.id, best_distance)

        return best

    def has_landed(self, aircraft: Aircraft, runway: Runway) -> bool:
        """Check for touchdown.

        The aircraft must be closer than ``landing_distance`` to the runway
        and its heading within ``alignment_deg`` of the runway heading, so
        passing over the runway at a steep angle does not count.
        """
        if distance(aircraft.position, runway.position) >= self.landing_distance:
            return False
        deviation = normalize_heading(aircraft.rotation - runway.heading)
        return -self.alignment_deg <= deviation <= self.alignment_deg

    def record_landing(self, session: PlannerSession, aircraft: Aircraft) -> int:
        """Book a touchdown of the assigned lander.

        Returns:
            Running landed count.
        """
        landed_count = session.record_landing(aircraft.id)
        logger.info("Aircraft %s landed (%d landed so far)", aircraft.id, landed_count)
        return landed_count
