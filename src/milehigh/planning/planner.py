"""Per-tick waypoint planning.

Each tick the planner receives a snapshot of the world and returns one
waypoint per aircraft. The decision for an aircraft follows a fixed
priority:

    1. Avoiding: the aircraft takes part in a predicted collision and is
       not the cleared lander. It breaks right.
    2. Landing: the aircraft is cleared to land. It flies to the runway.
    3. Approaching: everyone else follows the approach curve (or a holding
       circle when holding is enabled and the runway is taken).

Typical usage:
    from milehigh import Planner, parse_tick_state

    planner = Planner()
    for document in ticks:
        decisions = planner.update(parse_tick_state(document))
"""

import logging
from dataclasses import dataclass, field

from milehigh.core.config import PlannerSettings
from milehigh.core.event_bus import Event, EventBus
from milehigh.physics.collision import CollisionDetector, CollisionRecord
from milehigh.physics.geometry import Point
from milehigh.planning.avoidance import avoidance_waypoint
from milehigh.planning.events import (
    AircraftLandedEvent,
    CollisionsDetectedEvent,
    LanderReleasedEvent,
    LanderSelectedEvent,
)
from milehigh.planning.holding import next_circle_point
from milehigh.planning.landing import LandingScheduler
from milehigh.planning.session import PlannerSession
from milehigh.planning.trajectory import TrajectoryPlanner
from milehigh.world.entities import Aircraft, TickState, WaypointDecision

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    """Everything the planner decided on one tick.

    Attributes:
        tick: Tick number within the session, starting at 1.
        decisions: One waypoint per aircraft, in input order.
        collisions: Predicted collisions.
        lander_id: Aircraft cleared to land, if any.
        landed_ids: Aircraft that touched down on this tick.
        landed_count: Running number of landings.
    """

    tick: int
    decisions: list[WaypointDecision] = field(default_factory=list)
    collisions: list[CollisionRecord] = field(default_factory=list)
    lander_id: str | int | None = None
    landed_ids: list[str | int] = field(default_factory=list)
    landed_count: int = 0

    def to_dict(self) -> dict:
        """JSON-friendly representation."""
        return {
            "tick": self.tick,
            "decisions": [decision.to_dict() for decision in self.decisions],
            "collisions": [record.to_dict() for record in self.collisions],
            "lander_id": self.lander_id,
            "landed_ids": list(self.landed_ids),
            "landed_count": self.landed_count,
        }


class Planner:
    """Tick orchestrator owning one planner session.

    Examples:
        >>> planner = Planner()
        >>> report = planner.plan_tick(state)
        >>> report.decisions[0].waypoint
        Point(x=100.0, y=150.0)
    """

    def __init__(
        self,
        settings: PlannerSettings | None = None,
        session: PlannerSession | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the planner.

        Args:
            settings: Tuning constants, defaults when None.
            session: Session to continue, a fresh one when None.
            event_bus: Bus receiving diagnostic events, if any.
        """
        self.settings = settings or PlannerSettings()
        self.session = session or PlannerSession()
        self.event_bus = event_bus

        self.collision_detector = CollisionDetector(
            prediction_time=self.settings.prediction_time,
            box_scale=self.settings.box_scale,
        )
        self.landing_scheduler = LandingScheduler(
            landing_distance=self.settings.landing_distance,
            alignment_deg=self.settings.landing_alignment_deg,
        )
        self.trajectory_planner = TrajectoryPlanner(
            curve_t=self.settings.approach_curve_t,
            anchor_heading_deg=self.settings.anchor_heading_deg,
            control_point_time=self.settings.control_point_time,
        )

    def update(self, state: TickState) -> list[WaypointDecision]:
        """Plan a tick and return only the waypoint decisions."""
        return self.plan_tick(state).decisions

    def plan_tick(self, state: TickState) -> TickReport:
        """Plan one tick.

        Args:
            state: World snapshot.

        Returns:
            Report of the tick's decisions and bookkeeping.

        Raises:
            ValidationError: If the snapshot is malformed. The session is
                left untouched in that case.

        Events are published once the tick is fully planned, so an exception
        raised by a subscriber leaves the session consistent with a
        completed tick.
        """
        state.validate()

        session = self.session
        session.tick += 1
        report = TickReport(tick=session.tick)
        events: list[Event] = []

        aircraft = state.aircraft
        live_ids = {plane.id for plane in aircraft}
        session.prune(live_ids)

        report.collisions = self.collision_detector.find_collisions(aircraft, state.obstacles)
        if report.collisions:
            logger.debug("Tick %d: %d predicted collisions", session.tick, len(report.collisions))
            events.append(CollisionsDetectedEvent(tick=session.tick, collisions=report.collisions))

        previous_lander = session.assigned_lander
        lander = self.landing_scheduler.select_next_lander(session, aircraft, state.runway)
        if previous_lander is not None and previous_lander not in live_ids:
            events.append(LanderReleasedEvent(tick=session.tick, aircraft_id=previous_lander))
        if lander is not None:
            report.lander_id = lander.id
            if lander.id != previous_lander:
                events.append(LanderSelectedEvent(tick=session.tick, aircraft_id=lander.id))

        evasions = self._avoidance_waypoints(report.collisions, report.lander_id)

        for plane in aircraft:
            waypoint = self._resolve_waypoint(plane, state, evasions, report.lander_id)
            report.decisions.append(WaypointDecision(aircraft_id=plane.id, waypoint=waypoint))

        if lander is not None and self.landing_scheduler.has_landed(lander, state.runway):
            landed_count = self.landing_scheduler.record_landing(session, lander)
            report.landed_ids.append(lander.id)
            events.append(
                AircraftLandedEvent(
                    tick=session.tick, aircraft_id=lander.id, landed_count=landed_count
                )
            )

        report.landed_count = session.landed_count

        # Session bookkeeping is complete before any handler runs.
        if self.event_bus is not None:
            for event in events:
                self.event_bus.publish(event)
        return report

    def _avoidance_waypoints(
        self, collisions: list[CollisionRecord], lander_id: str | int | None
    ) -> dict[str | int, Point]:
        """Evasive waypoint for every colliding aircraft except the lander."""
        evasions: dict[str | int, Point] = {}
        for record in collisions:
            participants = [record.aircraft]
            if isinstance(record.other, Aircraft):
                participants.append(record.other)

            for plane in participants:
                if plane.id == lander_id or plane.id in evasions:
                    continue
                evasions[plane.id] = avoidance_waypoint(
                    plane,
                    turn_deg=self.settings.avoidance_turn_deg,
                    dt=self.settings.avoidance_time,
                )
        return evasions

    def _resolve_waypoint(
        self,
        plane: Aircraft,
        state: TickState,
        evasions: dict[str | int, Point],
        lander_id: str | int | None,
    ) -> Point:
        if plane.id in evasions:
            return evasions[plane.id]

        if plane.id == lander_id:
            return state.runway.position

        if (
            self.settings.holding_enabled
            and lander_id is not None
            and not self.trajectory_planner.direct_approach_possible(plane, state.runway)
        ):
            return next_circle_point(
                self.session,
                plane,
                state.runway,
                point_count=self.settings.circle_point_count,
                lap_ticks=self.settings.circle_lap_ticks,
                advance_distance=self.settings.circle_advance_distance,
            )

        return self.trajectory_planner.plan(plane, state.runway, state.top_area_height)
