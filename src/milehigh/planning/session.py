"""Cross-tick planner state.

One session belongs to one simulation run. Independent games or tests
each create their own; nothing here is module-global.
"""

from dataclasses import dataclass, field

from milehigh.physics.geometry import Point


@dataclass
class PlannerSession:
    """State carried by the planner from one tick to the next.

    Attributes:
        assigned_lander: Id of the aircraft cleared to land, if any.
        landed_count: Number of landings observed so far.
        circle_cache: Holding-circle points per aircraft id.
        radius_cache: Holding-circle radius per aircraft id.
        landed_ids: Aircraft already counted as landed.
        tick: Number of ticks planned so far.

    Examples:
        >>> session = PlannerSession()
        >>> session.assign_lander("AC1")
        >>> session.record_landing("AC1")
        1
    """

    assigned_lander: str | int | None = None
    landed_count: int = 0
    circle_cache: dict[str | int, list[Point]] = field(default_factory=dict)
    radius_cache: dict[str | int, float] = field(default_factory=dict)
    landed_ids: set[str | int] = field(default_factory=set)
    tick: int = 0

    def assign_lander(self, aircraft_id: str | int | None) -> None:
        """Record the aircraft cleared to land (None clears it)."""
        self.assigned_lander = aircraft_id

    def clear_lander(self) -> None:
        """Drop the current landing clearance."""
        self.assigned_lander = None

    def record_landing(self, aircraft_id: str | int) -> int:
        """Count a touchdown and release the landing clearance.

        Args:
            aircraft_id: Aircraft that landed.

        Returns:
            Running landed count.
        """
        self.landed_count += 1
        self.landed_ids.add(aircraft_id)
        if self.assigned_lander == aircraft_id:
            self.assigned_lander = None
        return self.landed_count

    def has_landed(self, aircraft_id: str | int) -> bool:
        """Check whether an aircraft was already counted as landed."""
        return aircraft_id in self.landed_ids

    def prune(self, live_ids: set[str | int]) -> None:
        """Forget cached holding data of aircraft no longer in the tick."""
        for cache in (self.circle_cache, self.radius_cache):
            for aircraft_id in [key for key in cache if key not in live_ids]:
                del cache[aircraft_id]
