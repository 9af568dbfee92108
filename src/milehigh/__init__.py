"""MileHigh - per-tick waypoint planner for a simplified air traffic simulation.

Typical usage:
    from milehigh import Planner, parse_tick_state

    planner = Planner()
    decisions = planner.update(parse_tick_state(document))
"""

from milehigh.errors import PlannerError, ValidationError
from milehigh.planning.planner import Planner, TickReport
from milehigh.planning.session import PlannerSession
from milehigh.world.snapshot import parse_tick_state

__all__ = [
    "Planner",
    "PlannerError",
    "PlannerSession",
    "TickReport",
    "ValidationError",
    "parse_tick_state",
]

__version__ = "0.1.0"
