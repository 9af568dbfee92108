"""Per-tick planning: landing sequence, approach curves, avoidance.

Typical usage:
    from milehigh.planning import Planner

    planner = Planner()
    decisions = planner.update(state)
"""

from milehigh.planning.planner import Planner, TickReport
from milehigh.planning.session import PlannerSession

__all__ = ["Planner", "PlannerSession", "TickReport"]
