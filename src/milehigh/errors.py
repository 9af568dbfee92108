"""Exceptions raised by the traffic planner."""


class PlannerError(Exception):
    """Base class for planner failures."""


class ValidationError(PlannerError):
    """Raised when a tick snapshot is malformed.

    The tick is rejected as a whole; no partial decisions are produced.
    """
