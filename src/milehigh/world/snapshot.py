"""Parsing of raw tick documents into typed snapshots.

The simulation server sends each tick as a JSON-like document::

    {
        "objects": [
            {"type": "plane", "id": 1, "position": {"x": 10, "y": 20},
             "rotation": 45, "speed": 10, "turn_speed": 4,
             "collision_radius": 10, "fuel": 100, "score": 5},
            {"type": "obstacle", "boundary": {"min": {"x": 0, "y": 0},
                                              "max": {"x": 5, "y": 5}}}
        ],
        "runway": {"x": 400, "y": 300},
        "boundary": {"min": {"x": 0, "y": 0}, "max": {"x": 800, "y": 600}}
    }

Objects are tagged with ``category`` (or the older ``type`` key) and are
narrowed here, once, into Aircraft and Obstacle values.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from milehigh.errors import ValidationError
from milehigh.physics.geometry import Point, normalize_heading
from milehigh.world.entities import Aircraft, Boundary, EntityKind, Obstacle, Runway, TickState

logger = logging.getLogger(__name__)

_CATEGORY_ALIASES = {
    "plane": EntityKind.AIRCRAFT,
    "aircraft": EntityKind.AIRCRAFT,
    "obstacle": EntityKind.OBSTACLE,
}


def _require(data: Mapping[str, Any], key: str, owner: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{owner}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValidationError(f"{owner}: missing required field '{key}'")
    return data[key]


def _number(data: Mapping[str, Any], key: str, owner: str, default: float | None = None) -> float:
    if default is not None and isinstance(data, Mapping) and key not in data:
        return default

    raw = _require(data, key, owner)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f"{owner}: field '{key}' must be a number, got {raw!r}")

    value = float(raw)
    if not math.isfinite(value):
        raise ValidationError(f"{owner}: field '{key}' is not finite ({raw!r})")
    return value


def parse_point(data: Mapping[str, Any], owner: str) -> Point:
    """Parse an ``{"x": ..., "y": ...}`` mapping.

    Raises:
        ValidationError: If a coordinate is missing or not a finite number.
    """
    return Point(_number(data, "x", owner), _number(data, "y", owner))


def parse_boundary(data: Mapping[str, Any], owner: str) -> Boundary:
    """Parse a ``{"min": point, "max": point}`` mapping."""
    boundary = Boundary(
        min=parse_point(_require(data, "min", owner), f"{owner}.min"),
        max=parse_point(_require(data, "max", owner), f"{owner}.max"),
    )
    boundary.validate(owner)
    return boundary


def parse_aircraft(data: Mapping[str, Any]) -> Aircraft:
    """Build an Aircraft from its raw object.

    The rotation is wrapped into (-180, 180].

    Raises:
        ValidationError: If the id is not a string or integer, a field is
            missing or non-finite, or the collision radius is not positive.
    """
    aircraft_id = _require(data, "id", "aircraft")
    Aircraft.validate_id(aircraft_id)
    owner = f"aircraft {aircraft_id!r}"

    aircraft = Aircraft(
        id=aircraft_id,
        position=parse_point(_require(data, "position", owner), f"{owner}.position"),
        rotation=normalize_heading(_number(data, "rotation", owner)),
        speed=_number(data, "speed", owner),
        turn_speed=_number(data, "turn_speed", owner),
        collision_radius=_number(data, "collision_radius", owner),
        fuel=_number(data, "fuel", owner, default=0.0),
        score=_number(data, "score", owner, default=0.0),
    )
    aircraft.validate()
    return aircraft


def parse_obstacle(data: Mapping[str, Any], index: int) -> Obstacle:
    """Build an Obstacle from its raw object."""
    owner = f"obstacle[{index}]"
    return Obstacle(boundary=parse_boundary(_require(data, "boundary", owner), owner))


def parse_runway(data: Mapping[str, Any]) -> Runway:
    """Parse the runway, given either as a bare point or with a position.

    Both ``{"x": 1, "y": 2}`` and ``{"position": {...}, "heading": 0}``
    are accepted.
    """
    if isinstance(data, Mapping) and "position" in data:
        position = parse_point(data["position"], "runway.position")
    else:
        position = parse_point(data, "runway")
    runway = Runway(position=position, heading=_number(data, "heading", "runway", default=0.0))
    runway.validate()
    return runway


def parse_tick_state(document: Mapping[str, Any]) -> TickState:
    """Parse and validate a full tick document.

    Args:
        document: Raw tick as decoded from the simulation server.

    Returns:
        Validated TickState, aircraft kept in input order.

    Raises:
        ValidationError: On the first malformed field. No partial state is
            returned.

    Examples:
        >>> state = parse_tick_state(json.loads(line))
        >>> [plane.id for plane in state.aircraft]
        [1, 2]
    """
    objects = _require(document, "objects", "tick")
    if not isinstance(objects, list):
        raise ValidationError(f"tick: 'objects' must be a list, got {type(objects).__name__}")

    aircraft: list[Aircraft] = []
    obstacles: list[Obstacle] = []

    for index, raw in enumerate(objects):
        if not isinstance(raw, Mapping):
            raise ValidationError(f"objects[{index}]: expected an object, got {raw!r}")

        tag = raw.get("category", raw.get("type"))
        kind = _CATEGORY_ALIASES.get(str(tag).lower()) if tag is not None else None

        if kind is EntityKind.AIRCRAFT:
            aircraft.append(parse_aircraft(raw))
        elif kind is EntityKind.OBSTACLE:
            obstacles.append(parse_obstacle(raw, len(obstacles)))
        else:
            logger.debug("Ignoring object %d with unknown category %r", index, tag)

    state = TickState(
        aircraft=aircraft,
        obstacles=obstacles,
        runway=parse_runway(_require(document, "runway", "tick")),
        boundary=parse_boundary(_require(document, "boundary", "tick"), "boundary"),
    )
    state.validate()
    return state
