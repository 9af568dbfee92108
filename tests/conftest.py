"""Pytest configuration and fixtures for all tests."""

from collections.abc import Callable

import pytest

from milehigh.physics.geometry import Point
from milehigh.world.entities import Aircraft, Boundary, Obstacle, Runway, TickState


@pytest.fixture
def make_aircraft() -> Callable[..., Aircraft]:
    """Factory for aircraft with sensible defaults.

    Position and rotation are the usual knobs; everything else can be
    overridden by keyword.
    """

    def factory(
        aircraft_id: str | int = "AC1",
        x: float = 100.0,
        y: float = 100.0,
        rotation: float = 0.0,
        **overrides,
    ) -> Aircraft:
        values = {
            "speed": 10.0,
            "turn_speed": 5.0,
            "collision_radius": 10.0,
            "fuel": 100.0,
            "score": 1.0,
        }
        values.update(overrides)
        return Aircraft(id=aircraft_id, position=Point(x, y), rotation=rotation, **values)

    return factory


@pytest.fixture
def boundary() -> Boundary:
    """Playable area of 800x600 with the origin at the top-left corner."""
    return Boundary(min=Point(0.0, 0.0), max=Point(800.0, 600.0))


@pytest.fixture
def runway() -> Runway:
    """Runway in the middle of the playable area."""
    return Runway(position=Point(400.0, 300.0))


@pytest.fixture
def make_state(boundary: Boundary, runway: Runway) -> Callable[..., TickState]:
    """Factory for tick snapshots around the default runway and boundary."""

    def factory(
        aircraft: list[Aircraft],
        obstacles: list[Obstacle] | None = None,
        runway_override: Runway | None = None,
    ) -> TickState:
        return TickState(
            aircraft=aircraft,
            obstacles=obstacles or [],
            runway=runway_override or runway,
            boundary=boundary,
        )

    return factory


@pytest.fixture
def make_obstacle() -> Callable[..., Obstacle]:
    """Factory for obstacles covering a rectangle."""

    def factory(min_x: float, min_y: float, max_x: float, max_y: float) -> Obstacle:
        return Obstacle(boundary=Boundary(min=Point(min_x, min_y), max=Point(max_x, max_y)))

    return factory
