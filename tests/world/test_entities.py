"""Tests for world entities and their validation."""

import math

import pytest

from milehigh.errors import PlannerError, ValidationError
from milehigh.physics.geometry import Point
from milehigh.world.entities import (
    Boundary,
    EntityKind,
    Obstacle,
    Runway,
    TickState,
    WaypointDecision,
)


class TestAircraftValidation:
    """Test Aircraft invariants."""

    def test_valid_aircraft(self, make_aircraft) -> None:
        """Test that the default aircraft passes."""
        plane = make_aircraft()
        plane.validate()
        assert plane.category == EntityKind.AIRCRAFT

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_collision_radius(self, make_aircraft, radius: float) -> None:
        """Test collision radius must be positive."""
        with pytest.raises(ValidationError, match="collision_radius must be positive"):
            make_aircraft(collision_radius=radius).validate()

    @pytest.mark.parametrize("field_name", ["speed", "turn_speed", "fuel", "score"])
    def test_non_finite_fields(self, make_aircraft, field_name: str) -> None:
        """Test infinite values are rejected."""
        with pytest.raises(ValidationError, match=field_name):
            make_aircraft(**{field_name: math.inf}).validate()

    @pytest.mark.parametrize("rotation", [270.0, -180.0, 180.5, -360.0])
    def test_rotation_out_of_range(self, make_aircraft, rotation: float) -> None:
        """Test programmatically built aircraft must keep rotation in (-180, 180]."""
        with pytest.raises(ValidationError, match="rotation must be within"):
            make_aircraft(rotation=rotation).validate()

    @pytest.mark.parametrize("rotation", [180.0, -179.5, 0.0])
    def test_rotation_in_range(self, make_aircraft, rotation: float) -> None:
        """Test the half-open range bounds."""
        make_aircraft(rotation=rotation).validate()

    @pytest.mark.parametrize("aircraft_id", [[1, 2], None, False])
    def test_invalid_id(self, make_aircraft, aircraft_id) -> None:
        """Test ids must be strings or integers."""
        with pytest.raises(ValidationError, match="'id'"):
            make_aircraft(aircraft_id).validate()

    def test_validation_error_is_planner_error(self, make_aircraft) -> None:
        """Test the exception hierarchy."""
        with pytest.raises(PlannerError):
            make_aircraft(rotation=math.nan).validate()


class TestBoundary:
    """Test Boundary validation."""

    def test_inverted_corners(self) -> None:
        """Test min greater than max."""
        with pytest.raises(ValidationError, match="exceeds"):
            Boundary(min=Point(10.0, 0.0), max=Point(0.0, 10.0)).validate()

    def test_degenerate_boundary_allowed(self) -> None:
        """Test a zero-area boundary."""
        Boundary(min=Point(5.0, 5.0), max=Point(5.0, 5.0)).validate()


class TestTickState:
    """Test TickState helpers."""

    def test_top_area_height(self, boundary: Boundary, runway: Runway) -> None:
        """Test the distance between top edge and runway."""
        state = TickState(aircraft=[], runway=runway, boundary=boundary)
        assert state.top_area_height == 300.0

    def test_validate_checks_obstacles(self, runway: Runway, boundary: Boundary) -> None:
        """Test obstacle boundaries are validated with their index."""
        bad = Obstacle(boundary=Boundary(min=Point(0.0, 0.0), max=Point(math.inf, 1.0)))
        state = TickState(aircraft=[], runway=runway, boundary=boundary, obstacles=[bad])

        with pytest.raises(ValidationError, match=r"obstacle\[0\]"):
            state.validate()

    def test_validate_rejects_unwrapped_rotation(
        self, make_aircraft, runway: Runway, boundary: Boundary
    ) -> None:
        """Test a state built in code with rotation 270 fails validation."""
        plane = make_aircraft(rotation=270.0)
        state = TickState(aircraft=[plane], runway=runway, boundary=boundary)

        with pytest.raises(ValidationError, match="rotation"):
            state.validate()

    def test_validate_checks_runway(self, boundary: Boundary) -> None:
        """Test runway coordinates are validated."""
        state = TickState(aircraft=[], runway=Runway(Point(math.nan, 0.0)), boundary=boundary)

        with pytest.raises(ValidationError, match="runway"):
            state.validate()


class TestWaypointDecision:
    """Test the output record."""

    def test_to_dict(self) -> None:
        """Test the wire representation."""
        decision = WaypointDecision(aircraft_id=7, waypoint=Point(1.0, 2.0))
        assert decision.to_dict() == {"plane_id": 7, "waypoint": {"x": 1.0, "y": 2.0}}
