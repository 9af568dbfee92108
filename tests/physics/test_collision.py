"""Tests for short-horizon collision prediction."""

import pytest

from milehigh.physics.collision import (
    BoundingBox,
    CollisionDetector,
    CollisionKind,
    CollisionRecord,
)
from milehigh.physics.geometry import Point


class TestBoundingBox:
    """Test BoundingBox construction and overlap."""

    def test_centered_box(self) -> None:
        """Test a square box around a point."""
        box = BoundingBox.centered(Point(10.0, 20.0), 30.0)
        assert box == BoundingBox(-5.0, 5.0, 25.0, 35.0)

    def test_overlapping_boxes_intersect(self) -> None:
        """Test partial overlap in both axes."""
        assert BoundingBox(0, 0, 10, 10).intersects(BoundingBox(5, 5, 15, 15))

    def test_contained_box_intersects(self) -> None:
        """Test a box fully inside another."""
        assert BoundingBox(0, 0, 10, 10).intersects(BoundingBox(2, 2, 3, 3))

    def test_touching_edges_do_not_intersect(self) -> None:
        """Test that shared edges are not an overlap."""
        assert not BoundingBox(0, 0, 10, 10).intersects(BoundingBox(10, 0, 20, 10))
        assert not BoundingBox(0, 0, 10, 10).intersects(BoundingBox(0, 10, 10, 20))

    def test_separated_in_one_axis(self) -> None:
        """Test overlap in x only."""
        assert not BoundingBox(0, 0, 10, 10).intersects(BoundingBox(5, 50, 15, 60))


class TestCollisionDetector:
    """Test CollisionDetector predictions."""

    @pytest.fixture
    def detector(self) -> CollisionDetector:
        """Create a detector with the default horizon and box size."""
        return CollisionDetector()

    def test_defaults(self, detector: CollisionDetector) -> None:
        """Test default horizon and scale."""
        assert detector.prediction_time == 2.0
        assert detector.box_scale == 3.0

    def test_predicted_box_is_centered_two_ticks_ahead(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test box placement and size."""
        plane = make_aircraft(x=100.0, y=100.0, rotation=0.0, speed=10.0, collision_radius=10.0)

        assert detector.predict_position(plane) == Point(100.0, 120.0)
        assert detector.predicted_box(plane) == BoundingBox(85.0, 105.0, 115.0, 135.0)

    def test_no_aircraft_no_collisions(self, detector: CollisionDetector) -> None:
        """Test the empty tick."""
        assert detector.find_collisions([], []) == []

    def test_overlapping_aircraft_reported_once(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test exactly one aircraft-aircraft record for overlapping boxes."""
        first = make_aircraft("A", x=100.0, y=100.0)
        second = make_aircraft("B", x=120.0, y=100.0)

        records = detector.find_collisions([first, second], [])

        assert len(records) == 1
        assert records[0].kind == CollisionKind.AIRCRAFT
        assert records[0].aircraft is first
        assert records[0].other is second
        assert records[0].aircraft_ids == ("A", "B")
        assert records[0].to_dict() == {"kind": "aircraft", "aircraft": "A", "other": "B"}

    def test_separated_aircraft_not_reported(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test that non-overlapping predicted boxes give no record."""
        first = make_aircraft("A", x=100.0, y=100.0)
        second = make_aircraft("B", x=131.0, y=100.0)

        assert detector.find_collisions([first, second], []) == []

    def test_prediction_uses_future_position(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test aircraft far apart now but converging within two ticks."""
        # 80 units apart, closing at 20 units per tick each.
        first = make_aircraft("A", x=100.0, y=100.0, rotation=-90.0, speed=20.0)
        second = make_aircraft("B", x=180.0, y=100.0, rotation=90.0, speed=20.0)

        records = detector.find_collisions([first, second], [])

        assert [record.aircraft_ids for record in records] == [("A", "B")]

    def test_diverging_aircraft_close_now_not_reported(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test aircraft close now but apart after two ticks."""
        first = make_aircraft("A", x=100.0, y=100.0, rotation=90.0, speed=20.0)
        second = make_aircraft("B", x=110.0, y=100.0, rotation=-90.0, speed=20.0)

        assert detector.find_collisions([first, second], []) == []

    def test_three_way_collision_gives_each_pair(
        self, detector: CollisionDetector, make_aircraft
    ) -> None:
        """Test that every overlapping pair is reported once."""
        planes = [
            make_aircraft("A", x=100.0, y=100.0),
            make_aircraft("B", x=105.0, y=100.0),
            make_aircraft("C", x=110.0, y=100.0),
        ]

        records = detector.find_collisions(planes, [])

        assert [record.aircraft_ids for record in records] == [
            ("A", "B"),
            ("A", "C"),
            ("B", "C"),
        ]

    def test_obstacle_collision_is_pair_shaped(
        self, detector: CollisionDetector, make_aircraft, make_obstacle
    ) -> None:
        """Test exactly one aircraft-obstacle record with both participants."""
        plane = make_aircraft("A", x=100.0, y=100.0)
        wall = make_obstacle(110.0, 130.0, 200.0, 200.0)

        records = detector.find_collisions([plane], [wall])

        assert len(records) == 1
        record = records[0]
        assert isinstance(record, CollisionRecord)
        assert record.kind == CollisionKind.OBSTACLE
        assert record.aircraft is plane
        assert record.other is wall
        assert record.aircraft_ids == ("A",)
        assert record.to_dict() == {
            "kind": "obstacle",
            "aircraft": "A",
            "other": {"min": {"x": 110.0, "y": 130.0}, "max": {"x": 200.0, "y": 200.0}},
        }

    def test_obstacle_outside_predicted_box(
        self, detector: CollisionDetector, make_aircraft, make_obstacle
    ) -> None:
        """Test an obstacle away from the predicted box."""
        plane = make_aircraft("A", x=100.0, y=100.0)

        assert detector.find_collisions([plane], [make_obstacle(0.0, 0.0, 50.0, 50.0)]) == []

    def test_mixed_records_aircraft_pairs_first(
        self, detector: CollisionDetector, make_aircraft, make_obstacle
    ) -> None:
        """Test ordering of mixed collision kinds."""
        first = make_aircraft("A", x=100.0, y=100.0)
        second = make_aircraft("B", x=110.0, y=100.0)
        wall = make_obstacle(90.0, 110.0, 100.0, 115.0)

        kinds = [record.kind for record in detector.find_collisions([first, second], [wall])]

        assert kinds == [CollisionKind.AIRCRAFT, CollisionKind.OBSTACLE, CollisionKind.OBSTACLE]

    def test_larger_box_scale_widens_prediction(self, make_aircraft) -> None:
        """Test the box scale setting."""
        first = make_aircraft("A", x=100.0, y=100.0)
        second = make_aircraft("B", x=140.0, y=100.0)

        assert CollisionDetector(box_scale=3.0).find_collisions([first, second]) == []
        assert len(CollisionDetector(box_scale=5.0).find_collisions([first, second])) == 1
