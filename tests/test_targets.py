"""Tests for blob_tracking.targets."""
from __future__ import annotations

from blob_tracking.targets import PointTarget


class TestPointTarget:
    def test_set_and_get(self):
        target = PointTarget()
        target.set_position((1.0, 2.0, 3.0))
        assert target.get_position() == (1.0, 2.0, 3.0)

    def test_initial_position(self):
        assert PointTarget((4.0, 5.0, 6.0)).get_position() == (4.0, 5.0, 6.0)

    def test_list_input_stored_as_tuple(self):
        target = PointTarget()
        target.set_position([1.0, 1.0, 1.0])
        assert target.get_position() == (1.0, 1.0, 1.0)
