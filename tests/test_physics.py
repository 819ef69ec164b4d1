# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Tests for the geometry helpers and the ball speed tracker."""

from linesman.engine.physics import BallTracker, MovementProperties, Vector2D


class TestVector2D:
    """Unit tests for the Vector2D helper."""

    def test_vector_addition(self) -> None:
        """Add two vectors and confirm component-wise sums."""
        v3 = Vector2D(1.0, 2.0) + Vector2D(3.0, 4.0)
        assert v3.x == 4.0 and v3.y == 6.0

    def test_vector_subtraction(self) -> None:
        """Subtract vectors and check resulting offset."""
        v3 = Vector2D(5.0, 6.0) - Vector2D(3.0, 4.0)
        assert v3.x == 2.0 and v3.y == 2.0

    def test_vector_scalar_multiplication(self) -> None:
        """Scale a vector by a scalar factor."""
        v2 = Vector2D(2.0, 3.0) * 2
        assert v2.x == 4.0 and v2.y == 6.0

    def test_magnitude(self) -> None:
        """Compute the magnitude of a non-zero vector."""
        assert abs(Vector2D(3.0, 4.0).magnitude() - 5.0) < 1e-6
        assert Vector2D(0.0, 0.0).magnitude() == 0.0

    def test_distance(self) -> None:
        """Test distance calculation between two points."""
        v1 = Vector2D(0.0, 0.0)
        v2 = Vector2D(3.0, 4.0)
        assert abs(v1.distance_to(v2) - 5.0) < 1e-6

    def test_copy_is_independent(self) -> None:
        """Mutating a copy leaves the original untouched."""
        original = Vector2D(1.0, 1.0)
        clone = original.copy()
        clone.x = 9.0
        assert original.x == 1.0


class TestMovementProperties:
    """Disc property value object."""

    def test_properties_compare_by_value(self) -> None:
        """Two identical property sets are equal."""
        assert MovementProperties(1.4, 0.07) == MovementProperties(1.4, 0.07)
        assert MovementProperties(1.4, 0.07) != MovementProperties(1.0, 0.1)


class TestBallTracker:
    """Speed estimates from consecutive ball samples."""

    def test_first_sample_reads_zero(self) -> None:
        """Without a previous sample the speed cannot be estimated."""
        tracker = BallTracker(tick_rate=60, unit_scale=0.05)
        assert tracker.observe(Vector2D(100.0, 0.0)) == 0.0
        assert tracker.last_position == Vector2D(100.0, 0.0)

    def test_speed_scales_displacement(self) -> None:
        """A 10 unit move per tick at 60 ticks/s and scale 0.05 reads 30."""
        tracker = BallTracker(tick_rate=60, unit_scale=0.05)
        tracker.observe(Vector2D(0.0, 0.0))
        assert tracker.observe(Vector2D(6.0, 8.0)) == 30.0
        assert tracker.last_speed == 30.0

    def test_stationary_ball_reads_zero(self) -> None:
        """A ball that did not move has no speed."""
        tracker = BallTracker(tick_rate=60, unit_scale=0.05)
        tracker.observe(Vector2D(5.0, 5.0))
        assert tracker.observe(Vector2D(5.0, 5.0)) == 0.0

    def test_speed_is_rounded(self) -> None:
        """Readings are rounded to two decimals."""
        tracker = BallTracker(tick_rate=60, unit_scale=0.05)
        tracker.observe(Vector2D(0.0, 0.0))
        assert tracker.observe(Vector2D(1.0 / 3.0, 0.0)) == 1.0

    def test_reset_forgets_previous_sample(self) -> None:
        """After a reset the next sample is treated as the first."""
        tracker = BallTracker(tick_rate=60, unit_scale=0.05)
        tracker.observe(Vector2D(0.0, 0.0))
        tracker.observe(Vector2D(10.0, 0.0))
        tracker.reset()
        assert tracker.last_speed == 0.0
        assert tracker.last_position is None
        assert tracker.observe(Vector2D(500.0, 0.0)) == 0.0
