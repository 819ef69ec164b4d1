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
"""Geometry primitives shared by the officiating components.

The host owns the real physics simulation. The engine only needs enough
geometry to measure distances between the ball, the players and the goals,
to estimate ball speed from consecutive samples, and to describe the disc
properties it asks the host to apply when slowing a player down.
"""
import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class Vector2D:
    """Two-dimensional vector with convenience operations.

    Parameters
    ----------
    x : float
        Horizontal component in host stadium units.
    y : float
        Vertical component in host stadium units.
    """

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector sum of ``self`` and ``other``."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector difference ``self - other``."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        """Scale the vector by ``scalar`` while preserving direction."""
        return Vector2D(self.x * scalar, self.y * scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude in stadium units.
        """
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance_to(self, other: "Vector2D") -> float:
        """Return the straight-line distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Point whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance between the two points.
        """
        return (other - self).magnitude()

    def copy(self) -> "Vector2D":
        """Return an independent copy of the vector.

        Returns
        -------
        Vector2D
            New vector with the same components.
        """
        return Vector2D(self.x, self.y)


@dataclass(frozen=True, slots=True)
class MovementProperties:
    """Disc properties the host applies to a player's avatar.

    Parameters
    ----------
    inverse_mass : float
        Inverse of the disc mass; larger values make the player easier to push.
    acceleration : float
        Per-tick acceleration applied while the player holds a direction.
    """

    inverse_mass: float
    acceleration: float


class BallTracker:
    """Estimate ball speed from the displacement between consecutive ticks.

    The estimate is a heuristic: displacement per tick scaled by the host tick
    rate and a unit conversion factor. Teleports (kick-off resets, pauses) are
    not filtered and simply produce one large reading.

    Parameters
    ----------
    tick_rate : float
        Host ticks per second.
    unit_scale : float
        Conversion from stadium units per second to the announced unit.
    """

    def __init__(self, tick_rate: float, unit_scale: float) -> None:
        self.tick_rate = tick_rate
        self.unit_scale = unit_scale
        self.last_position: Optional[Vector2D] = None
        self.last_speed: float = 0.0

    def observe(self, position: Vector2D) -> float:
        """Record a new ball sample and return the derived speed.

        Parameters
        ----------
        position : Vector2D
            Ball position reported by the host for the current tick.

        Returns
        -------
        float
            Speed estimate rounded to two decimals. The very first sample
            after a reset has no predecessor and yields ``0.0``.
        """
        if self.last_position is None:
            speed = 0.0
        else:
            speed = round(position.distance_to(self.last_position) * self.tick_rate * self.unit_scale, 2)
        self.last_position = position.copy()
        self.last_speed = speed
        return speed

    def reset(self) -> None:
        """Forget the previous sample and the last speed reading."""
        self.last_position = None
        self.last_speed = 0.0
