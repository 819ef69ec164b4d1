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
"""Team sides and final score models."""
from dataclasses import dataclass
from typing import Optional

HOME = "home"
AWAY = "away"
SIDES = (HOME, AWAY)


def validate_side(side: Optional[str]) -> Optional[str]:
    """Check that ``side`` is a known team label.

    Parameters
    ----------
    side : Optional[str]
        ``"home"``, ``"away"`` or ``None`` for spectators.

    Returns
    -------
    Optional[str]
        The unchanged ``side``.

    Raises
    ------
    ValueError
        When ``side`` is neither ``None`` nor one of :data:`SIDES`.
    """
    if side is not None and side not in SIDES:
        raise ValueError(f"Unknown side '{side}'. Known sides: {', '.join(SIDES)}")
    return side


def attack_direction(side: str) -> int:
    """Return ``+1`` when ``side`` attacks towards positive x, ``-1`` otherwise.

    Parameters
    ----------
    side : str
        ``"home"`` or ``"away"``.

    Returns
    -------
    int
        Sign of the x axis the side attacks towards.
    """
    return 1 if side == HOME else -1


@dataclass
class ScoreLine:
    """Final score reported by the host when a match ends.

    Parameters
    ----------
    home : int
        Goals scored by the home side.
    away : int
        Goals scored by the away side.
    """

    home: int
    away: int

    def __post_init__(self) -> None:
        """Reject negative scores."""
        if self.home < 0 or self.away < 0:
            raise ValueError("Scores cannot be negative")

    @property
    def winner(self) -> Optional[str]:
        """Return the winning side, or ``None`` when the match is tied."""
        if self.home > self.away:
            return HOME
        if self.away > self.home:
            return AWAY
        return None
