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
"""Domain model for a player connected to the match host."""
from dataclasses import dataclass, field, replace
from typing import Optional

from linesman.engine.physics import Vector2D
from linesman.models.team import validate_side


@dataclass
class Player:
    """Host-side identity and live state of a connected player.

    Parameters
    ----------
    player_id : int
        Identifier assigned by the host, unique for the session.
    name : str
        Display name chosen by the player.
    team : str | None, optional
        ``"home"``, ``"away"`` or ``None`` while spectating.
    position : Vector2D, optional
        Current disc position. Spectators keep the origin.
    admin : bool, optional
        Whether the player holds room admin rights.
    """

    player_id: int
    name: str
    team: Optional[str] = None
    position: Vector2D = field(default_factory=lambda: Vector2D(0.0, 0.0))
    admin: bool = False

    def __post_init__(self) -> None:
        """Validate the team label."""
        validate_side(self.team)

    @property
    def is_playing(self) -> bool:
        """Return ``True`` when the player is assigned to a team."""
        return self.team is not None

    def snapshot(self) -> "Player":
        """Return a detached copy that later host updates will not mutate.

        Returns
        -------
        Player
            Copy of the player with its own position vector.
        """
        return replace(self, position=self.position.copy())
