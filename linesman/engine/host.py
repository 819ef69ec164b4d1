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
"""Interface the officiating engine expects from the match host."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol

if TYPE_CHECKING:
    from linesman.engine.physics import MovementProperties, Vector2D
    from linesman.models.player import Player


class HostCallError(RuntimeError):
    """Raised by a host when an outbound call cannot be carried out.

    Typical causes are a player disconnecting between the event and the
    call, or the room closing.
    """


class MatchHost(Protocol):
    """Outbound calls and queries the engine performs against the host."""

    def announce(
        self,
        text: str,
        target: Optional[int] = None,
        color: Optional[int] = None,
        style: Optional[str] = None,
    ) -> None:
        """Display a message to one player or to everyone.

        Parameters
        ----------
        text : str
            Message body.
        target : int | None, optional
            Recipient player id, ``None`` to broadcast.
        color : int | None, optional
            RGB colour.
        style : str | None, optional
            Font style such as ``"bold"``.
        """
        ...

    def set_movement_properties(self, player_id: int, properties: "MovementProperties") -> None:
        """Override the disc properties of a player.

        Parameters
        ----------
        player_id : int
            Target player.
        properties : MovementProperties
            Inverse mass and acceleration to apply.
        """
        ...

    def pause_play(self, paused: bool) -> None:
        """Pause or resume live play.

        Parameters
        ----------
        paused : bool
            ``True`` to pause, ``False`` to resume.
        """
        ...

    def set_player_admin(self, player_id: int, admin: bool) -> None:
        """Grant or revoke admin rights.

        Parameters
        ----------
        player_id : int
            Target player.
        admin : bool
            New admin flag.
        """
        ...

    def get_player_list(self) -> List["Player"]:
        """Return every connected player with current team and position.

        Returns
        -------
        List[Player]
            Players in host order.
        """
        ...

    def get_ball_position(self) -> Optional["Vector2D"]:
        """Return the ball position, or ``None`` when no game is running.

        Returns
        -------
        Optional[Vector2D]
            Current ball position.
        """
        ...
