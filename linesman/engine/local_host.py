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
"""In-memory match host used by the demo, the visualiser and the tests."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Set

from linesman.engine.events import Announcement
from linesman.engine.host import HostCallError
from linesman.engine.physics import MovementProperties, Vector2D
from linesman.models.player import Player


class LocalMatchHost:
    """Match host that keeps the room in memory and records every call.

    Targeted calls for unknown players raise :class:`HostCallError`, as a real
    host does when a player disconnects. Individual actions can also be forced
    to fail through :attr:`failing`.
    """

    def __init__(self) -> None:
        self.players: Dict[int, Player] = {}
        self.ball: Optional[Vector2D] = Vector2D(0.0, 0.0)
        self.announcements: List[Announcement] = []
        self.movement: Dict[int, MovementProperties] = {}
        self.paused = False
        self.pause_history: List[bool] = []
        self.failing: Set[str] = set()
        self._lock = threading.Lock()

    # Room manipulation used by drivers and tests ------------------------
    def add_player(
        self,
        player_id: int,
        name: str,
        team: Optional[str] = None,
        position: Optional[Vector2D] = None,
        admin: bool = False,
    ) -> Player:
        """Connect a player to the room.

        Parameters
        ----------
        player_id : int
            Identifier for the new player.
        name : str
            Display name.
        team : str | None, optional
            Initial side.
        position : Vector2D | None, optional
            Initial position; the origin when omitted.
        admin : bool, optional
            Initial admin flag.

        Returns
        -------
        Player
            Snapshot of the connected player, suitable for ``on_player_join``.
        """
        player = Player(player_id, name, team, position.copy() if position else Vector2D(0.0, 0.0), admin)
        with self._lock:
            self.players[player_id] = player
        return player.snapshot()

    def remove_player(self, player_id: int) -> Player:
        """Disconnect a player.

        Parameters
        ----------
        player_id : int
            Player to remove.

        Returns
        -------
        Player
            The removed player.
        """
        with self._lock:
            return self.players.pop(player_id)

    def move_player(self, player_id: int, x: float, y: float) -> None:
        """Place a player at ``(x, y)``.

        Parameters
        ----------
        player_id : int
            Player to move.
        x : float
            New x coordinate.
        y : float
            New y coordinate.
        """
        with self._lock:
            self.players[player_id].position = Vector2D(x, y)

    def set_team(self, player_id: int, team: Optional[str]) -> None:
        """Move a player to another side.

        Parameters
        ----------
        player_id : int
            Player to move.
        team : str | None
            New side, ``None`` for spectators.
        """
        with self._lock:
            self.players[player_id].team = team

    def move_ball(self, x: float, y: float) -> None:
        """Place the ball at ``(x, y)``.

        Parameters
        ----------
        x : float
            New x coordinate.
        y : float
            New y coordinate.
        """
        with self._lock:
            self.ball = Vector2D(x, y)

    def player(self, player_id: int) -> Player:
        """Return a snapshot of a connected player.

        Parameters
        ----------
        player_id : int
            Player to look up.

        Returns
        -------
        Player
            Detached copy of the player.
        """
        with self._lock:
            return self.players[player_id].snapshot()

    def messages_for(self, player_id: int) -> List[str]:
        """Return the texts ``player_id`` has seen, broadcasts included.

        Parameters
        ----------
        player_id : int
            Recipient.

        Returns
        -------
        List[str]
            Message texts in send order.
        """
        with self._lock:
            return [a.text for a in self.announcements if a.is_broadcast or a.target == player_id]

    def _check(self, action: str, player_id: Optional[int] = None) -> None:
        """Raise when ``action`` is forced to fail or targets an absent player.

        Parameters
        ----------
        action : str
            Host method name.
        player_id : int | None, optional
            Targeted player, if any.
        """
        if action in self.failing:
            raise HostCallError(f"{action} unavailable")
        if player_id is not None and player_id not in self.players:
            raise HostCallError(f"player {player_id} is not connected")

    # MatchHost protocol ---------------------------------------------------
    def announce(
        self,
        text: str,
        target: Optional[int] = None,
        color: Optional[int] = None,
        style: Optional[str] = None,
    ) -> None:
        """Record a message.

        Parameters
        ----------
        text : str
            Message body.
        target : int | None, optional
            Recipient player id, ``None`` to broadcast.
        color : int | None, optional
            RGB colour.
        style : str | None, optional
            Font style.
        """
        with self._lock:
            self._check("announce", target)
            self.announcements.append(Announcement(text, target, color, style))

    def set_movement_properties(self, player_id: int, properties: MovementProperties) -> None:
        """Record the disc properties of a player.

        Parameters
        ----------
        player_id : int
            Target player.
        properties : MovementProperties
            Properties to apply.
        """
        with self._lock:
            self._check("set_movement_properties", player_id)
            self.movement[player_id] = properties

    def pause_play(self, paused: bool) -> None:
        """Pause or resume play.

        Parameters
        ----------
        paused : bool
            New pause state.
        """
        with self._lock:
            self._check("pause_play")
            self.paused = paused
            self.pause_history.append(paused)

    def set_player_admin(self, player_id: int, admin: bool) -> None:
        """Change a player's admin flag.

        Parameters
        ----------
        player_id : int
            Target player.
        admin : bool
            New admin flag.
        """
        with self._lock:
            self._check("set_player_admin", player_id)
            self.players[player_id].admin = admin

    def get_player_list(self) -> List[Player]:
        """Return snapshots of every connected player.

        Returns
        -------
        List[Player]
            Players in connection order.
        """
        with self._lock:
            self._check("get_player_list")
            return [p.snapshot() for p in self.players.values()]

    def get_ball_position(self) -> Optional[Vector2D]:
        """Return a copy of the ball position.

        Returns
        -------
        Optional[Vector2D]
            Ball position, ``None`` when no ball is in play.
        """
        with self._lock:
            self._check("get_ball_position")
            return self.ball.copy() if self.ball is not None else None
