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
"""Referee enforcing the league-mode offside penalty."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Literal, Optional

from linesman.models.team import HOME

if TYPE_CHECKING:
    from linesman.engine.config import PenaltyConfig, PitchConfig
    from linesman.models.player import Player
    from linesman.utils.debug import MatchDebugger


@dataclass(slots=True)
class PenaltyRecord:
    """Active penalty for a single player.

    Parameters
    ----------
    player_id : int
        Penalised player.
    player_name : str
        Name captured when the penalty was called, used for announcements
        after the player may have left.
    expires_at : float
        Clock value after which the penalty lapses on the next tick.
    team : str | None, optional
        Side of the offender when the penalty was called.
    """

    player_id: int
    player_name: str
    expires_at: float
    team: Optional[str] = None


@dataclass(slots=True)
class RefereeDecision:
    """Structured ruling produced while observing a tick or a goal.

    Parameters
    ----------
    event : Literal["penalty", "expired", "cleared"]
        What happened to the penalty.
    record : PenaltyRecord
        Penalty the decision refers to.
    """

    event: Literal["penalty", "expired", "cleared"]
    record: PenaltyRecord

    @property
    def is_penalty(self) -> bool:
        """Return ``True`` when a new penalty was called."""
        return self.event == "penalty"

    @property
    def restores_movement(self) -> bool:
        """Return ``True`` when the player's movement must be restored."""
        return self.event in ("expired", "cleared")


class Referee:
    """Official tracking which players serve an offside penalty.

    The rule is a simplified "attacking-half presence" check rather than a
    last-defender offside: a home player whose disc is beyond
    ``offside_line_x`` (or an away player beyond ``-offside_line_x``) commits
    an offence while league mode is on. Each player carries at most one
    penalty. Expiry is only noticed on the next observed tick.

    The referee decides; it never calls the host. The engine applies the
    movement overrides, pauses and announcements for each decision.

    Parameters
    ----------
    pitch : PitchConfig
        Stadium landmarks, including the offside line.
    penalty : PenaltyConfig
        Penalty duration.
    debugger : MatchDebugger | None, optional
        Optional logging helper used to emit structured debug events.
    """

    def __init__(
        self,
        pitch: "PitchConfig",
        penalty: "PenaltyConfig",
        debugger: Optional["MatchDebugger"] = None,
    ) -> None:
        self.pitch = pitch
        self.penalty = penalty
        self.debugger = debugger
        self.penalties: Dict[int, PenaltyRecord] = {}

    def is_offside(self, player: "Player") -> bool:
        """Return whether ``player`` stands in the forbidden part of the pitch.

        Parameters
        ----------
        player : Player
            Player to check. Spectators are never offside.

        Returns
        -------
        bool
            ``True`` when the player is past the offside line for their side.
        """
        if player.team is None:
            return False
        if player.team == HOME:
            return player.position.x > self.pitch.offside_line_x
        return player.position.x < -self.pitch.offside_line_x

    def is_penalised(self, player_id: int) -> bool:
        """Return whether ``player_id`` currently serves a penalty.

        Parameters
        ----------
        player_id : int
            Player to check.

        Returns
        -------
        bool
            ``True`` while a penalty record exists.
        """
        return player_id in self.penalties

    def observe_players(
        self, players: Iterable["Player"], now: float, league_mode: bool
    ) -> List[RefereeDecision]:
        """Evaluate one position tick.

        New penalties are only called in league mode. Expiry is checked for
        every active record on every tick, so a penalty still lapses when
        league mode is switched off or the player has disconnected.

        Parameters
        ----------
        players : Iterable[Player]
            Players as reported by the host for this tick.
        now : float
            Current clock value in seconds.
        league_mode : bool
            Whether offside penalties are enforced.

        Returns
        -------
        List[RefereeDecision]
            New penalties followed by expiries, in player order.
        """
        decisions: List[RefereeDecision] = []

        if league_mode:
            for player in players:
                if player.player_id in self.penalties or not self.is_offside(player):
                    continue
                record = PenaltyRecord(player.player_id, player.name, now + self.penalty.duration, player.team)
                self.penalties[player.player_id] = record
                decisions.append(RefereeDecision("penalty", record))
                if self.debugger:
                    self.debugger.log_match_event(
                        now,
                        "penalty",
                        f"Player {player.player_id} ({player.name}, {player.team}) offside at "
                        f"x={player.position.x:.1f}; expires at {record.expires_at:.1f}",
                    )

        for record in list(self.penalties.values()):
            if now > record.expires_at:
                del self.penalties[record.player_id]
                decisions.append(RefereeDecision("expired", record))
                if self.debugger:
                    self.debugger.log_match_event(
                        now, "penalty_expired", f"Player {record.player_id} ({record.player_name}) penalty expired"
                    )

        return decisions

    def clear_all(self, now: float = 0.0) -> List[RefereeDecision]:
        """Lift every active penalty, for example after a goal.

        Parameters
        ----------
        now : float, optional
            Clock value used for logging.

        Returns
        -------
        List[RefereeDecision]
            One ``"cleared"`` decision per lifted penalty.
        """
        decisions = [RefereeDecision("cleared", record) for record in self.penalties.values()]
        self.penalties.clear()
        if decisions and self.debugger:
            self.debugger.log_match_event(now, "penalties_cleared", f"{len(decisions)} penalties lifted")
        return decisions
