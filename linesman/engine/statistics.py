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
"""Live statistics: kick attribution, shots on target, goals and assists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from linesman.engine.physics import Vector2D
from linesman.models.team import HOME, attack_direction

if TYPE_CHECKING:
    from linesman.engine.config import PitchConfig, ShotConfig
    from linesman.engine.player_state import PlayerRegistry
    from linesman.models.player import Player


@dataclass
class KickerChain:
    """Two-slot history of the most recent distinct ball kickers.

    Parameters
    ----------
    last : Player | None, optional
        Snapshot of the player who touched the ball last.
    second_last : Player | None, optional
        Snapshot of the previous, different, kicker.
    """

    last: Optional["Player"] = None
    second_last: Optional["Player"] = None

    def record(self, player: "Player") -> None:
        """Push ``player`` onto the chain.

        Repeated touches by the same player leave ``second_last`` untouched so
        a dribble does not erase the passer.

        Parameters
        ----------
        player : Player
            Snapshot of the kicking player taken at kick time.
        """
        if self.last is not None and self.last.player_id != player.player_id:
            self.second_last = self.last
        self.last = player

    def clear(self) -> None:
        """Forget both kickers."""
        self.last = None
        self.second_last = None


@dataclass(slots=True)
class KickOutcome:
    """Classification of a single kick.

    Parameters
    ----------
    player_id : int
        Kicking player.
    on_target : bool
        Whether the kick was aimed at the opposing goal.
    xgot : float
        Expected-goals increment credited for the kick (``0.0`` off target).
    """

    player_id: int
    on_target: bool
    xgot: float = 0.0


@dataclass(slots=True)
class GoalCredit:
    """Players credited for a goal.

    Parameters
    ----------
    team : str
        Side that scored.
    scorer : Player
        Last kicker, on the scoring side.
    assister : Player | None, optional
        Previous distinct kicker when on the scoring side.
    """

    team: str
    scorer: "Player"
    assister: Optional["Player"] = None


class StatisticsTracker:
    """Attribute kicks and goals to players and accumulate their counters.

    Parameters
    ----------
    registry : PlayerRegistry
        Source of the per-player statistics (get-or-create).
    pitch : PitchConfig
        Goal and attacking-box geometry.
    shot : ShotConfig
        Expected-goals parameters.
    chain : KickerChain | None, optional
        Shared kicker chain; a private one is created when omitted.
    """

    def __init__(
        self,
        registry: "PlayerRegistry",
        pitch: "PitchConfig",
        shot: "ShotConfig",
        chain: Optional[KickerChain] = None,
    ) -> None:
        self.registry = registry
        self.pitch = pitch
        self.shot = shot
        self.chain = chain if chain is not None else KickerChain()

    def goal_centre(self, side: str) -> Vector2D:
        """Return the centre of the goal ``side`` attacks.

        Parameters
        ----------
        side : str
            Attacking side.

        Returns
        -------
        Vector2D
            ``(+goal_x, 0)`` for home, ``(-goal_x, 0)`` for away.
        """
        return Vector2D(attack_direction(side) * self.pitch.goal_x, 0.0)

    def is_aiming(self, side: Optional[str], ball: Vector2D) -> bool:
        """Return whether a kick by ``side`` from ``ball`` counts as a shot.

        Parameters
        ----------
        side : Optional[str]
            Team of the kicker; spectators never aim.
        ball : Vector2D
            Ball position at kick time.

        Returns
        -------
        bool
            ``True`` inside the attacking box and within the goal width.
        """
        if side is None:
            return False
        if abs(ball.y) >= self.pitch.goal_width:
            return False
        if side == HOME:
            return ball.x > self.pitch.attacking_box_x
        return ball.x < -self.pitch.attacking_box_x

    def expected_goal_increment(self, side: str, ball: Vector2D) -> float:
        """Return the expected-goals credit for a shot from ``ball``.

        Parameters
        ----------
        side : str
            Shooting side.
        ball : Vector2D
            Ball position at kick time.

        Returns
        -------
        float
            ``goal_width / distance`` rounded to the configured decimals. The
            distance is floored so a shot from the goal centre stays finite.
        """
        distance = max(ball.distance_to(self.goal_centre(side)), self.shot.min_shot_distance)
        return round(self.pitch.goal_width / distance, self.shot.xgot_decimals)

    def record_kick(self, player: "Player", ball: Optional[Vector2D]) -> KickOutcome:
        """Attribute a kick and update the kicker's counters.

        Parameters
        ----------
        player : Player
            Kicking player; a snapshot is stored in the chain.
        ball : Optional[Vector2D]
            Ball position at kick time. When the host cannot report it the
            kick is counted but never classified as a shot.

        Returns
        -------
        KickOutcome
            Whether the kick was on target and the xGOT credited.
        """
        self.chain.record(player.snapshot())
        stats = self.registry.statistics_for(player.player_id)
        stats.kicks += 1

        side = player.team
        if ball is None or side is None or not self.is_aiming(side, ball):
            return KickOutcome(player.player_id, on_target=False)

        increment = self.expected_goal_increment(side, ball)
        stats.shots_on_target += 1
        stats.expected_goals_on_target += increment
        return KickOutcome(player.player_id, on_target=True, xgot=increment)

    def record_goal(self, team: str) -> Optional[GoalCredit]:
        """Credit a goal scored by ``team`` and clear the kicker chain.

        Only a last kicker on the scoring side is credited. Own goals, or goals
        with no recorded kicker, credit nobody.

        Parameters
        ----------
        team : str
            Side awarded the goal.

        Returns
        -------
        Optional[GoalCredit]
            Credited players, or ``None`` when nobody is credited.
        """
        scorer, assister = self.chain.last, self.chain.second_last
        self.chain.clear()

        if scorer is None or scorer.team != team:
            return None

        self.registry.statistics_for(scorer.player_id).goals += 1
        credit = GoalCredit(team, scorer)
        if assister is not None and assister.team == team and assister.player_id != scorer.player_id:
            self.registry.statistics_for(assister.player_id).assists += 1
            credit.assister = assister
        return credit

    def stat_line(self, player_id: int) -> str:
        """Format the statistics of ``player_id`` for the post-match summary.

        Parameters
        ----------
        player_id : int
            Player whose counters are formatted.

        Returns
        -------
        str
            ``"<g>G / <a>A / <sot> SOT / <xgot> xGOT"``.
        """
        s = self.registry.statistics_for(player_id)
        return f"{s.goals}G / {s.assists}A / {s.shots_on_target} SOT / {s.expected_goals_on_target:.2f} xGOT"
