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
"""Crude scripted match that feeds a local host into the engine.

The physics here only exists to produce a believable stream of ticks,
kicks and goals: players drift around a home slot, the nearest player of
each side chases the ball, and kicks send it towards the opposing goal.
"""
import random
import time
from typing import Dict, List, Optional

from linesman.engine.local_host import LocalMatchHost
from linesman.engine.match_engine import OfficiatingEngine
from linesman.engine.physics import Vector2D
from linesman.engine.scheduler import ManualScheduler, SimulatedClock
from linesman.models.player import Player
from linesman.models.team import AWAY, HOME, SIDES, ScoreLine, attack_direction

KICK_RADIUS = 25.0
KICK_COOLDOWN_TICKS = 20
PLAYER_STEP = 2.5
BALL_FRICTION = 0.99
PITCH_HALF_HEIGHT = 300.0
NORMAL_ACCELERATION = 0.1


class DemoMatch:
    """Drive an :class:`OfficiatingEngine` from a simulated match.

    Parameters
    ----------
    engine : OfficiatingEngine
        Engine under demonstration; its host must be ``host``.
    host : LocalMatchHost
        In-memory room the simulation moves players and ball in.
    players : List[Player]
        Players joining the room.
    duration : float, optional
        Match length in seconds of play.
    tick_rate : float, optional
        Ticks per second.
    seed : int | None, optional
        Seed for reproducible matches.
    clock : SimulatedClock | None, optional
        Clock advanced every tick when running headless.
    scheduler : ManualScheduler | None, optional
        Scheduler whose due callbacks run every tick when running headless.
    """

    def __init__(
        self,
        engine: OfficiatingEngine,
        host: LocalMatchHost,
        players: List[Player],
        *,
        duration: float = 180.0,
        tick_rate: float = 60.0,
        seed: Optional[int] = None,
        clock: Optional[SimulatedClock] = None,
        scheduler: Optional[ManualScheduler] = None,
    ) -> None:
        self.engine = engine
        self.host = host
        self.players = players
        self.duration = duration
        self.dt = 1.0 / tick_rate
        self.rng = random.Random(seed)
        self.clock = clock
        self.scheduler = scheduler
        self.ball_velocity = Vector2D(0.0, 0.0)
        self.score = ScoreLine(0, 0)
        self.match_time = 0.0
        self.is_running = False
        self._anchors: Dict[int, Vector2D] = {p.player_id: p.position.copy() for p in players}
        self._cooldowns: Dict[int, int] = {}

    def setup(self) -> None:
        """Connect everyone, enable league mode and sign half the room up for ranked."""
        for player in self.players:
            joined = self.host.add_player(player.player_id, player.name, player.team, player.position, player.admin)
            self.engine.on_player_join(joined)

        admin = next((p for p in self.host.get_player_list() if p.admin), None)
        if admin is not None:
            self.engine.on_chat_message(admin, self.engine.config.commands.toggle_league)
        for player in self.host.get_player_list():
            if self.rng.random() < 0.5:
                self.engine.on_chat_message(player, self.engine.config.commands.join_ranked)
        self.engine.on_match_start()

    def run(self, realtime: bool = False) -> ScoreLine:
        """Play the match to the end and report the result to the engine.

        Parameters
        ----------
        realtime : bool, optional
            Sleep one tick between steps so the match can be watched.

        Returns
        -------
        ScoreLine
            Final score.
        """
        self.setup()
        self.is_running = True
        while self.is_running and self.match_time < self.duration:
            self.step()
            if realtime:
                time.sleep(self.dt)
        self.is_running = False
        self.engine.on_match_end(self.score)
        return self.score

    def stop(self) -> None:
        """Ask :meth:`run` to finish after the current step."""
        self.is_running = False

    def step(self) -> None:
        """Advance the simulation by one tick."""
        if self.clock is not None:
            self.clock.advance(self.dt)
        if self.scheduler is not None:
            self.scheduler.run_due()
        if self.host.paused:
            return

        self.match_time += self.dt
        self._move_players()
        self._kick_if_close()
        scoring_side = self._move_ball()
        self.engine.on_position_tick()
        if scoring_side is not None:
            self._score(scoring_side)

    def _speed_factor(self, player_id: int) -> float:
        """Return the movement multiplier implied by the host disc properties.

        Parameters
        ----------
        player_id : int
            Player to check.

        Returns
        -------
        float
            ``1.0`` for unmodified players, lower while penalised.
        """
        properties = self.host.movement.get(player_id)
        if properties is None:
            return 1.0
        return properties.acceleration / NORMAL_ACCELERATION

    def _move_players(self) -> None:
        """Send each side's nearest player at the ball and the rest home."""
        ball = self.host.ball or Vector2D(0.0, 0.0)
        on_pitch = [p for p in self.host.get_player_list() if p.team is not None]
        chasers = set()
        for side in SIDES:
            team = [p for p in on_pitch if p.team == side]
            if team:
                chasers.add(min(team, key=lambda p: p.position.distance_to(ball)).player_id)

        for player in on_pitch:
            anchor = self._anchors.get(player.player_id, player.position)
            target = ball if player.player_id in chasers else anchor
            offset = target - player.position
            distance = offset.magnitude()
            step = PLAYER_STEP * self._speed_factor(player.player_id)
            if distance > step:
                offset = offset * (step / distance)
            jitter = Vector2D(self.rng.uniform(-0.5, 0.5), self.rng.uniform(-0.5, 0.5))
            moved = player.position + offset + jitter
            self.host.move_player(player.player_id, moved.x, moved.y)

    def _kick_if_close(self) -> None:
        """Let the first player in kicking range strike towards goal."""
        ball = self.host.ball
        if ball is None:
            return
        for player_id in list(self._cooldowns):
            self._cooldowns[player_id] -= 1
            if self._cooldowns[player_id] <= 0:
                del self._cooldowns[player_id]

        for player in self.host.get_player_list():
            if player.team is None or player.player_id in self._cooldowns:
                continue
            if player.position.distance_to(ball) > KICK_RADIUS:
                continue
            goal = Vector2D(attack_direction(player.team) * self.engine.config.pitch.goal_x, self.rng.uniform(-150, 150))
            direction = goal - ball
            self.ball_velocity = direction * (self.rng.uniform(6.0, 12.0) / max(direction.magnitude(), 1.0))
            self._cooldowns[player.player_id] = KICK_COOLDOWN_TICKS
            self.engine.on_ball_kick(player)
            return

    def _move_ball(self) -> Optional[str]:
        """Integrate the ball and bounce it off the walls.

        Returns
        -------
        Optional[str]
            Side that scored on this tick, if any.
        """
        ball = self.host.ball
        if ball is None:
            return None
        position = ball + self.ball_velocity
        self.ball_velocity = self.ball_velocity * BALL_FRICTION
        pitch = self.engine.config.pitch

        if abs(position.x) > pitch.goal_x:
            if abs(position.y) < pitch.goal_width:
                self.host.move_ball(position.x, position.y)
                return HOME if position.x > 0 else AWAY
            self.ball_velocity = Vector2D(-self.ball_velocity.x, self.ball_velocity.y)
            position = Vector2D(max(-pitch.goal_x, min(pitch.goal_x, position.x)), position.y)
        if abs(position.y) > PITCH_HALF_HEIGHT:
            self.ball_velocity = Vector2D(self.ball_velocity.x, -self.ball_velocity.y)
            position = Vector2D(position.x, max(-PITCH_HALF_HEIGHT, min(PITCH_HALF_HEIGHT, position.y)))
        self.host.move_ball(position.x, position.y)
        return None

    def _score(self, side: str) -> None:
        """Record a goal and reset positions for the kick-off.

        Parameters
        ----------
        side : str
            Side that scored.
        """
        if side == HOME:
            self.score.home += 1
        else:
            self.score.away += 1
        self.engine.on_team_goal(side)
        self.host.move_ball(0.0, 0.0)
        self.ball_velocity = Vector2D(0.0, 0.0)
        for player_id, anchor in self._anchors.items():
            if player_id in self.host.players:
                self.host.move_player(player_id, anchor.x, anchor.y)
