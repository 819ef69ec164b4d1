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
"""Event handlers tying the officiating components to a match host.

The host delivers discrete events and position ticks; each handler runs under
one re-entrant lock so handlers never observe each other's partial updates.
Components decide, the engine applies: host calls happen here and only here,
and every failed host call is logged and ignored.
"""
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, TypeVar

from linesman.engine.commands import CommandDispatcher
from linesman.engine.config import ENGINE_CONFIG, OfficiatingConfig
from linesman.engine.events import Announcement, MatchEvent
from linesman.engine.host import MatchHost
from linesman.engine.physics import BallTracker, MovementProperties
from linesman.engine.player_state import PlayerRegistry
from linesman.engine.ranks import DEFAULT_RANK_TABLE, RankTable
from linesman.engine.rating import RatingChange, RatingEngine
from linesman.engine.referee import Referee, RefereeDecision
from linesman.engine.scheduler import Scheduler, ThreadingScheduler
from linesman.engine.statistics import GoalCredit, KickerChain, KickOutcome, StatisticsTracker
from linesman.models.player import Player
from linesman.models.team import ScoreLine, validate_side
from linesman.utils.debug import MatchDebugger

T = TypeVar("T")


@dataclass
class MatchContext:
    """Mutable state owned by a single match.

    Parameters
    ----------
    registry : PlayerRegistry
        Connected players, statistics and ratings.
    ball : BallTracker
        Last ball sample and speed reading.
    chain : KickerChain
        Last and second-last kicker.
    league_mode : bool
        Whether offside penalties and rating updates are active.
    events : List[MatchEvent]
        Noteworthy events of the current match.
    result_recorded : bool
        Set once the current match's result has been processed.
    """

    registry: PlayerRegistry
    ball: BallTracker
    chain: KickerChain = field(default_factory=KickerChain)
    league_mode: bool = False
    events: List[MatchEvent] = field(default_factory=list)
    result_recorded: bool = False


class OfficiatingEngine:
    """Referee, statistician and rating keeper for one match room.

    Parameters
    ----------
    host : MatchHost
        Match host receiving announcements and movement overrides.
    config : OfficiatingConfig, optional
        Rules and presentation settings.
    scheduler : Scheduler | None, optional
        Runs the deferred resume-play action. Defaults to daemon timers.
    clock : Callable[[], float], optional
        Source of the current time in seconds.
    debugger : MatchDebugger | None, optional
        Structured logger. Defaults to a file logger under ``debug_logs``.
    rank_table : RankTable, optional
        Rating tiers.
    """

    def __init__(
        self,
        host: MatchHost,
        config: OfficiatingConfig = ENGINE_CONFIG,
        *,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = time.time,
        debugger: Optional[MatchDebugger] = None,
        rank_table: RankTable = DEFAULT_RANK_TABLE,
    ) -> None:
        self.host = host
        self.config = config
        self.scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.clock = clock
        self.debugger = debugger if debugger is not None else MatchDebugger()
        self.context = MatchContext(
            registry=PlayerRegistry(config.rating.initial_rating),
            ball=BallTracker(config.shot.tick_rate, config.shot.speed_unit_scale),
        )
        self.statistics = StatisticsTracker(self.registry, config.pitch, config.shot, self.context.chain)
        self.referee = Referee(config.pitch, config.penalty, self.debugger)
        self.ratings = RatingEngine(self.registry, config.rating, rank_table)
        self.commands = CommandDispatcher(self.context, self.ratings, config.commands, config.announcements)
        self._lock = threading.RLock()

    @property
    def registry(self) -> PlayerRegistry:
        """Return the player registry of the match context."""
        return self.context.registry

    @property
    def league_mode(self) -> bool:
        """Return whether league rules are enforced."""
        return self.context.league_mode

    # ------------------------------------------------------------------
    # Inbound host events
    # ------------------------------------------------------------------
    def on_player_join(self, player: Player) -> Player:
        """Register a player, welcome them, and hand admin to the first arrival.

        Parameters
        ----------
        player : Player
            Player reported by the host.

        Returns
        -------
        Player
            Registry record for the player.
        """
        with self._lock:
            first_in_room = len(self.registry) == 0
            stored = self.registry.join(player.snapshot())
            colors = self.config.announcements
            self._announce(
                Announcement(f"Welcome {stored.name} to {colors.league_name}!", None, colors.success_color, "bold")
            )
            if first_in_room and not stored.admin:
                if self._call_host("set_player_admin", self.host.set_player_admin, stored.player_id, True):
                    stored.admin = True
            self.debugger.log_match_event(self.clock(), "join", f"Player {stored.player_id} ({stored.name}) joined")
            return stored

    def on_player_leave(self, player: Player) -> None:
        """Forget a disconnected player; statistics and rating are kept.

        Parameters
        ----------
        player : Player
            Departing player.
        """
        with self._lock:
            self.registry.leave(player.player_id)
            self.debugger.log_match_event(self.clock(), "leave", f"Player {player.player_id} ({player.name}) left")

    def on_ball_kick(self, player: Player) -> KickOutcome:
        """Attribute a kick and classify it as a shot when aimed at goal.

        Parameters
        ----------
        player : Player
            Kicking player with their current team.

        Returns
        -------
        KickOutcome
            Classification of the kick.
        """
        with self._lock:
            self._rearm_after_result()
            self.registry.refresh([player])
            ball = self._query_host("get_ball_position", self.host.get_ball_position)
            outcome = self.statistics.record_kick(player, ball)
            if outcome.on_target:
                self.debugger.log_match_event(
                    self.clock(),
                    "shot",
                    f"Player {player.player_id} ({player.name}) shot on target, xGOT +{outcome.xgot:.2f}",
                )
            return outcome

    def on_position_tick(self) -> List[RefereeDecision]:
        """Sample the ball speed and let the referee judge player positions.

        Returns
        -------
        List[RefereeDecision]
            Penalties called and expired on this tick.
        """
        with self._lock:
            now = self.clock()
            ball = self._query_host("get_ball_position", self.host.get_ball_position)
            if ball is not None:
                self.context.ball.observe(ball)

            players = self._query_host("get_player_list", self.host.get_player_list) or []
            self.registry.refresh(players)

            decisions = self.referee.observe_players(players, now, self.context.league_mode)
            for decision in decisions:
                self._apply_decision(decision, now)
            return decisions

    def on_team_goal(self, team: str) -> Optional[GoalCredit]:
        """Lift every penalty and credit the scorer and assister.

        Parameters
        ----------
        team : str
            Side awarded the goal.

        Returns
        -------
        Optional[GoalCredit]
            Credited players, or ``None`` for an own goal.
        """
        validate_side(team)
        with self._lock:
            now = self.clock()
            self._rearm_after_result()
            for decision in self.referee.clear_all(now):
                self._apply_decision(decision, now)

            credit = self.statistics.record_goal(team)
            if credit is None:
                description = f"Goal for {team}, no player credited"
            else:
                message = f"⚽ Goal: {credit.scorer.name} | Speed: {self.context.ball.last_speed:.2f} mph"
                if credit.assister is not None:
                    message += f" | Assist: {credit.assister.name}"
                self._announce(Announcement(message, None, self.config.announcements.goal_color, "bold"))
                description = message
            self.context.events.append(MatchEvent(now, "goal", team, description))
            self.debugger.log_match_event(now, "goal", description)
            return credit

    def on_match_start(self) -> None:
        """Reset per-match attribution and accept the next match result."""
        with self._lock:
            self.context.chain.clear()
            self.context.ball.reset()
            self.context.result_recorded = False
            self.context.events.clear()
            self.debugger.log_match_event(self.clock(), "match_start", "Kick-off")

    def on_match_end(self, score: ScoreLine) -> List[RatingChange]:
        """Apply rating updates once and broadcast the post-match statistics.

        Repeated calls are logged and ignored so deltas are never applied
        twice. The next kick or goal, or :meth:`on_match_start`, starts a new
        match and accepts its result.

        Parameters
        ----------
        score : ScoreLine
            Final score.

        Returns
        -------
        List[RatingChange]
            Rating updates applied, empty when ratings were not touched.
        """
        with self._lock:
            now = self.clock()
            if self.context.result_recorded:
                self.debugger.log_error("duplicate_match_end", f"Ignored repeated result {score.home}-{score.away}")
                return []
            self.context.result_recorded = True

            players = self._query_host("get_player_list", self.host.get_player_list)
            if players is None:
                players = self.registry.connected()
            self.registry.refresh(players)

            changes: List[RatingChange] = []
            if self.context.league_mode or not self.config.rating.require_league_mode:
                changes = self.ratings.apply_match_result(players, score)
                if score.winner is None:
                    self.debugger.log_match_event(now, "match_end", "Tied match, ratings unchanged")
                for change in changes:
                    tier = self.ratings.rank_table.tier_for(change.after).name
                    self.debugger.log_rating_change(change.player_id, change.before, change.after, tier)

            colors = self.config.announcements
            self._announce(Announcement("--- MATCH STATS ---", None, colors.stats_color, "bold"))
            for player in players:
                line = self.statistics.stat_line(player.player_id) + self.ratings.rating_suffix(player.player_id)
                self._announce(Announcement(f"{player.name}: {line}"))

            description = f"Final score {score.home}-{score.away}"
            self.context.events.append(MatchEvent(now, "match_end", score.winner, description))
            self.debugger.log_match_event(now, "match_end", description)
            return changes

    def on_chat_message(self, player: Player, text: str) -> bool:
        """Handle commands or relay a formatted chat line.

        Parameters
        ----------
        player : Player
            Sender.
        text : str
            Raw message text.

        Returns
        -------
        bool
            Always ``False``: the host must not relay the raw text.
        """
        with self._lock:
            result = self.commands.dispatch(player, text)
            for announcement in result.announcements:
                self._announce(announcement)
            if result.command == "toggle_league":
                state = "enabled" if self.context.league_mode else "disabled"
                now = self.clock()
                self.context.events.append(MatchEvent(now, "league_mode", None, f"League mode {state}"))
                self.debugger.log_match_event(now, "league_mode", f"{player.name} {state} league mode")
            return False

    def reset_session(self) -> None:
        """Clear statistics, ratings, penalties and attribution for a new session."""
        with self._lock:
            now = self.clock()
            for decision in self.referee.clear_all(now):
                self._apply_decision(decision, now)
            self.registry.reset_session()
            self.context.chain.clear()
            self.context.ball.reset()
            self.context.result_recorded = False
            self.context.events.clear()
            self.debugger.log_match_event(now, "session_reset", "Statistics and ratings cleared")

    def close(self) -> None:
        """Close the debug log."""
        self.debugger.close()

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------
    def _apply_decision(self, decision: RefereeDecision, now: float) -> None:
        """Carry out the host side effects of a referee decision.

        Parameters
        ----------
        decision : RefereeDecision
            Decision returned by the referee.
        now : float
            Clock value of the decision.
        """
        record = decision.record
        penalty = self.config.penalty
        colors = self.config.announcements

        if decision.is_penalty:
            self._call_host("pause_play", self.host.pause_play, True)
            self._announce(
                Announcement(
                    f"🚨 PENALTY: {record.player_name} Offside! (Slowed for {penalty.duration:.0f}s)",
                    None,
                    colors.warning_color,
                    "bold",
                )
            )
            self._set_movement(record.player_id, penalty.penalised_movement)
            self.scheduler.call_later(penalty.pause_duration, self._resume_play)
            self.context.events.append(MatchEvent(now, "penalty", record.team, f"{record.player_name} offside"))
            return

        if decision.restores_movement:
            self._set_movement(record.player_id, penalty.normal_movement)
        if decision.event == "expired":
            self._announce(
                Announcement(f"✅ Penalty expired for {record.player_name}", record.player_id, colors.success_color)
            )
            self.context.events.append(MatchEvent(now, "penalty_expired", record.team, f"{record.player_name} released"))

    def _rearm_after_result(self) -> None:
        """Treat play after a recorded result as the start of the next match."""
        if not self.context.result_recorded:
            return
        self.context.result_recorded = False
        self.context.chain.clear()
        self.context.ball.reset()
        self.context.events.clear()
        self.debugger.log_match_event(self.clock(), "match_start", "Play after a recorded result")

    def _resume_play(self) -> None:
        """Resume play after the penalty pause; runs from the scheduler."""
        with self._lock:
            if self._call_host("pause_play", self.host.pause_play, False):
                self.debugger.log_match_event(self.clock(), "resume", "Play resumed after penalty")

    def _set_movement(self, player_id: int, properties: MovementProperties) -> None:
        """Apply disc properties to a player, tolerating disconnections.

        Parameters
        ----------
        player_id : int
            Target player.
        properties : MovementProperties
            Properties to apply.
        """
        self._call_host("set_movement_properties", self.host.set_movement_properties, player_id, properties)

    def _announce(self, announcement: Announcement) -> None:
        """Log and send an announcement.

        Parameters
        ----------
        announcement : Announcement
            Message to send.
        """
        self.debugger.log_announcement(announcement.text, announcement.target)
        self._call_host(
            "announce",
            self.host.announce,
            announcement.text,
            announcement.target,
            announcement.color,
            announcement.style,
        )

    def _call_host(self, action: str, call: Callable[..., Any], *args: Any) -> bool:
        """Invoke a host method, logging instead of raising on failure.

        Parameters
        ----------
        action : str
            Name used in the error log.
        call : Callable[..., Any]
            Bound host method.
        *args : Any
            Positional arguments for ``call``.

        Returns
        -------
        bool
            ``True`` when the call succeeded.
        """
        try:
            call(*args)
        except Exception as exc:
            self.debugger.log_error("host_call_failed", f"{action}{args!r}: {exc}")
            return False
        return True

    def _query_host(self, action: str, call: Callable[[], T]) -> Optional[T]:
        """Read from the host, returning ``None`` when the query fails.

        Parameters
        ----------
        action : str
            Name used in the error log.
        call : Callable[[], T]
            Bound host query.

        Returns
        -------
        Optional[T]
            Query result, or ``None`` on failure.
        """
        try:
            return call()
        except Exception as exc:
            self.debugger.log_error("host_query_failed", f"{action}: {exc}")
            return None

    def penalised_player_ids(self) -> List[int]:
        """Return ids of players currently serving a penalty.

        Returns
        -------
        List[int]
            Penalised player ids.
        """
        with self._lock:
            return list(self.referee.penalties)

