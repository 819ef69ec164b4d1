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
"""Tests for kick attribution, shots on target and goal credit."""

from linesman.engine.config import ENGINE_CONFIG
from linesman.engine.physics import Vector2D
from linesman.engine.player_state import PlayerRegistry
from linesman.engine.statistics import KickerChain, StatisticsTracker
from linesman.models.player import Player
from linesman.models.team import AWAY, HOME


def _build_tracker() -> StatisticsTracker:
    """Create a tracker over an empty registry with the default geometry."""
    return StatisticsTracker(PlayerRegistry(), ENGINE_CONFIG.pitch, ENGINE_CONFIG.shot)


class TestKickerChain:
    """Two-slot history of distinct kickers."""

    def test_distinct_kickers_shift(self) -> None:
        """A new kicker pushes the previous one into second place."""
        chain = KickerChain()
        chain.record(Player(1, "A", HOME))
        chain.record(Player(2, "B", HOME))
        assert chain.last.player_id == 2
        assert chain.second_last.player_id == 1

    def test_repeated_touch_keeps_passer(self) -> None:
        """Dribbling does not erase the previous kicker."""
        chain = KickerChain()
        chain.record(Player(1, "A", HOME))
        chain.record(Player(2, "B", HOME))
        chain.record(Player(2, "B", HOME))
        assert chain.last.player_id == 2
        assert chain.second_last.player_id == 1

    def test_alternating_kickers(self) -> None:
        """A, B, A leaves A last and B second last."""
        chain = KickerChain()
        for player_id, name in ((1, "A"), (2, "B"), (1, "A")):
            chain.record(Player(player_id, name, HOME))
        assert chain.last.player_id == 1
        assert chain.second_last.player_id == 2

    def test_clear(self) -> None:
        """Clearing forgets both slots."""
        chain = KickerChain()
        chain.record(Player(1, "A", HOME))
        chain.clear()
        assert chain.last is None and chain.second_last is None


class TestShotClassification:
    """Aiming checks and expected goals on target."""

    def test_home_aiming_box(self) -> None:
        """Home shots must come from beyond x=200 and inside the goal width."""
        tracker = _build_tracker()
        assert tracker.is_aiming(HOME, Vector2D(250.0, 0.0))
        assert not tracker.is_aiming(HOME, Vector2D(200.0, 0.0))
        assert not tracker.is_aiming(HOME, Vector2D(250.0, 120.0))
        assert not tracker.is_aiming(HOME, Vector2D(-250.0, 0.0))

    def test_away_aiming_box(self) -> None:
        """Away shots mirror the home box."""
        tracker = _build_tracker()
        assert tracker.is_aiming(AWAY, Vector2D(-250.0, -119.0))
        assert not tracker.is_aiming(AWAY, Vector2D(-200.0, 0.0))
        assert not tracker.is_aiming(AWAY, Vector2D(250.0, 0.0))

    def test_spectator_never_aims(self) -> None:
        """Spectators cannot take shots."""
        tracker = _build_tracker()
        assert not tracker.is_aiming(None, Vector2D(600.0, 0.0))

    def test_expected_goal_increment(self) -> None:
        """The increment is goal width over distance to the goal centre."""
        tracker = _build_tracker()
        assert tracker.expected_goal_increment(HOME, Vector2D(400.0, 0.0)) == 0.4
        assert tracker.expected_goal_increment(AWAY, Vector2D(-460.0, 0.0)) == 0.5

    def test_shot_from_goal_centre_stays_finite(self) -> None:
        """Distance is floored at one unit."""
        tracker = _build_tracker()
        assert tracker.expected_goal_increment(HOME, Vector2D(700.0, 0.0)) == 120.0

    def test_record_kick_on_target(self) -> None:
        """A shot counts a kick, a shot on target and its xGOT."""
        tracker = _build_tracker()
        outcome = tracker.record_kick(Player(1, "A", HOME), Vector2D(400.0, 0.0))
        stats = tracker.registry.statistics_for(1)
        assert outcome.on_target
        assert outcome.xgot == 0.4
        assert (stats.kicks, stats.shots_on_target) == (1, 1)
        assert stats.expected_goals_on_target == 0.4

    def test_record_kick_off_target(self) -> None:
        """Kicks outside the box only count as kicks."""
        tracker = _build_tracker()
        outcome = tracker.record_kick(Player(1, "A", HOME), Vector2D(0.0, 0.0))
        stats = tracker.registry.statistics_for(1)
        assert not outcome.on_target
        assert outcome.xgot == 0.0
        assert (stats.kicks, stats.shots_on_target) == (1, 0)

    def test_record_kick_without_ball(self) -> None:
        """A missing ball position still attributes the kick."""
        tracker = _build_tracker()
        outcome = tracker.record_kick(Player(1, "A", HOME), None)
        assert not outcome.on_target
        assert tracker.chain.last.player_id == 1


class TestGoalCredit:
    """Scorer and assister attribution."""

    def test_goal_with_assist(self) -> None:
        """A pass followed by a finish credits both players."""
        tracker = _build_tracker()
        tracker.record_kick(Player(1, "A", HOME), Vector2D(0.0, 0.0))
        tracker.record_kick(Player(2, "B", HOME), Vector2D(500.0, 0.0))

        credit = tracker.record_goal(HOME)
        assert credit is not None
        assert credit.scorer.player_id == 2
        assert credit.assister.player_id == 1
        assert tracker.registry.statistics_for(2).goals == 1
        assert tracker.registry.statistics_for(1).assists == 1
        assert tracker.chain.last is None

    def test_solo_goal_has_no_assist(self) -> None:
        """A lone kicker scores without an assist."""
        tracker = _build_tracker()
        tracker.record_kick(Player(1, "A", HOME), Vector2D(500.0, 0.0))
        credit = tracker.record_goal(HOME)
        assert credit.assister is None
        assert tracker.registry.statistics_for(1).goals == 1

    def test_opponent_pass_is_not_an_assist(self) -> None:
        """An interception does not give the opponent an assist."""
        tracker = _build_tracker()
        tracker.record_kick(Player(3, "C", AWAY), Vector2D(0.0, 0.0))
        tracker.record_kick(Player(1, "A", HOME), Vector2D(500.0, 0.0))
        credit = tracker.record_goal(HOME)
        assert credit.assister is None
        assert tracker.registry.statistics_for(3).assists == 0

    def test_own_goal_credits_nobody(self) -> None:
        """An own goal leaves every counter untouched and clears the chain."""
        tracker = _build_tracker()
        tracker.record_kick(Player(1, "A", HOME), Vector2D(0.0, 0.0))
        tracker.record_kick(Player(3, "C", AWAY), Vector2D(-600.0, 0.0))
        assert tracker.record_goal(HOME) is None
        assert tracker.registry.statistics_for(3).goals == 0
        assert tracker.registry.statistics_for(1).assists == 0
        assert tracker.chain.last is None

    def test_goal_without_kicker(self) -> None:
        """A goal with no recorded kick credits nobody."""
        tracker = _build_tracker()
        assert tracker.record_goal(AWAY) is None

    def test_stat_line(self) -> None:
        """The stat line shows goals, assists, shots and xGOT."""
        tracker = _build_tracker()
        tracker.record_kick(Player(1, "A", HOME), Vector2D(400.0, 0.0))
        tracker.record_goal(HOME)
        assert tracker.stat_line(1) == "1G / 0A / 1 SOT / 0.40 xGOT"
