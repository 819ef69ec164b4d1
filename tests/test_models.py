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
"""Tests for the player and score models."""

import pytest

from linesman.engine.physics import Vector2D
from linesman.models.player import Player
from linesman.models.team import AWAY, HOME, ScoreLine, attack_direction, validate_side


class TestPlayer:
    """Tests for the Player model."""

    def test_player_defaults(self) -> None:
        """A bare player is a non-admin spectator at the origin."""
        player = Player(player_id=1, name="Dewi")
        assert player.team is None
        assert not player.is_playing
        assert not player.admin
        assert player.position == Vector2D(0.0, 0.0)

    def test_unknown_side_rejected(self) -> None:
        """Only home, away and spectators are valid."""
        with pytest.raises(ValueError):
            Player(player_id=1, name="Dewi", team="red")

    def test_snapshot_detaches_position(self) -> None:
        """Moving the original does not move the snapshot."""
        player = Player(player_id=2, name="Gethin", team=HOME, position=Vector2D(10.0, 5.0))
        snapshot = player.snapshot()
        player.position.x = 300.0
        player.team = AWAY
        assert snapshot.position.x == 10.0
        assert snapshot.team == HOME
        assert snapshot.is_playing


class TestTeam:
    """Tests for sides and score lines."""

    def test_attack_direction(self) -> None:
        """Home attacks positive x, away negative x."""
        assert attack_direction(HOME) == 1
        assert attack_direction(AWAY) == -1

    def test_validate_side(self) -> None:
        """Known sides and spectators pass through unchanged."""
        assert validate_side(HOME) == HOME
        assert validate_side(None) is None
        with pytest.raises(ValueError):
            validate_side("blue")

    def test_winner(self) -> None:
        """The side with more goals wins; level scores have no winner."""
        assert ScoreLine(2, 1).winner == HOME
        assert ScoreLine(0, 3).winner == AWAY
        assert ScoreLine(1, 1).winner is None

    def test_negative_score_rejected(self) -> None:
        """A score can never be negative."""
        with pytest.raises(ValueError):
            ScoreLine(-1, 0)
