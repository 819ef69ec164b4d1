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
"""Tests for utility modules (generator, roster, debug, demo)."""

import json
from pathlib import Path

import pytest

from linesman.engine.local_host import LocalMatchHost
from linesman.engine.match_engine import OfficiatingEngine
from linesman.engine.scheduler import ManualScheduler, SimulatedClock
from linesman.models.team import AWAY, HOME
from linesman.utils.debug import MatchDebugger
from linesman.utils.demo import DemoMatch
from linesman.utils.generator import generate_lineup, generate_random_player
from linesman.utils.roster import load_players_from_json, player_from_dict

DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "players.json"


class TestGenerator:
    """Tests for generator utility functions."""

    def test_generate_random_player(self) -> None:
        """Test generating a random player."""
        player = generate_random_player(id=1)
        assert player.player_id == 1
        assert len(player.name) > 0
        assert player.team is None

    def test_players_start_in_own_half(self) -> None:
        """Home players start at negative x, away players at positive x."""
        home = generate_random_player(id=1, team=HOME)
        away = generate_random_player(id=2, team=AWAY)
        assert home.position.x < 0
        assert away.position.x > 0

    def test_generate_lineup(self) -> None:
        """A lineup has unique sequential ids split evenly across sides."""
        players = generate_lineup(per_side=2, starting_player_id=10, seed=3)
        assert [p.player_id for p in players] == [10, 11, 12, 13]
        assert [p.team for p in players] == [HOME, HOME, AWAY, AWAY]

    def test_generate_lineup_is_reproducible(self) -> None:
        """The same seed produces the same lineup."""
        first = generate_lineup(seed=42)
        second = generate_lineup(seed=42)
        assert [(p.name, p.position) for p in first] == [(p.name, p.position) for p in second]

    def test_empty_lineup_rejected(self) -> None:
        """Each side needs a player."""
        with pytest.raises(ValueError):
            generate_lineup(per_side=0)


class TestRoster:
    """Tests for roster loading utility functions."""

    def test_player_from_dict(self) -> None:
        """Test loading a player from dictionary."""
        player = player_from_dict({"id": 4, "name": "Megan", "team": "away", "position": [150, -20]})
        assert player.player_id == 4
        assert player.team == AWAY
        assert player.position.x == 150.0 and player.position.y == -20.0
        assert not player.admin

    def test_player_from_dict_defaults(self) -> None:
        """Missing values fall back to a spectator at the origin."""
        player = player_from_dict({"id": 9})
        assert player.name == "player_9"
        assert player.team is None
        assert player.position.x == 0.0

    def test_player_from_dict_unknown_team(self) -> None:
        """Unknown sides are rejected."""
        with pytest.raises(ValueError):
            player_from_dict({"id": 1, "name": "x", "team": "red"})

    def test_load_players_from_json(self) -> None:
        """The bundled roster loads in document order."""
        players = load_players_from_json(str(DATA_FILE))
        assert len(players) == 7
        assert players[0].name == "Dewi" and players[0].admin
        assert players[-1].team is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_players_from_json(str(tmp_path / "absent.json"))

    def test_duplicate_ids(self, tmp_path: Path) -> None:
        """Two entries with one id are rejected."""
        path = tmp_path / "dupes.json"
        path.write_text(json.dumps({"players": [{"id": 1, "name": "a"}, {"id": 1, "name": "b"}]}))
        with pytest.raises(ValueError):
            load_players_from_json(str(path))

    def test_missing_players_section(self, tmp_path: Path) -> None:
        """Documents without a players list are rejected."""
        path = tmp_path / "empty.json"
        path.write_text("{}")
        with pytest.raises(KeyError):
            load_players_from_json(str(path))


class TestDebugger:
    """Tests for the match debugger."""

    def test_in_memory_debugger(self) -> None:
        """Without an output directory entries are only kept in memory."""
        debugger = MatchDebugger(output_dir=None)
        debugger.log_match_event(12.34, "penalty", "Player 1 offside")
        debugger.log_rating_change(1, 800, 840, "[UNRANKED]")
        events = debugger.get_recent_events()
        assert debugger.log_file is None
        assert "Time: 12.3s | Event: penalty | Details: Player 1 offside" in events[0]
        assert "RATING: Player 1 | 800 -> 840 (+40)" in events[1]
        assert events[1].startswith("00002 ")

    def test_file_debugger(self, tmp_path: Path) -> None:
        """Entries are written to a session file."""
        debugger = MatchDebugger(output_dir=str(tmp_path))
        debugger.log_error("host_call_failed", "announce: boom")
        debugger.log_announcement("hello", target=3)
        debugger.close()

        logs = list(tmp_path.glob("match_debug_*.txt"))
        assert len(logs) == 1
        content = logs[0].read_text(encoding="utf-8")
        assert "ERROR: Type: host_call_failed | Details: announce: boom" in content
        assert "ANNOUNCEMENT: To: player 3 | hello" in content

    def test_recent_events_limit(self) -> None:
        """Only the latest entries are returned."""
        debugger = MatchDebugger(output_dir=None)
        for idx in range(5):
            debugger.log_match_event(float(idx), "tick", str(idx))
        assert len(debugger.get_recent_events(limit=2)) == 2
        assert debugger.get_recent_events(limit=2)[-1].endswith("Details: 4")


class TestDemoMatch:
    """Headless demo matches."""

    def test_headless_demo_runs(self) -> None:
        """A short simulated match reaches the post-match summary."""
        players = load_players_from_json(str(DATA_FILE))
        clock = SimulatedClock()
        scheduler = ManualScheduler(clock)
        host = LocalMatchHost()
        engine = OfficiatingEngine(host, scheduler=scheduler, clock=clock, debugger=MatchDebugger(output_dir=None))

        demo = DemoMatch(engine, host, players, duration=10.0, seed=1, clock=clock, scheduler=scheduler)
        score = demo.run()

        assert engine.league_mode
        assert engine.context.result_recorded
        assert score.home >= 0 and score.away >= 0
        assert "--- MATCH STATS ---" in host.messages_for(1)
        assert not demo.is_running
        assert clock() >= 10.0
