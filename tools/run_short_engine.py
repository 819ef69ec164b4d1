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
"""Run a short headless demo match using the players in players.json."""
from pathlib import Path

from linesman.engine.local_host import LocalMatchHost
from linesman.engine.match_engine import OfficiatingEngine
from linesman.engine.scheduler import ManualScheduler, SimulatedClock
from linesman.utils.demo import DemoMatch
from linesman.utils.roster import load_players_from_json


def run_short_simulation(duration_seconds: float = 120.0, seed: int = 7) -> None:
    """Run a demo match on a simulated clock as fast as possible.

    Parameters
    ----------
    duration_seconds : float
        How long to play in match time (default 120 seconds).
    seed : int
        Seed for the scripted players.
    """
    data_path = Path(__file__).parent.parent / "data" / "players.json"
    players = load_players_from_json(str(data_path))

    clock = SimulatedClock()
    scheduler = ManualScheduler(clock)
    host = LocalMatchHost()
    engine = OfficiatingEngine(host, scheduler=scheduler, clock=clock)

    demo = DemoMatch(engine, host, players, duration=duration_seconds, seed=seed, clock=clock, scheduler=scheduler)
    score = demo.run()
    engine.close()

    for announcement in host.announcements:
        print(announcement.text)
    print(f"Done running {duration_seconds}s match: home {score.home} - {score.away} away")


if __name__ == "__main__":
    run_short_simulation()
