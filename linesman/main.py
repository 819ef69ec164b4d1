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
"""Entry point for a demo match officiated live, with the optional visualiser."""
import threading
import time
from pathlib import Path
from typing import List, Optional

from linesman.engine.local_host import LocalMatchHost
from linesman.engine.match_engine import OfficiatingEngine
from linesman.models.player import Player
from linesman.utils.demo import DemoMatch
from linesman.utils.generator import generate_lineup  # Fallback if no roster file
from linesman.utils.roster import load_players_from_json  # For loading saved rosters


def print_match_status(demo: DemoMatch, host: LocalMatchHost) -> None:
    """Print announcements as they are sent, from a separate thread.

    Parameters
    ----------
    demo : DemoMatch
        Running demo whose ``is_running`` flag ends the loop.
    host : LocalMatchHost
        Room whose announcement feed is printed.
    """
    printed = 0
    while demo.is_running or printed < len(host.announcements):
        for announcement in host.announcements[printed:]:
            audience = "" if announcement.target is None else f" (to #{announcement.target})"
            print(f"[{demo.match_time:6.1f}s]{audience} {announcement.text}")
        printed = len(host.announcements)
        time.sleep(0.25)


def load_roster(roster_file: Path) -> List[Player]:
    """Load the demo roster, falling back to generated players.

    Parameters
    ----------
    roster_file : Path
        JSON roster to try first.

    Returns
    -------
    List[Player]
        Players for the demo room.
    """
    if roster_file.exists():
        try:
            return load_players_from_json(str(roster_file))
        except (KeyError, ValueError) as e:
            print(f"Error loading players from {roster_file}: {e}")
            print("Falling back to generated players...")
    else:
        print(f"No roster file found at {roster_file}")
        print("Using generated players...")
    return generate_lineup(per_side=3)


def main() -> None:
    """Run a demo match against the local host, wiring optional visual output."""
    players = load_roster(Path("data/players.json"))
    host = LocalMatchHost()
    engine = OfficiatingEngine(host)
    demo = DemoMatch(engine, host, players, duration=120.0)

    match_thread: Optional[threading.Thread] = None
    status_thread: Optional[threading.Thread] = None

    def start_match() -> threading.Thread:
        nonlocal match_thread, status_thread
        if match_thread is None:
            match_thread = threading.Thread(target=demo.run, kwargs={"realtime": True})
            match_thread.start()
            status_thread = threading.Thread(target=print_match_status, args=(demo, host))
            status_thread.start()
        return match_thread

    vis_thread: Optional[threading.Thread] = None
    try:
        from linesman.visualizer.visualizer import pygame, start_visualizer

        if pygame is not None:
            vis_thread = threading.Thread(
                target=start_visualizer,
                args=(engine, host),
                kwargs={"start_callback": start_match},
            )
            vis_thread.start()
            print("Visualizer started. Press Start Match in the window to begin the match.")
    except ImportError:
        vis_thread = None

    if vis_thread is None:
        start_match()

    try:
        while True:
            if match_thread is not None:
                match_thread.join()
                break
            if vis_thread is not None and not vis_thread.is_alive():
                break
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\nMatch interrupted.")
        demo.stop()
        if match_thread is not None:
            match_thread.join()

    if status_thread is not None:
        status_thread.join(timeout=3.0)
    if vis_thread is not None and vis_thread.is_alive():
        vis_thread.join()
    engine.close()

    print(f"\nFinal Score: home {demo.score.home} - {demo.score.away} away")
    print("\nRatings:")
    for player in players:
        rating = engine.registry.rating_for(player.player_id)
        label = f"{rating.rating} {engine.ratings.tier_for(player.player_id).name}" if rating.ranked else "unranked"
        print(f"  {player.name}: {label}")


if __name__ == "__main__":
    main()
