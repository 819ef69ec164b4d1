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
"""Utilities that synthesise players for quick demo matches."""
import random
from typing import List, Optional

from linesman.engine.physics import Vector2D
from linesman.models.player import Player
from linesman.models.team import AWAY, HOME, attack_direction

FIRST_NAMES = ["John", "James", "David", "Michael", "Robert", "Carlos", "Juan", "Luis"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Rodriguez"]


def generate_random_player(
    id: int,
    name: Optional[str] = None,
    team: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """Generate a player standing somewhere in their own half.

    Parameters
    ----------
    id : int
        Unique identifier assigned to the created player.
    name : Optional[str]
        Display name to apply; a pseudo-random name is chosen when omitted.
    team : Optional[str]
        Side to join; spectators stay at the origin.
    rng : Optional[random.Random]
        Random source, the module generator when omitted.

    Returns
    -------
    Player
        A newly constructed player.
    """
    rng = rng or random.Random()
    if name is None:
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"

    position = Vector2D(0.0, 0.0)
    if team is not None:
        # Own half is the side opposite the attacking direction.
        position = Vector2D(-attack_direction(team) * rng.uniform(100.0, 500.0), rng.uniform(-200.0, 200.0))
    return Player(player_id=id, name=name, team=team, position=position)


def generate_lineup(per_side: int = 3, starting_player_id: int = 1, seed: Optional[int] = None) -> List[Player]:
    """Generate an even lineup for both sides.

    Parameters
    ----------
    per_side : int
        Players on each team.
    starting_player_id : int
        Identifier assigned to the first player; others follow sequentially.
    seed : Optional[int]
        Seed for reproducible names and positions.

    Returns
    -------
    List[Player]
        Home players first, then away players.
    """
    if per_side < 1:
        raise ValueError("Each side needs at least one player")
    rng = random.Random(seed)
    players = []
    player_id = starting_player_id
    for side in (HOME, AWAY):
        for _ in range(per_side):
            players.append(generate_random_player(player_id, team=side, rng=rng))
            player_id += 1
    return players
