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
"""Utilities for constructing room rosters from serialized data sources.

The demo entry point and the tools read a JSON document listing who joins
the room, on which side and where they stand at kick-off. Missing values
fall back to spectators at the origin so partial fixtures remain usable.
"""
import json
from pathlib import Path
from typing import List

from linesman.engine.physics import Vector2D
from linesman.models.player import Player


def player_from_dict(d: dict) -> Player:
    """Build a ``Player`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping containing the serialized player information. Supported keys
        are ``id``, ``name``, ``team`` (``"home"``, ``"away"`` or ``null``),
        ``admin`` and ``position`` as an ``[x, y]`` pair.

    Returns
    -------
    Player
        A fully initialised player.

    Raises
    ------
    ValueError
        When ``team`` is not a known side.

    """
    x, y = d.get("position") or (0.0, 0.0)
    return Player(
        player_id=d.get("id", 0),
        name=d.get("name", f"player_{d.get('id', 0)}"),
        team=d.get("team"),
        position=Vector2D(float(x), float(y)),
        admin=bool(d.get("admin", False)),
    )


def load_players_from_json(path: str) -> List[Player]:
    """Load the players of a room from the repository's JSON schema.

    Parameters
    ----------
    path
        The filesystem path to a document with a top-level ``players`` list.

    Returns
    -------
    List[Player]
        Players in document order.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    KeyError
        Raised when the JSON payload has no ``players`` section.
    ValueError
        Raised when two entries share an ``id``.

    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Players JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    players = [player_from_dict(entry) for entry in data["players"]]
    ids = [player.player_id for player in players]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate player ids in {path}")
    return players
