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
"""Per-player session state: identity, statistics and rating."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from linesman.models.player import Player


@dataclass
class PlayerStatistics:
    """Counters accumulated for one player over the session.

    Parameters
    ----------
    goals : int, optional
        Goals credited to the player.
    assists : int, optional
        Assists credited to the player.
    shots_on_target : int, optional
        Kicks classified as aimed at the opposing goal.
    kicks : int, optional
        Every recorded ball kick.
    expected_goals_on_target : float, optional
        Sum of the per-shot expected-goals increments.
    """

    goals: int = 0
    assists: int = 0
    shots_on_target: int = 0
    kicks: int = 0
    expected_goals_on_target: float = 0.0


@dataclass
class PlayerRating:
    """Rating value and ranked opt-in flag for one player.

    Parameters
    ----------
    rating : int, optional
        Current rating value.
    ranked : bool, optional
        Whether the player signed up for ranked matches.
    """

    rating: int = 800
    ranked: bool = False


class PlayerRegistry:
    """Connected players plus the statistics and ratings keyed by their id.

    Statistics and ratings are created on first use through the get-or-create
    accessors and outlive the player's connection; only
    :meth:`reset_session` discards them.

    Parameters
    ----------
    initial_rating : int, optional
        Rating given to newly created :class:`PlayerRating` entries.
    """

    def __init__(self, initial_rating: int = 800) -> None:
        self.initial_rating = initial_rating
        self.players: Dict[int, Player] = {}
        self.statistics: Dict[int, PlayerStatistics] = {}
        self.ratings: Dict[int, PlayerRating] = {}

    def join(self, player: Player) -> Player:
        """Register a connected player and ensure its state exists.

        Parameters
        ----------
        player : Player
            Player reported by the host.

        Returns
        -------
        Player
            The stored player record.
        """
        self.players[player.player_id] = player
        self.statistics_for(player.player_id)
        self.rating_for(player.player_id)
        return player

    def leave(self, player_id: int) -> Optional[Player]:
        """Forget a disconnected player but keep their statistics and rating.

        Parameters
        ----------
        player_id : int
            Identifier of the departing player.

        Returns
        -------
        Optional[Player]
            The removed record, or ``None`` when the id was not connected.
        """
        return self.players.pop(player_id, None)

    def get(self, player_id: int) -> Optional[Player]:
        """Return the connected player with ``player_id`` if any.

        Parameters
        ----------
        player_id : int
            Identifier to look up.

        Returns
        -------
        Optional[Player]
            Stored player record or ``None``.
        """
        return self.players.get(player_id)

    def connected(self) -> List[Player]:
        """Return connected players in join order.

        Returns
        -------
        List[Player]
            Snapshot list of the stored player records.
        """
        return list(self.players.values())

    def refresh(self, players: Iterable[Player]) -> None:
        """Update stored team, position and admin flag from a host snapshot.

        Unknown ids are registered on the fly so a missed join event never
        leaves a player without state.

        Parameters
        ----------
        players : Iterable[Player]
            Players as currently reported by the host.
        """
        for reported in players:
            stored = self.players.get(reported.player_id)
            if stored is None:
                self.join(reported.snapshot())
                continue
            stored.team = reported.team
            stored.position = reported.position.copy()
            stored.admin = reported.admin

    def statistics_for(self, player_id: int) -> PlayerStatistics:
        """Return the statistics for ``player_id``, creating them on first use.

        Parameters
        ----------
        player_id : int
            Identifier of the player.

        Returns
        -------
        PlayerStatistics
            The single statistics instance for the id.
        """
        stats = self.statistics.get(player_id)
        if stats is None:
            stats = self.statistics[player_id] = PlayerStatistics()
        return stats

    def rating_for(self, player_id: int) -> PlayerRating:
        """Return the rating for ``player_id``, creating it on first use.

        Parameters
        ----------
        player_id : int
            Identifier of the player.

        Returns
        -------
        PlayerRating
            The single rating instance for the id.
        """
        rating = self.ratings.get(player_id)
        if rating is None:
            rating = self.ratings[player_id] = PlayerRating(rating=self.initial_rating)
        return rating

    def reset_session(self) -> None:
        """Drop all statistics and ratings, keeping connected players zeroed."""
        self.statistics.clear()
        self.ratings.clear()
        for player_id in self.players:
            self.statistics_for(player_id)
            self.rating_for(player_id)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.players

    def __len__(self) -> int:
        return len(self.players)
