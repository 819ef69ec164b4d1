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
"""Post-match rating updates for ranked players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

from linesman.engine.ranks import DEFAULT_RANK_TABLE, RankTable, RankTier

if TYPE_CHECKING:
    from linesman.engine.config import RatingConfig
    from linesman.engine.player_state import PlayerRegistry
    from linesman.models.player import Player
    from linesman.models.team import ScoreLine


@dataclass(slots=True)
class RatingChange:
    """Rating movement applied to one player after a match.

    Parameters
    ----------
    player_id : int
        Affected player.
    before : int
        Rating before the update.
    after : int
        Rating after the update, clamped to the floor.
    won : bool
        Whether the player was on the winning side.
    """

    player_id: int
    before: int
    after: int
    won: bool

    @property
    def delta(self) -> int:
        """Return the effective change after clamping."""
        return self.after - self.before


class RatingEngine:
    """Apply fixed win/loss deltas to ranked players and look up their tier.

    The update is deliberately not idempotent: each call applies the deltas
    again. Callers must invoke :meth:`apply_match_result` once per match.

    Parameters
    ----------
    registry : PlayerRegistry
        Source of per-player ratings (get-or-create).
    config : RatingConfig
        Deltas and floor.
    rank_table : RankTable, optional
        Tier table used for display.
    """

    def __init__(
        self,
        registry: "PlayerRegistry",
        config: "RatingConfig",
        rank_table: RankTable = DEFAULT_RANK_TABLE,
    ) -> None:
        self.registry = registry
        self.config = config
        self.rank_table = rank_table

    def tier_for(self, player_id: int) -> RankTier:
        """Return the tier matching the current rating of ``player_id``.

        Parameters
        ----------
        player_id : int
            Player to classify.

        Returns
        -------
        RankTier
            Tier from the rank table.
        """
        return self.rank_table.tier_for(self.registry.rating_for(player_id).rating)

    def is_ranked(self, player_id: int) -> bool:
        """Return whether ``player_id`` opted into ranked matches.

        Parameters
        ----------
        player_id : int
            Player to check.

        Returns
        -------
        bool
            The player's ranked flag.
        """
        return self.registry.rating_for(player_id).ranked

    def opt_in(self, player_id: int) -> bool:
        """Mark ``player_id`` as ranked.

        Parameters
        ----------
        player_id : int
            Player signing up.

        Returns
        -------
        bool
            ``True`` if the flag changed, ``False`` if already ranked.
        """
        rating = self.registry.rating_for(player_id)
        if rating.ranked:
            return False
        rating.ranked = True
        return True

    def apply_match_result(self, players: Iterable["Player"], score: "ScoreLine") -> List[RatingChange]:
        """Update ranked players on a team according to the final score.

        Parameters
        ----------
        players : Iterable[Player]
            Players present when the match ended.
        score : ScoreLine
            Final score; a tie applies no change.

        Returns
        -------
        List[RatingChange]
            One entry per updated player, empty on a tie.
        """
        winner: Optional[str] = score.winner
        if winner is None:
            return []

        changes: List[RatingChange] = []
        for player in players:
            if player.team is None:
                continue
            rating = self.registry.rating_for(player.player_id)
            if not rating.ranked:
                continue
            won = player.team == winner
            delta = self.config.win_delta if won else self.config.loss_delta
            before = rating.rating
            rating.rating = max(self.config.rating_floor, before + delta)
            changes.append(RatingChange(player.player_id, before, rating.rating, won))
        return changes

    def rating_suffix(self, player_id: int) -> str:
        """Return the rating fragment appended to a ranked player's stat line.

        Parameters
        ----------
        player_id : int
            Player whose rating is formatted.

        Returns
        -------
        str
            ``" / <rating> ELO <tier>"`` for ranked players, ``""`` otherwise.
        """
        rating = self.registry.rating_for(player_id)
        if not rating.ranked:
            return ""
        return f" / {rating.rating} ELO {self.rank_table.tier_for(rating.rating).name}"
