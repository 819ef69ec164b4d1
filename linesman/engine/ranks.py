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
"""Rating tiers and the lookup from a rating value to its tier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True, slots=True)
class RankTier:
    """Named rating bracket shown next to ranked players.

    Parameters
    ----------
    name : str
        Label displayed in chat, for example ``"[GOLD]"``.
    threshold : int
        Minimum rating (inclusive) needed to reach the tier.
    color : int
        RGB colour associated with the tier.
    """

    name: str
    threshold: int
    color: int


class RankTable:
    """Ordered rating tiers with a total lookup.

    Tiers must be sorted by strictly descending threshold. The last tier acts
    as the catch-all: any rating below every threshold, including negative
    values, resolves to it.

    Parameters
    ----------
    tiers : Sequence[RankTier]
        Tiers ordered from the highest threshold to the lowest.

    Raises
    ------
    ValueError
        When no tiers are given or the thresholds are not strictly descending.
    """

    def __init__(self, tiers: Sequence[RankTier]) -> None:
        if not tiers:
            raise ValueError("Rank table needs at least one tier")
        for higher, lower in zip(tiers, tiers[1:]):
            if higher.threshold <= lower.threshold:
                raise ValueError(
                    f"Rank tiers must be sorted by descending threshold: "
                    f"{higher.name} ({higher.threshold}) before {lower.name} ({lower.threshold})"
                )
        self.tiers: Tuple[RankTier, ...] = tuple(tiers)

    @property
    def floor_tier(self) -> RankTier:
        """Return the catch-all tier at the bottom of the table."""
        return self.tiers[-1]

    def tier_for(self, rating: int) -> RankTier:
        """Return the first tier whose threshold ``rating`` meets or exceeds.

        Parameters
        ----------
        rating : int
            Rating value to classify.

        Returns
        -------
        RankTier
            Matching tier, or the floor tier when no threshold is met.
        """
        for tier in self.tiers:
            if rating >= tier.threshold:
                return tier
        return self.floor_tier

    def __len__(self) -> int:
        return len(self.tiers)


DEFAULT_RANK_TABLE = RankTable(
    [
        RankTier("[CHAMPION]", 2900, 0x0000FF),
        RankTier("[ELITE 2]", 2300, 0xFFA500),
        RankTier("[ELITE 1]", 1900, 0xFFA500),
        RankTier("[PLAT 3]", 1600, 0x800080),
        RankTier("[PLAT 2]", 1350, 0x800080),
        RankTier("[PLAT 1]", 1150, 0x800080),
        RankTier("[GOLD]", 1000, 0xFFD700),
        RankTier("[SILVER]", 925, 0xC0C0C0),
        RankTier("[BRONZE]", 850, 0x8B4513),
        RankTier("[UNRANKED]", 800, 0x808080),
    ]
)
