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
"""Event domain models for the officiating engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class MatchEvent:
    """Snapshot of a noteworthy moment during a match.

    Parameters
    ----------
    timestamp : float
        Clock value when the event occurred.
    event_type : str
        Category of event (for example ``"goal"`` or ``"penalty"``).
    team : str | None
        Side associated with the event, when any.
    description : str
        Human-readable summary of what happened.
    """

    timestamp: float
    event_type: str  # goal, penalty, penalty_expired, league_mode, match_end
    team: Optional[str]
    description: str


@dataclass(frozen=True, slots=True)
class Announcement:
    """Message the engine asks the host to display.

    Parameters
    ----------
    text : str
        Message body.
    target : int | None, optional
        Recipient player id, or ``None`` to broadcast.
    color : int | None, optional
        RGB colour; ``None`` lets the host pick its default.
    style : str | None, optional
        Font style such as ``"bold"``.
    """

    text: str
    target: Optional[int] = None
    color: Optional[int] = None
    style: Optional[str] = None

    @property
    def is_broadcast(self) -> bool:
        """Return ``True`` when every player should see the message."""
        return self.target is None
