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
"""Chat command handling and formatted chat relay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from linesman.engine.events import Announcement

if TYPE_CHECKING:
    from linesman.engine.config import AnnouncementConfig, CommandConfig
    from linesman.engine.match_engine import MatchContext
    from linesman.engine.rating import RatingEngine
    from linesman.models.player import Player


@dataclass
class CommandResult:
    """Outcome of dispatching one chat message.

    Parameters
    ----------
    command : str | None
        Name of the recognised command, ``None`` for plain chat.
    announcements : List[Announcement]
        Messages the engine should send.
    """

    command: Optional[str]
    announcements: List[Announcement] = field(default_factory=list)

    @property
    def handled(self) -> bool:
        """Return ``True`` when the text was a recognised command."""
        return self.command is not None


class CommandDispatcher:
    """Turn chat text into ranked sign-ups, league toggles or chat lines.

    The dispatcher keeps no state of its own; it reads and mutates the match
    context and the ratings held by the rating engine.

    Parameters
    ----------
    context : MatchContext
        Shared match state holding the league-mode flag.
    ratings : RatingEngine
        Access to ranked flags and tiers.
    commands : CommandConfig
        Command keywords.
    announcements : AnnouncementConfig
        Message colours.
    """

    def __init__(
        self,
        context: "MatchContext",
        ratings: "RatingEngine",
        commands: "CommandConfig",
        announcements: "AnnouncementConfig",
    ) -> None:
        self.context = context
        self.ratings = ratings
        self.commands = commands
        self.colors = announcements

    def dispatch(self, player: "Player", text: str) -> CommandResult:
        """Handle a chat message sent by ``player``.

        A league toggle from a non-admin is not a command and is relayed as
        ordinary chat.

        Parameters
        ----------
        player : Player
            Sender.
        text : str
            Raw message text.

        Returns
        -------
        CommandResult
            Recognised command (if any) and the messages to send.
        """
        if text == self.commands.join_ranked:
            return CommandResult("join_ranked", [self._join_ranked(player)])
        if text == self.commands.toggle_league and player.admin:
            return CommandResult("toggle_league", [self._toggle_league()])
        if text == self.commands.query_rating:
            return CommandResult("query_rating", [self._query_rating(player)])
        return CommandResult(None, [self._chat_line(player, text)])

    def _join_ranked(self, player: "Player") -> Announcement:
        """Opt ``player`` into ranked matches.

        Parameters
        ----------
        player : Player
            Sender.

        Returns
        -------
        Announcement
            Private confirmation, or a notice when already signed up.
        """
        if self.ratings.opt_in(player.player_id):
            text = "✅ You are now signed up for Ranked Matches!"
        else:
            text = "ℹ️ You are already signed up for Ranked Matches."
        return Announcement(text, player.player_id, self.colors.success_color)

    def _toggle_league(self) -> Announcement:
        """Flip league mode.

        Returns
        -------
        Announcement
            Broadcast describing the new state.
        """
        self.context.league_mode = not self.context.league_mode
        state = "ENABLED ✅" if self.context.league_mode else "DISABLED ❌"
        return Announcement(f"⚠️ League Mode is now {state}", None, self.colors.info_color, "bold")

    def _query_rating(self, player: "Player") -> Announcement:
        """Report the sender's rating privately.

        Parameters
        ----------
        player : Player
            Sender.

        Returns
        -------
        Announcement
            Rating and tier, or an unranked notice.
        """
        if not self.ratings.is_ranked(player.player_id):
            return Announcement(
                f"❌ You are Unranked. Type {self.commands.join_ranked} to join.",
                player.player_id,
                self.colors.warning_color,
            )
        rating = self.ratings.registry.rating_for(player.player_id).rating
        tier = self.ratings.tier_for(player.player_id)
        return Announcement(f"📊 Your ELO: {rating} {tier.name}", player.player_id, self.colors.info_color)

    def _chat_line(self, player: "Player", text: str) -> Announcement:
        """Format ordinary chat with the sender's role and tier.

        Parameters
        ----------
        player : Player
            Sender.
        text : str
            Raw message text.

        Returns
        -------
        Announcement
            Broadcast chat line.
        """
        tag = "[ADMIN]" if player.admin else "[MEMBER]"
        if self.ratings.is_ranked(player.player_id):
            tag = f"{tag} {self.ratings.tier_for(player.player_id).name}"
        color = self.colors.admin_chat_color if player.admin else self.colors.member_chat_color
        return Announcement(f"{tag} {player.name}: {text}", None, color)
