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
"""Central configuration for officiating rules, ratings and announcements."""

from __future__ import annotations

from dataclasses import dataclass, field

from linesman.engine.physics import MovementProperties


@dataclass(slots=True)
class PitchConfig:
    """Stadium landmarks used by the offside and shot heuristics.

    Parameters
    ----------
    goal_x : float, default=700.0
        Distance of each goal centre from the halfway line along x.
    attacking_box_x : float, default=200.0
        Kicks beyond this x (mirrored for the away side) count as shots.
    goal_width : float, default=120.0
        Maximum absolute y for a kick to be aimed at goal. Also the numerator
        of the expected-goals heuristic.
    offside_line_x : float, default=15.0
        A player beyond this x in the opponent half is penalised. Equal to the
        player disc radius, so only a disc fully across the halfway line counts.
    """

    goal_x: float = 700.0
    attacking_box_x: float = 200.0
    goal_width: float = 120.0
    offside_line_x: float = 15.0


@dataclass(slots=True)
class PenaltyConfig:
    """Timings and movement overrides for offside penalties.

    Parameters
    ----------
    duration : float, default=30.0
        Seconds a penalty lasts before it expires on a later tick.
    pause_duration : float, default=2.0
        Seconds play stays paused after a new penalty is called.
    penalised_movement : MovementProperties
        Disc properties applied while the penalty is active.
    normal_movement : MovementProperties
        Disc properties restored once the penalty ends.
    """

    duration: float = 30.0
    pause_duration: float = 2.0
    penalised_movement: MovementProperties = field(
        default_factory=lambda: MovementProperties(inverse_mass=1.4, acceleration=0.07)
    )
    normal_movement: MovementProperties = field(
        default_factory=lambda: MovementProperties(inverse_mass=1.0, acceleration=0.1)
    )


@dataclass(slots=True)
class ShotConfig:
    """Parameters for the speed and expected-goals heuristics.

    Parameters
    ----------
    tick_rate : float, default=60.0
        Host ticks per second.
    speed_unit_scale : float, default=0.05
        Conversion from stadium units per second to announced mph.
    min_shot_distance : float, default=1.0
        Floor applied to the shot distance before dividing.
    xgot_decimals : int, default=2
        Rounding applied to each expected-goals increment.
    """

    tick_rate: float = 60.0
    speed_unit_scale: float = 0.05
    min_shot_distance: float = 1.0
    xgot_decimals: int = 2


@dataclass(slots=True)
class RatingConfig:
    """Rating deltas applied at the end of a ranked match.

    Parameters
    ----------
    initial_rating : int, default=800
        Rating assigned to a newly seen player.
    rating_floor : int, default=800
        Ratings are never lowered below this value.
    win_delta : int, default=40
        Change applied to ranked players on the winning side.
    loss_delta : int, default=-30
        Change applied to every other ranked player on a team.
    require_league_mode : bool, default=True
        Only update ratings when league mode is enabled.
    """

    initial_rating: int = 800
    rating_floor: int = 800
    win_delta: int = 40
    loss_delta: int = -30
    require_league_mode: bool = True


@dataclass(slots=True)
class CommandConfig:
    """Chat keywords recognised by the command dispatcher.

    Parameters
    ----------
    join_ranked : str, default="-ranked"
        Opt the sender into ranked matches.
    toggle_league : str, default="-league"
        Admin-only toggle of league mode.
    query_rating : str, default="-elo"
        Privately report the sender's rating and tier.
    """

    join_ranked: str = "-ranked"
    toggle_league: str = "-league"
    query_rating: str = "-elo"


@dataclass(slots=True)
class AnnouncementConfig:
    """Colours and labels used for spectator-facing messages.

    Parameters
    ----------
    league_name : str, default="ACE"
        Name used in welcome messages.
    success_color : int
        Confirmations, welcomes and penalty expiry.
    warning_color : int
        Penalties and unranked notices.
    info_color : int
        League-mode changes and rating replies.
    goal_color : int
        Goal announcements.
    stats_color : int
        Post-match statistics header.
    admin_chat_color : int
        Chat lines sent by admins.
    member_chat_color : int
        Chat lines sent by everyone else.
    """

    league_name: str = "ACE"
    success_color: int = 0x00FF00
    warning_color: int = 0xFF0000
    info_color: int = 0x00FFFF
    goal_color: int = 0xFFFF00
    stats_color: int = 0xFFFFFF
    admin_chat_color: int = 0xFF0000
    member_chat_color: int = 0x32CD32


@dataclass(slots=True)
class OfficiatingConfig:
    """Top-level container for all engine tuning structures.

    Parameters
    ----------
    pitch : PitchConfig, default=PitchConfig()
        Stadium landmarks.
    penalty : PenaltyConfig, default=PenaltyConfig()
        Offside penalty timings and movement overrides.
    shot : ShotConfig, default=ShotConfig()
        Ball speed and expected-goals parameters.
    rating : RatingConfig, default=RatingConfig()
        Ranked match rating rules.
    commands : CommandConfig, default=CommandConfig()
        Chat command keywords.
    announcements : AnnouncementConfig, default=AnnouncementConfig()
        Message colours and labels.
    """

    pitch: PitchConfig = field(default_factory=PitchConfig)
    penalty: PenaltyConfig = field(default_factory=PenaltyConfig)
    shot: ShotConfig = field(default_factory=ShotConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)
    commands: CommandConfig = field(default_factory=CommandConfig)
    announcements: AnnouncementConfig = field(default_factory=AnnouncementConfig)


ENGINE_CONFIG = OfficiatingConfig()
"""Singleton-style access to the default engine configuration."""
