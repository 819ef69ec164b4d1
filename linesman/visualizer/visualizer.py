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
"""Spectator view of a local room: pitch, players, penalties and announcements."""
import threading
from typing import Callable, Optional, Tuple

try:
    import pygame
except Exception:
    pygame = None

from linesman.engine.local_host import LocalMatchHost
from linesman.engine.match_engine import OfficiatingEngine
from linesman.engine.physics import Vector2D
from linesman.models.team import HOME

PITCH_HALF_HEIGHT = 300.0


def _world_to_screen(
    pos: Vector2D, half_width: float, half_height: float, rect: Tuple[int, int, int, int]
) -> Tuple[int, int]:
    """Map stadium coordinates onto the pitch rectangle.

    Parameters
    ----------
    pos : Vector2D
        Stadium position.
    half_width : float
        Half the stadium length along x.
    half_height : float
        Half the stadium height along y.
    rect : Tuple[int, int, int, int]
        Pitch rectangle as ``(left, top, width, height)`` in pixels.

    Returns
    -------
    Tuple[int, int]
        Screen coordinates.
    """
    left, top, width, height = rect
    sx = int((pos.x + half_width) / (2 * half_width) * width) + left
    sy = int((half_height - pos.y) / (2 * half_height) * height) + top
    return sx, sy


def start_visualizer(
    engine: OfficiatingEngine,
    host: LocalMatchHost,
    screen_size: Tuple[int, int] = (1050, 680),
    fps: int = 30,
    start_callback: Optional[Callable[[], Optional[threading.Thread]]] = None,
) -> None:
    """Open a pygame window showing the room until it is closed.

    Returns immediately when pygame is not installed.

    Parameters
    ----------
    engine : OfficiatingEngine
        Engine whose penalties and league mode are displayed.
    host : LocalMatchHost
        Room providing players, ball and the announcement feed.
    screen_size : Tuple[int, int], optional
        Window size in pixels.
    fps : int, optional
        Redraw rate.
    start_callback : Callable[[], Optional[threading.Thread]] | None, optional
        Invoked when the Start button is pressed; may return the match thread.
    """
    if pygame is None:
        return

    pygame.init()
    screen = pygame.display.set_mode(screen_size)
    pygame.display.set_caption("Linesman")
    clock = pygame.time.Clock()

    GREEN = (38, 160, 72)
    LINE = (245, 245, 245)
    HOME_COLOR = (200, 30, 30)
    AWAY_COLOR = (30, 90, 200)
    PENALTY_RING = (255, 140, 0)
    BALL = (245, 245, 245)
    TEXT = (20, 20, 20)

    font = pygame.font.SysFont(None, 18)
    feed_font = pygame.font.SysFont(None, 16)
    button_rect = pygame.Rect(screen_size[0] - 150, 8, 140, 32)
    match_thread: Optional[threading.Thread] = None
    goal_x = engine.config.pitch.goal_x
    feed_height = 140
    pitch_rect = (20, 50, screen_size[0] - 40, screen_size[1] - 60 - feed_height)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and button_rect.collidepoint(event.pos):
                if match_thread is None and start_callback is not None:
                    match_thread = start_callback()

        screen.fill((0, 0, 0))
        pygame.draw.rect(screen, GREEN, pitch_rect)
        pygame.draw.rect(screen, LINE, pitch_rect, 3)
        centre_x = pitch_rect[0] + pitch_rect[2] // 2
        pygame.draw.line(screen, LINE, (centre_x, pitch_rect[1]), (centre_x, pitch_rect[1] + pitch_rect[3]), 2)

        penalised = set(engine.penalised_player_ids())
        for player in host.get_player_list():
            if player.team is None:
                continue
            sx, sy = _world_to_screen(player.position, goal_x, PITCH_HALF_HEIGHT, pitch_rect)
            if player.player_id in penalised:
                pygame.draw.circle(screen, PENALTY_RING, (sx, sy), 14)
            pygame.draw.circle(screen, HOME_COLOR if player.team == HOME else AWAY_COLOR, (sx, sy), 10)
            label = font.render(str(player.player_id), True, TEXT)
            screen.blit(label, (sx - label.get_width() // 2, sy - label.get_height() // 2))

        ball = host.get_ball_position()
        if ball is not None:
            pygame.draw.circle(screen, BALL, _world_to_screen(ball, goal_x, PITCH_HALF_HEIGHT, pitch_rect), 6)

        mode = "League mode ON" if engine.league_mode else "League mode off"
        screen.blit(font.render(mode, True, LINE), (20, 16))
        pygame.draw.rect(screen, (70, 160, 70), button_rect, border_radius=6)
        caption = "Start Match" if match_thread is None else "Running..."
        screen.blit(font.render(caption, True, LINE), (button_rect.x + 28, button_rect.y + 9))

        feed_top = screen_size[1] - feed_height
        for idx, announcement in enumerate(host.announcements[-9:]):
            color = announcement.color if announcement.color is not None else 0xFFFFFF
            rgb = ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
            screen.blit(feed_font.render(announcement.text, True, rgb), (20, feed_top + idx * 15))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
