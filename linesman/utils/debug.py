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
"""Structured log of an officiated session.

Every entry is one ``[HH:MM:SS] CATEGORY: details`` line. Categories are
``MATCH_EVENT``, ``ANNOUNCEMENT``, ``RATING`` and ``ERROR``; the parser in
``tools/analyze_match_log.py`` relies on this layout.
"""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple

RECENT_EVENT_LIMIT = 200


class MatchDebugger:
    """Thread-safe session logger shared by the engine and the referee.

    Parameters
    ----------
    output_dir : str | None, default="debug_logs"
        Directory receiving one ``match_debug_<timestamp>.txt`` file per
        session, created when missing. ``None`` keeps entries in memory only.
    """

    def __init__(self, output_dir: Optional[str] = "debug_logs") -> None:
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.log_file: Optional[TextIO] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=RECENT_EVENT_LIMIT)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Close any open log file and open a fresh one."""
        self.close()
        if self.output_dir is None:
            return
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"match_debug_{self.session_start}.txt"
        self.log_file = open(path, "w", encoding="utf-8")
        self.log_file.write(f"=== Officiating Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_match_event(self, match_time: float, event_type: str, description: str) -> None:
        """Record a penalty, goal, shot or other match event.

        Parameters
        ----------
        match_time : float
            Engine clock value in seconds.
        event_type : str
            Short label such as ``"penalty"`` or ``"goal"``.
        description : str
            Human-readable summary.
        """
        self._write_log("MATCH_EVENT", f"Time: {match_time:.1f}s | Event: {event_type} | Details: {description}")

    def log_announcement(self, text: str, target: Optional[int] = None) -> None:
        """Record a message sent to the room.

        Parameters
        ----------
        text : str
            Message body.
        target : int | None
            Recipient id, ``None`` for a broadcast.
        """
        audience = "all" if target is None else f"player {target}"
        self._write_log("ANNOUNCEMENT", f"To: {audience} | {text}")

    def log_rating_change(self, player_id: int, before: int, after: int, tier: str) -> None:
        """Record a post-match rating update.

        Parameters
        ----------
        player_id : int
            Affected player.
        before : int
            Rating before the match.
        after : int
            Rating after the match.
        tier : str
            Tier name for the new rating.
        """
        self._write_log("RATING", f"Player {player_id} | {before} -> {after} ({after - before:+d}) | Tier: {tier}")

    def log_error(self, error_type: str, description: str) -> None:
        """Record a failed host call or an ignored event.

        Parameters
        ----------
        error_type : str
            Label such as ``"host_call_failed"``.
        description : str
            What failed and why.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, category: str, details: str) -> None:
        """Number an entry, keep it for live displays and append it to the file.

        Parameters
        ----------
        category : str
            Entry category.
        details : str
            Formatted entry body.
        """
        entry = f"[{time.strftime('%H:%M:%S')}] {category}: {details}"
        with self._lock:
            self._recent_events.append((self._line_number, entry))
            self._line_number += 1
            if self.log_file:
                self.log_file.write(entry + "\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest entries prefixed with their line number.

        Parameters
        ----------
        limit : int
            Maximum number of entries.

        Returns
        -------
        List[str]
            Oldest first, at most ``limit`` entries.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file if one is open."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
