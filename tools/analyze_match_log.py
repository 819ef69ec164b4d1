#!/usr/bin/env python3
"""
Summarise a match debug log: penalties, goals, shots, ratings and host errors.

Usage:
    python tools/analyze_match_log.py <log_file_path>
"""

import re
import sys
from collections import Counter, defaultdict
from pathlib import Path


def parse_log_file(log_path):
    """Parse the debug log and extract officiating metrics."""

    event_types = Counter()
    penalties = []
    expiries = []
    goals = []
    shots = defaultdict(list)
    ratings = []
    errors = []

    with open(log_path, 'r', encoding='utf-8') as f:
        for line in f:
            if ' ERROR: ' in line:
                errors.append(line.split(' ERROR: ', 1)[1].strip())
                continue

            rating_match = re.search(r'RATING: Player (\d+) \| (\d+) -> (\d+)', line)
            if rating_match:
                player_id, before, after = rating_match.groups()
                ratings.append((player_id, int(before), int(after)))
                continue

            match = re.search(r'Time: ([\d.]+)s \| Event: (\w+) \| Details: (.+)$', line)
            if not match:
                continue

            time, event_type, details = match.groups()
            time = float(time)
            event_types[event_type] += 1

            if event_type == 'penalty':
                penalties.append((time, details))
            elif event_type == 'penalty_expired':
                expiries.append((time, details))
            elif event_type == 'goal':
                goals.append((time, details))
            elif event_type == 'shot':
                player_match = re.search(r'Player (\d+).*xGOT \+([\d.]+)', details)
                if player_match:
                    shots[player_match.group(1)].append(float(player_match.group(2)))

    return {
        'event_types': event_types,
        'penalties': penalties,
        'expiries': expiries,
        'goals': goals,
        'shots': shots,
        'ratings': ratings,
        'errors': errors,
    }


def analyze_penalties(penalties, expiries, goals):
    """Report how often penalties were called and how they ended."""
    print("\n=== PENALTY ANALYSIS ===")
    print(f"Penalties called: {len(penalties)}")
    print(f"Penalties expired: {len(expiries)}")

    if not penalties:
        print("  ⚠️  No penalties - league mode may have been off")
        return

    offenders = Counter()
    for _, details in penalties:
        player_match = re.search(r'Player (\d+)', details)
        if player_match:
            offenders[player_match.group(1)] += 1
    worst, count = offenders.most_common(1)[0]
    print(f"  Most penalised: Player #{worst} ({count} penalties)")

    lifted_by_goals = len(penalties) - len(expiries)
    if goals and lifted_by_goals > 0:
        print(f"  Penalties lifted early (goal or still active): {lifted_by_goals}")


def analyze_shooting(shots, goals):
    """Report shots on target and expected goals per player."""
    print("\n=== SHOOTING ANALYSIS ===")
    total_shots = sum(len(v) for v in shots.values())
    total_xgot = sum(sum(v) for v in shots.values())
    print(f"Shots on target: {total_shots}")
    print(f"Goals: {len(goals)}")
    print(f"Total xGOT: {total_xgot:.2f}")

    for player_id, values in sorted(shots.items(), key=lambda item: -sum(item[1])):
        print(f"  Player #{player_id}: {len(values)} SOT, {sum(values):.2f} xGOT")


def analyze_ratings(ratings, errors):
    """Report rating movements and host call failures."""
    print("\n=== RATING ANALYSIS ===")
    if not ratings:
        print("  No rating changes recorded")
    for player_id, before, after in ratings:
        print(f"  Player #{player_id}: {before} -> {after} ({after - before:+d})")

    if errors:
        print(f"\n⚠️  {len(errors)} errors logged")
        for error in errors[:10]:
            print(f"  {error}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/analyze_match_log.py <log_file_path>")
        print("\nExample:")
        print("  python tools/analyze_match_log.py debug_logs/match_debug_20251117_222236.txt")
        sys.exit(1)

    log_path = Path(sys.argv[1])

    if not log_path.exists():
        print(f"Error: Log file not found: {log_path}")
        sys.exit(1)

    print(f"Analyzing: {log_path.name}")
    print("=" * 60)

    data = parse_log_file(log_path)

    print("\n=== EVENT SUMMARY ===")
    for event_type, count in data['event_types'].most_common(15):
        print(f"  {event_type}: {count}")

    analyze_penalties(data['penalties'], data['expiries'], data['goals'])
    analyze_shooting(data['shots'], data['goals'])
    analyze_ratings(data['ratings'], data['errors'])

    print("\n" + "=" * 60)
    print("Analysis complete!")


if __name__ == '__main__':
    main()
