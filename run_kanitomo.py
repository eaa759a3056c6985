#!/usr/bin/env python3
"""
Kanitomo Runner

Loads Kani's saved wellbeing, applies the decay for the time spent away,
feeds any new commit activity, runs the crab for a number of fixed ticks
and saves the result.

Environment Variables:
    KANITOMO_STATE_FILE: snapshot path (default ~/.kanitomo/state.json)
    KANITOMO_TIMEZONE: IANA timezone for calendar rules (default: system local)
    KANITOMO_WATCHED_REPOS: Comma-separated GitHub repos (e.g., "user/repo1,user/repo2")
    GH_TOKEN: GitHub API token
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from crab_engine.activity_detection import LocalGitTracker, detect_github_activity, get_watched_repos
from crab_engine.constants import DEFAULT_BOUNDS, GIT_POLL_TICKS, TICK_SECONDS
from crab_engine.engine import CrabEngine, RenderablePose
from crab_engine.pet_rules import count_today, today_by_project, week_summary
from crab_engine.state_store import get_state_path, load_state, reset_state, save_state
from crab_engine.time_utils import (
    classify_time_of_day,
    format_time_ago,
    get_current_time,
    get_timezone_name,
    local_date,
    to_local_time,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Kani the commit crab for a few ticks.")
    parser.add_argument("--reset", action="store_true", help="reset happiness, streaks and history")
    parser.add_argument("--ticks", type=int, default=200, help="number of fixed ticks to run (default: 200)")
    parser.add_argument("--state-file", type=Path, default=None, help="snapshot path")
    parser.add_argument("--feed", action="store_true", help="debug: boost happiness and celebrate")
    parser.add_argument("--punish", action="store_true", help="debug: lower happiness")
    parser.add_argument("--no-git", action="store_true", help="skip local git detection")
    return parser.parse_args(argv)


def run_ticks(
    engine: CrabEngine,
    ticks: int,
    tracker: LocalGitTracker | None = None,
    now: datetime | None = None,
) -> tuple[RenderablePose, int]:
    """
    Run `ticks` fixed steps, checking local HEADs every GIT_POLL_TICKS ticks.

    Returns the last pose and the number of commits picked up while running.
    """
    pose = engine.pose()
    accepted = 0
    for tick in range(max(0, ticks)):
        if tracker is not None and tick % GIT_POLL_TICKS == 0:
            for record in tracker.check_for_new_activity():
                is_new = engine.on_activity(
                    record.source_id, record.activity_id, record.timestamp, record.source_name, now=now
                )
                if is_new:
                    print(f"  New commit in {record.source_name}: {record.activity_id[:7]}")
                    accepted += 1
        pose = engine.tick(TICK_SECONDS, DEFAULT_BOUNDS)
    return pose, accepted


def print_activity_summary(engine: CrabEngine, today: date) -> None:
    history = engine.wellbeing.history
    timezone_name = engine.timezone_name
    print(f"  Commits today: {count_today(history, today, timezone_name)}")
    for _source_id, name, count in today_by_project(history, today, timezone_name):
        print(f"    {name}: {count} commit{'' if count == 1 else 's'}")
    print("  This week:")
    for day, count in week_summary(history, today, timezone_name):
        print(f"    {day.strftime('%a %b %d')}: {count}")

def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    state_file = args.state_file or get_state_path()
    timezone_name = get_timezone_name()
    now = get_current_time()

    print("=" * 50)
    print("Kanitomo")
    print("=" * 50)

    if args.reset:
        reset_state(state_file, now)
        print(f"Stats reset: {state_file}")
        return 0

    wellbeing, last_seen_before = load_state(state_file, now=now, timezone_name=timezone_name)
    engine = CrabEngine(wellbeing, timezone_name=timezone_name)

    new_records = []
    tracker = None
    if not args.no_git:
        tracker = LocalGitTracker.from_directory()
        print(f"\nTracking {len(tracker.repos)} local repositories:")
        for name in tracker.repo_names():
            print(f"  - {name}")
        # Commits made while Kani was closed count as new; older ones only seed the streak.
        older = []
        for record in tracker.recent_activity(now=now):
            if wellbeing.has_activity(record.activity_id):
                continue
            if record.timestamp > last_seen_before:
                new_records.append(record)
            else:
                older.append(record)
        engine.import_history(older, now=now)

    watched_repos = get_watched_repos()
    if watched_repos:
        print(f"\nWatching {len(watched_repos)} GitHub repositories:")
        for repo in watched_repos:
            print(f"  - {repo}")
        new_records.extend(detect_github_activity(watched_repos, since=last_seen_before))

    accepted = 0
    for record in new_records:
        if engine.on_activity(record.source_id, record.activity_id, record.timestamp, record.source_name, now=now):
            accepted += 1
    print(f"\nNew activity: {accepted}")
    engine.refresh_streak(now)

    if args.feed:
        engine.feed()
    if args.punish:
        engine.punish()

    pose, polled = run_ticks(engine, args.ticks, tracker, now=now)
    if polled:
        print(f"New activity while running: {polled}")

    last_activity = max((record.timestamp for record in wellbeing.history), default=None)
    print("\nKani:")
    print(pose.art)
    print(f"  Mood: {engine.mood.label}")
    print(f"  Happiness: {engine.happiness}")
    print(f"  Streak: {wellbeing.streak} (best {wellbeing.best_streak})")
    print(f"  Last commit: {format_time_ago(last_activity, now)}")
    print(f"  Time of day: {classify_time_of_day(to_local_time(now, timezone_name).hour)}")
    print(f'  Says: "{engine.message}"')

    print("\nActivity:")
    print_activity_summary(engine, local_date(now, timezone_name))

    print(f"\nWriting {state_file}...")
    save_state(state_file, wellbeing, now)

    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
