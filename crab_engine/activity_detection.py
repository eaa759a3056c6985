"""Commit activity detection for local git repositories and GitHub."""

import os
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path

from github import Github

from .constants import MAX_BRANCHES_PER_REPO, RECENT_ACTIVITY_DAYS
from .records import ActivityRecord
from .time_utils import get_current_time, parse_iso_datetime


def run_git(repo_path: Path, *args: str) -> str | None:
    """Run a git command in `repo_path`; stdout on success, None otherwise."""
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_path), *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        print(f"Warning: could not run git in {repo_path}: {e}")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def is_git_repo(path: Path) -> bool:
    return run_git(path, "rev-parse", "--git-dir") is not None


def discover_repos(root: Path) -> list[Path]:
    """
    Find repositories to watch.

    If `root` is inside a repository, only that one is tracked; otherwise
    its immediate sub-directories are scanned and sorted by name.
    """
    top_level = run_git(root, "rev-parse", "--show-toplevel")
    if top_level:
        return [Path(top_level)]

    try:
        children = sorted(child for child in root.iterdir() if child.is_dir())
    except OSError as e:
        print(f"Warning: could not scan {root}: {e}")
        return []
    return [child for child in children if (child / ".git").exists() and is_git_repo(child)]


class LocalGitTracker:
    """Watches HEAD of one or more local repositories for new commits."""

    def __init__(self, repos: list[Path]) -> None:
        self.repos = repos
        self.last_heads: dict[Path, str] = {}
        for repo in repos:
            head = self.read_head(repo)
            if head:
                self.last_heads[repo] = head

    @classmethod
    def from_directory(cls, root: Path | None = None) -> "LocalGitTracker":
        return cls(discover_repos(root or Path.cwd()))

    @staticmethod
    def read_head(repo: Path) -> str | None:
        return run_git(repo, "rev-parse", "HEAD") or None

    def repo_names(self) -> list[str]:
        return [repo.name for repo in self.repos]

    def _commit_record(self, repo: Path, commit_hash: str) -> ActivityRecord | None:
        timestamp = parse_iso_datetime(run_git(repo, "show", "-s", "--format=%cI", commit_hash))
        if timestamp is None:
            return None
        return ActivityRecord(
            timestamp=timestamp,
            activity_id=commit_hash,
            source_id=str(repo),
            source_name=repo.name,
        )

    def check_for_new_activity(self) -> list[ActivityRecord]:
        """One record per repository whose HEAD moved since the last check."""
        records = []
        for repo in self.repos:
            head = self.read_head(repo)
            if not head or self.last_heads.get(repo) == head:
                continue
            self.last_heads[repo] = head
            record = self._commit_record(repo, head)
            if record is not None:
                records.append(record)
        return records

    def recent_activity(self, days: int = RECENT_ACTIVITY_DAYS, now: datetime | None = None) -> list[ActivityRecord]:
        """Commits on HEAD from the last `days` days, across all repositories."""
        since = (now or get_current_time()) - timedelta(days=days)
        records = []
        for repo in self.repos:
            output = run_git(repo, "log", f"--since={since.isoformat()}", "--format=%H %cI")
            if not output:
                continue
            for line in output.splitlines():
                commit_hash, _, stamp = line.partition(" ")
                timestamp = parse_iso_datetime(stamp)
                if not commit_hash or timestamp is None:
                    continue
                records.append(ActivityRecord(
                    timestamp=timestamp,
                    activity_id=commit_hash,
                    source_id=str(repo),
                    source_name=repo.name,
                ))
        records.sort(key=lambda record: record.timestamp)
        return records


def get_watched_repos() -> list[str]:
    """
    Get list of GitHub repositories to watch.

    Returns list of repo names in format "owner/repo"
    """
    watched = os.environ.get("KANITOMO_WATCHED_REPOS", "")
    return [r.strip() for r in watched.split(",") if r.strip()]


def detect_github_activity(
    watched_repos: list[str],
    since: datetime,
    token: str | None = None,
    client: Github | None = None,
) -> list[ActivityRecord]:
    """
    List commits pushed to watched GitHub repositories since `since`.

    Scans the most recently updated branches of each repository (at most
    MAX_BRANCHES_PER_REPO, to stay inside API rate limits). Commits seen on
    several branches are reported once.
    """
    if client is None:
        token = token or os.environ.get("GH_TOKEN")
        if not token:
            print("Warning: GH_TOKEN not set, skipping GitHub activity")
            return []
        client = Github(token)

    records: list[ActivityRecord] = []
    seen_commits = set()

    for repo_name in watched_repos:
        try:
            repo = client.get_repo(repo_name)
            all_branches = list(repo.get_branches())
            branches = sorted(
                all_branches,
                key=lambda b: b.commit.commit.author.date,
                reverse=True,
            )[:MAX_BRANCHES_PER_REPO]
            print(f"  Checking {repo_name}: {len(branches)} branches (of {len(all_branches)} total)")
        except Exception as e:
            print(f"Error checking {repo_name}: {e}")
            continue

        for branch in branches:
            try:
                commits = repo.get_commits(sha=branch.name, since=since)
                for commit in commits:
                    commit_sha = getattr(commit, "sha", None)
                    if not commit_sha:
                        continue
                    dedupe_key = f"{repo_name}:{commit_sha}"
                    if dedupe_key in seen_commits:
                        continue
                    seen_commits.add(dedupe_key)

                    author = commit.commit.author or commit.commit.committer
                    if author is None or author.date is None:
                        continue
                    commit_time = author.date
                    if commit_time.tzinfo is None:
                        commit_time = commit_time.replace(tzinfo=timezone.utc)

                    records.append(ActivityRecord(
                        timestamp=commit_time.astimezone(timezone.utc),
                        activity_id=commit_sha,
                        source_id=repo_name,
                        source_name=repo_name.split("/")[-1],
                    ))
            except Exception as e:
                print(f"    Error checking branch {branch.name}: {e}")

    records.sort(key=lambda record: record.timestamp)
    return records
