"""JSON file IO helpers for state snapshots."""

import json
import os
from pathlib import Path


def load_json_file(path: Path) -> dict | None:
    """Load a JSON object from `path`; None when missing or unreadable."""
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
        print(f"Warning: Could not load previous state: {e}")
        return None

    if not isinstance(data, dict):
        print(f"Warning: Ignoring state file {path}: expected a JSON object")
        return None
    return data


def write_json_file(path: Path, data: dict) -> None:
    """Write data to a JSON file atomically."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
