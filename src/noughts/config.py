"""Environment-driven settings: output locations, default difficulty, git metadata.

Environment first, with fallbacks that still work when installed as a
package or run from an arbitrary CWD.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .selector import Difficulty


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Order: NOUGHTS_REPO_ROOT -> nearest parent containing .git -> CWD."""
    env = os.getenv("NOUGHTS_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def results_dir() -> Path:
    p = os.getenv("NOUGHTS_RESULTS")
    return Path(p) if p else repo_root() / "results"


def default_difficulty() -> Difficulty:
    raw = os.getenv("NOUGHTS_DIFFICULTY")
    if raw is None:
        return Difficulty.HEURISTIC
    return Difficulty.parse(raw)


def _git(*args: str) -> str | None:
    try:
        return subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None


def get_git_commit() -> str | None:
    out = _git("rev-parse", "HEAD")
    return out.strip() if out else None


def get_git_is_dirty() -> bool | None:
    """True if there are uncommitted changes, False if clean, None if unknown."""
    out = _git("status", "--porcelain")
    if out is None:
        return None
    return len(out.strip()) > 0
