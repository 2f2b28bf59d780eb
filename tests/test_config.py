from pathlib import Path

import noughts.config as C
from noughts.config import default_difficulty, repo_root, results_dir
from noughts.selector import Difficulty


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("NOUGHTS_REPO_ROOT", raising=False)
    monkeypatch.delenv("NOUGHTS_RESULTS", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(C, "_find_git_root", lambda start: None)

    assert repo_root() == tmp_path
    assert results_dir() == tmp_path / "results"


def test_env_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("NOUGHTS_REPO_ROOT", str(tmp_path / "root"))
    assert repo_root() == tmp_path / "root"
    assert results_dir() == tmp_path / "root" / "results"
    monkeypatch.setenv("NOUGHTS_RESULTS", str(tmp_path / "elsewhere"))
    assert results_dir() == tmp_path / "elsewhere"


def test_default_difficulty_from_env(monkeypatch):
    monkeypatch.delenv("NOUGHTS_DIFFICULTY", raising=False)
    assert default_difficulty() is Difficulty.HEURISTIC
    monkeypatch.setenv("NOUGHTS_DIFFICULTY", "3")
    assert default_difficulty() is Difficulty.EXHAUSTIVE
    monkeypatch.setenv("NOUGHTS_DIFFICULTY", "nope")
    assert default_difficulty() is Difficulty.HEURISTIC
