"""
Computer-vs-computer self play between difficulty tiers.

Each match runs through the same turn controller as an interactive game,
with no human marks. Results are written as CSV (always reproducible for a
fixed seed), optionally Parquet, plus a manifest.json with tallies and
provenance.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .board import Mark
from .config import get_git_commit, get_git_is_dirty
from .selector import Difficulty
from .snapshot import format_snapshot
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run
from .turns import Game, GameState, Won

ARENA_VERSION = "1.0.0"
GAMES_CSV = "arena_games.csv"
GAMES_PARQUET = "arena_games.parquet"
FIELDNAMES = ["game", "x_tier", "o_tier", "start", "moves", "final", "winner", "plies"]


@dataclass
class MatchRecord:
    x_tier: Difficulty
    o_tier: Difficulty
    start: str
    moves: List[int]
    final: str
    winner: str  # "X", "O" or "draw"

    @property
    def plies(self) -> int:
        return len(self.moves)

    def as_row(self, game: int) -> Dict[str, Any]:
        return {
            "game": game,
            "x_tier": self.x_tier.name.lower(),
            "o_tier": self.o_tier.name.lower(),
            "start": self.start,
            "moves": " ".join(str(m + 1) for m in self.moves),
            "final": self.final,
            "winner": self.winner,
            "plies": self.plies,
        }


@dataclass
class ArenaArgs:
    out: Path
    x_tier: Difficulty = Difficulty.HEURISTIC
    o_tier: Difficulty = Difficulty.RANDOM
    games: int = 10
    seed: int = 0
    start: Optional[str] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    tracking: bool = False
    log_dir: Optional[Path] = None
    cli_argv: List[str] | None = None


def play_match(
    x_tier: Difficulty,
    o_tier: Difficulty,
    rng: np.random.Generator,
    start: Optional[str] = None,
) -> MatchRecord:
    state = GameState.from_snapshot(start) if start else GameState.new()
    game = Game(
        state,
        human_marks=(),
        write=lambda _msg: None,
        rng=rng,
        tiers={Mark.X: x_tier, Mark.O: o_tier},
    )
    status = game.play()
    return MatchRecord(
        x_tier=x_tier,
        o_tier=o_tier,
        start=format_snapshot(state.board),
        moves=list(game.state.history),
        final=format_snapshot(game.state.board),
        winner=status.mark.symbol if isinstance(status, Won) else "draw",
    )


def tally(records: List[MatchRecord]) -> Dict[str, int]:
    counts = {"x": 0, "o": 0, "draw": 0}
    for r in records:
        counts[r.winner.lower()] += 1
    return counts


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = importlib.import_module(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def run_arena(args: ArenaArgs) -> Path:
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    if args.games < 1:
        raise ValueError(f"games must be >= 1, got {args.games}")
    have_parquet = (
        importlib.util.find_spec("pandas") is not None
        and importlib.util.find_spec("pyarrow") is not None
    )
    missing_msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # fail before any file is written
        raise RuntimeError(missing_msg)

    args.out.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(args.seed)

    with maybe_mlflow_run(args.tracking, run_name="arena", log_dir=args.log_dir):
        log_params({
            "x_tier": args.x_tier.name.lower(),
            "o_tier": args.o_tier.name.lower(),
            "games": args.games,
            "seed": args.seed,
            "start": args.start or "",
        })
        logging.info(
            "Playing %d games: X=%s vs O=%s",
            args.games, args.x_tier.name.lower(), args.o_tier.name.lower(),
        )
        records: List[MatchRecord] = []
        for g in range(args.games):
            records.append(play_match(args.x_tier, args.o_tier, rng, start=args.start))
            logging.debug("game %d: %s", g, records[-1].winner)
        counts = tally(records)
        logging.info("Results: X=%d O=%d draw=%d", counts["x"], counts["o"], counts["draw"])
        rows = [r.as_row(i) for i, r in enumerate(records)]

        files: Dict[str, Optional[str]] = {"games_csv": None, "games_parquet": None}
        if fmt in {"csv", "both"}:
            csv_path = args.out / GAMES_CSV
            with csv_path.open("w", newline="") as f:
                w = csv.DictWriter(f, fieldnames=FIELDNAMES)
                w.writeheader()
                w.writerows(rows)
            files["games_csv"] = str(csv_path)
            logging.info("Wrote %s (%d rows)", csv_path, len(rows))

        if fmt in {"parquet", "both"}:
            if have_parquet:
                import pandas as pd  # type: ignore

                pq_path = args.out / GAMES_PARQUET
                pd.DataFrame(rows, columns=FIELDNAMES).to_parquet(pq_path, index=False)
                files["games_parquet"] = str(pq_path)
                logging.info("Wrote %s", pq_path)
            else:
                logging.warning(
                    "%s Proceeding with CSV only; manifest will record parquet_written=false.",
                    missing_msg,
                )

        manifest = {
            "arena_version": ARENA_VERSION,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "args": {
                "x_tier": args.x_tier.name.lower(),
                "o_tier": args.o_tier.name.lower(),
                "games": args.games,
                "seed": args.seed,
                "start": args.start,
                "format": fmt,
            },
            "cli_argv": args.cli_argv,
            "git_commit": get_git_commit(),
            "git_is_dirty": get_git_is_dirty(),
            "python": {
                "python_version": sys.version.split(" ")[0],
                "packages": _package_versions(),
            },
            "results": counts,
            "mean_plies": float(np.mean([r.plies for r in records])),
            "files": files,
            "checksums": {k: _sha256_file(Path(p)) for k, p in files.items() if p is not None},
            "parquet_written": files["games_parquet"] is not None,
        }
        manifest_path = args.out / "manifest.json"
        manifest_path.write_text(json.dumps(manifest, indent=2))
        logging.info("Wrote %s", manifest_path)

        log_metrics({
            "x_wins": float(counts["x"]),
            "o_wins": float(counts["o"]),
            "draws": float(counts["draw"]),
            "mean_plies": manifest["mean_plies"],
        })
        log_artifact(manifest_path)
        for p in files.values():
            if p is not None:
                log_artifact(Path(p))

    return args.out
