from __future__ import annotations

import argparse
import logging
import os
import random
from pathlib import Path
from typing import Optional

import numpy as np

from .arena import ArenaArgs, run_arena
from .board import EMPTY, Board, Mark
from .config import default_difficulty, results_dir
from .errors import NoughtsError
from .game_basics import is_valid_state, outcome
from .render import INDEX_MAP, render_board
from .selector import Difficulty, heuristic_move
from .snapshot import Snapshot, parse_snapshot
from .solver import pick_best, score_moves
from .tactics import blocking_moves, fork_moves, gives_opponent_immediate_win, immediate_winning_moves
from .turns import Game, GameState

COMPUTER_CHOICES = {
    "X": (Mark.X,),
    "O": (Mark.O,),
    "none": (),
    "both": (Mark.X, Mark.O),
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="noughts", description="Tic-tac-toe with a computer opponent")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Global seed for reproducibility")
    p.add_argument(
        "--deterministic",
        action="store_true",
        help="Enable deterministic mode (sets PYTHONHASHSEED, seeds numpy)",
    )

    p_play = sub.add_parser("play", help="Play an interactive game on the console")
    p_play.add_argument(
        "--difficulty",
        default=None,
        help="Computer strength: 1=random, 2=heuristic, 3=exhaustive "
             "(default: $NOUGHTS_DIFFICULTY or 2; invalid values fall back to 2)",
    )
    p_play.add_argument(
        "--computer",
        choices=sorted(COMPUTER_CHOICES),
        default="O",
        help="Which mark(s) the computer plays (default: O)",
    )
    p_play.add_argument("--board", help="Start from a snapshot, e.g. XO__X____ (X, O and _)")

    p_sol = sub.add_parser("solve", help="Score every move by exhaustive minimax for the side to move")
    p_sol.add_argument("--board", required=True, help="Snapshot, e.g. X_XO_____")

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks for the side to move")
    p_tac.add_argument("--board", required=True, help="Snapshot, e.g. XX_OO____")

    p_arena = sub.add_parser("arena", help="Computer-vs-computer self play between difficulty tiers")
    p_arena.add_argument("--x", default="2", help="Difficulty for X (1-3, default: 2)")
    p_arena.add_argument("--o", default="1", help="Difficulty for O (1-3, default: 1)")
    p_arena.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_arena.add_argument("--start", default=None, help="Snapshot every game starts from")
    p_arena.add_argument(
        "--out", type=Path, default=None, help="Output directory (default: $NOUGHTS_RESULTS/arena)"
    )
    p_arena.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_arena.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_arena.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    return p


def _set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    random.seed(seed)
    np.random.seed(seed)


def _set_deterministic_env(seed: Optional[int]) -> None:
    if seed is not None:
        os.environ.setdefault("PYTHONHASHSEED", str(seed))
    # Avoid BLAS variability if present
    for var in ("MKL_NUM_THREADS", "OPENBLAS_NUM_THREADS", "NUMEXPR_NUM_THREADS", "OMP_NUM_THREADS"):
        os.environ.setdefault(var, "1")
    _set_global_seed(seed)


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _load_board(raw: str) -> Snapshot | None:
    try:
        return parse_snapshot(raw)
    except NoughtsError as e:
        logging.error("%s. Must be 9 chars of X/O/_.", e)
        return None


def _load_reachable_board(raw: str) -> Snapshot | None:
    snap = _load_board(raw)
    if snap is not None and not is_valid_state(snap.board):
        logging.error("Board is not a valid reachable state.")
        return None
    return snap


def _log_if_decided(board: Board) -> bool:
    res = outcome(board)
    if res.is_terminal:
        logging.info("terminal: winner=%s", res.winner.symbol if res.winner else "draw")
    return res.is_terminal


def _cmd_play(ns: argparse.Namespace) -> int:
    difficulty = default_difficulty() if ns.difficulty is None else Difficulty.parse(ns.difficulty)
    if ns.board:
        snap = _load_board(ns.board)
        if snap is None:
            return 2
        state = GameState(board=snap.board, to_move=snap.to_move, difficulty=difficulty)
    else:
        state = GameState.new(difficulty)
    computer = COMPUTER_CHOICES[ns.computer]
    human_marks = [m for m in Mark if m not in computer]
    rng = np.random.default_rng(ns.seed)
    logging.debug("difficulty=%s computer=%s", difficulty.name.lower(), ns.computer)

    print("Positions:\n" + INDEX_MAP)
    game = Game(state, human_marks=human_marks, rng=rng)
    try:
        game.play()
    except (EOFError, KeyboardInterrupt):
        print()
        logging.info("Input closed; game abandoned.")
        return 1
    return 0


def _cmd_solve(ns: argparse.Namespace) -> int:
    snap = _load_reachable_board(ns.board)
    if snap is None:
        return 2
    if _log_if_decided(snap.board):
        return 0
    scores = score_moves(snap.board, snap.to_move)
    idx, score = pick_best(scores)
    logging.info("to_move=%s scores=%s", snap.to_move.symbol, dict(scores))
    logging.info("best=%d score=%d", idx, score)
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    snap = _load_reachable_board(ns.board)
    if snap is None:
        return 2
    b, mark = snap.board, snap.to_move
    if _log_if_decided(b):
        return 0
    unsafe = [i for i, v in enumerate(b) if v == EMPTY and gives_opponent_immediate_win(b, mark, i)]
    logging.info(
        "to_move=%s wins=%s blocks=%s forks=%s unsafe=%s heuristic=%d",
        mark.symbol,
        immediate_winning_moves(b, mark),
        blocking_moves(b, mark),
        fork_moves(b, mark),
        unsafe,
        heuristic_move(b, mark),
    )
    print(render_board(b))
    return 0


def _cmd_arena(ns: argparse.Namespace, argv: list[str] | None) -> int:
    if ns.games < 1:
        logging.error("--games must be >= 1: %s", ns.games)
        return 2
    if ns.start is not None and _load_board(ns.start) is None:
        return 2
    out = ns.out if ns.out is not None else results_dir() / "arena"
    try:
        run_arena(ArenaArgs(
            out=out,
            x_tier=Difficulty.parse(ns.x),
            o_tier=Difficulty.parse(ns.o),
            games=ns.games,
            seed=ns.seed if ns.seed is not None else 0,
            start=ns.start,
            format=ns.format,
            tracking=ns.tracking == "mlflow",
            log_dir=ns.log_dir,
            cli_argv=list(argv) if argv is not None else None,
        ))
    except RuntimeError as e:
        logging.error("%s", e)
        return 2
    logging.info("Arena results in: %s", out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if ns.version:
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("noughts"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    if ns.deterministic or ns.seed is not None:
        _set_deterministic_env(ns.seed)

    if ns.cmd == "play":
        return _cmd_play(ns)
    if ns.cmd == "solve":
        return _cmd_solve(ns)
    if ns.cmd == "tactics":
        return _cmd_tactics(ns)
    if ns.cmd == "arena":
        return _cmd_arena(ns, argv)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
