#!/usr/bin/env python3
"""Time the exhaustive search and play a round-robin between difficulty tiers."""
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from noughts.arena import play_match, tally
from noughts.board import Mark, new_board
from noughts.selector import Difficulty
from noughts.solver import best_move
from noughts.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    half = 1.96 * (s / math.sqrt(len(values)))
    return m, half


def main() -> int:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--repeats", type=int, default=3, help="timed runs of the empty-board search")
    p.add_argument("--games", type=int, default=20, help="games per tier pairing")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    p.add_argument("--log-dir", type=Path, default=Path("runs"))
    ns = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="benchmarks", log_dir=ns.log_dir):
        log_params({"repeats": ns.repeats, "games": ns.games, "seed": ns.seed})
        times: List[float] = []
        for _ in range(ns.repeats):
            t0 = time.perf_counter()
            best_move(new_board(), Mark.X)
            times.append(time.perf_counter() - t0)
        m, h = ci95(times)
        logging.info("empty-board minimax: mean=%.3fs ± %.3fs (95%% CI)", m, h)
        metrics: Dict[str, float] = {"minimax_empty_mean_s": m, "minimax_empty_ci95_half_s": h}

        rng = np.random.default_rng(ns.seed)
        for x_tier in Difficulty:
            for o_tier in Difficulty:
                records = [play_match(x_tier, o_tier, rng) for _ in range(ns.games)]
                counts = tally(records)
                key = f"{x_tier.name.lower()}_vs_{o_tier.name.lower()}"
                logging.info("%s: X=%d O=%d draw=%d", key, counts["x"], counts["o"], counts["draw"])
                metrics[f"{key}_x_rate"] = counts["x"] / ns.games
                metrics[f"{key}_o_rate"] = counts["o"] / ns.games
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
