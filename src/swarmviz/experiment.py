# experiment.py
from __future__ import annotations
import csv, json, time
from pathlib import Path
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz.driver import SwarmDriver
from swarmviz.functions import SUCCESS_THRESHOLDS, Objective, get_objective

"""
Repeated headless runs per objective, persisted as CSV so they can be compared.
"""

RUN_FIELDS = ["objective", "run", "best_f", "best_x", "best_y", "success", "time_s"]


def run_seed(seed0: int, objective: Objective, run: int) -> int:
    """Deterministic per-(objective, run) seed; stable across interpreter runs."""
    offset = list(Objective).index(objective) * 100_003 + run
    return (seed0 + offset) % (2**31 - 1)


def run_suite(
    *,
    outdir: str | Path,
    objectives: Iterable,
    runs: int,
    steps: int,
    params: PSOParams,
    n_particles: int,
    seed0: int,
    thresholds: Mapping[Objective, float | None] = SUCCESS_THRESHOLDS,
):
    """
    Args:
      outdir: output directory for CSVs and curves.
      objectives: objective tags or names to run.
      runs: number of independent runs per objective.
      steps: PSO steps per run.
      params: coefficients shared by every run.
      n_particles: swarm size for every run.
      seed0: base seed; each run derives its own via `run_seed`.
      thresholds: objective -> success threshold, or None to skip success.
    Returns:
      (runs_csv_path, summary_csv_path)
    """
    objectives = [get_objective(o) for o in objectives]
    if not objectives:
        raise ValueError("objectives must be non-empty.")
    if not isinstance(runs, int) or runs <= 0:
        raise ValueError("runs must be a positive int.")
    if not isinstance(steps, int) or steps <= 0:
        raise ValueError("steps must be a positive int.")

    outdir = Path(outdir)
    curves_dir = outdir / "curves"
    curves_dir.mkdir(parents=True, exist_ok=True)

    log_path = outdir / "runs.csv"
    with log_path.open("w", newline="") as fh:
        w = csv.writer(fh)
        w.writerow(RUN_FIELDS)

        for obj in objectives:
            thr = thresholds.get(obj)
            cfg = SwarmConfig(n_particles=n_particles, objective=obj, params=params)

            for r in range(runs):
                driver = SwarmDriver(cfg, rng=np.random.default_rng(run_seed(seed0, obj, r)))

                t0 = time.time()
                curve = np.empty(steps, dtype=float)
                for t in range(steps):
                    curve[t] = driver.step().global_best.fitness
                dt = time.time() - t0

                # inf only survives if no particle ever improved; keep it out of the .npy
                np.save(curves_dir / f"{obj.value}_run{r}.npy", np.where(np.isfinite(curve), curve, np.nan))

                gb = driver.state.global_best
                success = int(gb.fitness <= thr) if thr is not None else 0
                w.writerow([
                    obj.value,
                    r,
                    gb.fitness,
                    gb.x,
                    gb.y,
                    success,
                    float(dt),
                ])

    manifest = {
        "objectives": [o.value for o in objectives],
        "runs": runs,
        "steps": steps,
        "n_particles": n_particles,
        "seed0": seed0,
        "params": vars(params),
    }
    (outdir / "manifest.json").write_text(json.dumps(manifest, indent=2))

    agg_path = outdir / "summary.csv"
    _aggregate(log_path, agg_path)
    return log_path, agg_path


def _aggregate(log_csv: Path, out_csv: Path):
    df = pd.read_csv(log_csv)
    g = df.groupby("objective", as_index=False)
    summ = g["best_f"].agg(mean="mean", median="median", min="min", max="max", std="std")
    sr = g["success"].mean().rename(columns={"success": "success_rate"})
    out = pd.merge(summ, sr, on="objective")
    out.to_csv(out_csv, index=False)
