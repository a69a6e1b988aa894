from __future__ import annotations
import argparse
from math import isfinite
from pathlib import Path

import numpy as np

from swarmviz.config import PSOParams, SwarmConfig
from swarmviz.constants import (
    C_RANGE,
    DEFAULT_INTERVAL_MS,
    DEFAULT_PARTICLES,
    MAX_PARTICLES,
    MIN_PARTICLES,
    PRESETS,
    W_RANGE,
)
from swarmviz.driver import SwarmDriver
from swarmviz.functions import Objective

# ---------- Argument types ----------
def _parse_preset(value: str) -> str:
    """Return an uppercase preset name if it exists, else raise."""
    name = value.upper()
    if name not in PRESETS:
        valid = ", ".join(sorted(PRESETS))
        raise argparse.ArgumentTypeError(f"Unknown preset '{value}'. Choose from: {valid}.")
    return name

def _particle_count(value: str) -> int:
    n = int(value)
    if not MIN_PARTICLES <= n <= MAX_PARTICLES:
        raise argparse.ArgumentTypeError(
            f"particle count must be in [{MIN_PARTICLES}, {MAX_PARTICLES}], got {n}.")
    return n

def _bounded_float(lo: float, hi: float):
    def parse(value: str) -> float:
        x = float(value)
        if not (isfinite(x) and lo <= x <= hi):
            raise argparse.ArgumentTypeError(f"value must be in [{lo}, {hi}], got {value}.")
        return x
    return parse

def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}.")
    return n

# ---------- CLI ----------
def _add_swarm_args(p: argparse.ArgumentParser, with_objective: bool = True):
    if with_objective:
        p.add_argument("--objective", choices=[o.value for o in Objective], default=Objective.SPHERE.value)
    p.add_argument("--particles", type=_particle_count, default=DEFAULT_PARTICLES)
    p.add_argument("--preset", type=_parse_preset, default="DEFAULT",
                   help=f"Coefficient profile ({', '.join(PRESETS)})")
    # Optional manual overrides: None so they only apply if explicitly set
    p.add_argument("--w", type=_bounded_float(*W_RANGE), default=None)
    p.add_argument("--c1", type=_bounded_float(*C_RANGE), default=None)
    p.add_argument("--c2", type=_bounded_float(*C_RANGE), default=None)
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs (default: unseeded)")

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="swarmviz", description="Particle swarm optimization on 2D benchmarks.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # ---- ANIMATE ----
    p_anim = sub.add_parser("animate", help="Interactive heat-map view (space: play/pause, n: step, r: reset)")
    _add_swarm_args(p_anim)
    p_anim.add_argument("--interval", type=_positive_int, default=DEFAULT_INTERVAL_MS, help="ms between steps")
    p_anim.add_argument("--resolution", type=_positive_int, default=200)

    # ---- RUN ----
    p_run = sub.add_parser("run", help="Headless run with periodic status lines")
    _add_swarm_args(p_run)
    p_run.add_argument("--steps", type=_positive_int, default=100)
    p_run.add_argument("--every", type=_positive_int, default=10, help="Print status every N steps")
    p_run.add_argument("--log-dir", type=Path, default=None,
                       help="Optional directory to store step-level CSV logs")

    # ---- SUITE ----
    p_suite = sub.add_parser("suite", help="Repeated runs per objective with CSV summary")
    _add_swarm_args(p_suite, with_objective=False)
    p_suite.add_argument("--objectives", nargs="+", choices=[o.value for o in Objective],
                         default=[o.value for o in Objective])
    p_suite.add_argument("--outdir", type=Path, default=Path("results"))
    p_suite.add_argument("--runs", type=_positive_int, default=30)
    p_suite.add_argument("--steps", type=_positive_int, default=200)
    p_suite.add_argument("--no-plots", dest="no_plots", action="store_true")
    return ap

def make_config(args) -> SwarmConfig:
    """Preset coefficients with any explicit --w/--c1/--c2 applied on top."""
    params = PSOParams.from_preset(PRESETS[args.preset], w=args.w, c1=args.c1, c2=args.c2)
    return SwarmConfig(
        n_particles=args.particles,
        objective=getattr(args, "objective", Objective.SPHERE.value),
        params=params,
        interval_ms=getattr(args, "interval", DEFAULT_INTERVAL_MS),
    )

def _rng(seed):
    return np.random.default_rng(seed)

def cmd_animate(args):
    from swarmviz.visualization import animate

    driver = SwarmDriver(make_config(args), rng=_rng(args.seed))
    animate(driver, resolution=args.resolution)

def cmd_run(args):
    from swarmviz.run_logger import RunLogger

    cfg = make_config(args)
    driver = SwarmDriver(cfg, rng=_rng(args.seed))

    run_logger = None
    if args.log_dir is not None:
        run_logger = RunLogger(
            base_dir=args.log_dir,
            filename=f"{cfg.objective.value}_n{cfg.n_particles}_log.csv",
            metadata={"preset": args.preset, "w": cfg.params.w, "c1": cfg.params.c1, "c2": cfg.params.c2},
        )

    print(f"Objective: {cfg.objective.value} | Particles: {cfg.n_particles} | "
          f"w={cfg.params.w} c1={cfg.params.c1} c2={cfg.params.c2}")
    done = 0
    while done < args.steps:
        chunk = min(args.every, args.steps - done)
        driver.run(chunk, run_logger)
        done += chunk
        print(driver.describe())

    if run_logger is not None:
        print("Log written to", run_logger.flush())

def cmd_suite(args):
    from swarmviz.experiment import run_suite
    from swarmviz.visualization import boxplot_from_runs, plot_convergence

    cfg = make_config(args)
    runs_csv, summary_csv = run_suite(
        outdir=args.outdir,
        objectives=args.objectives,
        runs=args.runs,
        steps=args.steps,
        params=cfg.params,
        n_particles=cfg.n_particles,
        seed0=args.seed if args.seed is not None else 123,
    )
    if not args.no_plots:
        boxplot_from_runs(runs_csv, args.outdir / "boxplot.png")
        plot_convergence(args.outdir / "curves", args.outdir / "convergence.png")
    print("wrote:", runs_csv, summary_csv)

COMMANDS = {"animate": cmd_animate, "run": cmd_run, "suite": cmd_suite}

def main(argv=None):
    args = build_parser().parse_args(argv)
    COMMANDS[args.cmd](args)

if __name__ == "__main__":
    main()
