"""
Matplotlib views of the swarm.

  • landscape: fitness grid over the search square (heat-map data).
  • SwarmView: animated heat map with particles, global best and known optima.
    Keys: space = play/pause, n = single step while paused, r = reset.
  • plot_convergence / boxplot_from_runs: static figures for experiment output.
"""
from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.animation import FuncAnimation

from swarmviz.constants import BOUND_HI, BOUND_LO
from swarmviz.driver import SwarmDriver
from swarmviz.functions import FUNCTIONS, get_objective


def landscape(objective, resolution: int = 400):
    """Return (X, Y, Z) over [BOUND_LO, BOUND_HI]^2 with `resolution` samples per axis."""
    if resolution < 2:
        raise ValueError("resolution must be >= 2.")
    f = FUNCTIONS[get_objective(objective)]["f"]
    axis = np.linspace(BOUND_LO, BOUND_HI, resolution)
    X, Y = np.meshgrid(axis, axis)
    return X, Y, np.asarray(f(X, Y), dtype=float)


class SwarmView:
    def __init__(self, driver: SwarmDriver, resolution: int = 200):
        self.driver = driver
        self.resolution = resolution
        self.running = False

        self.fig, self.ax = plt.subplots(figsize=(6, 6))
        self.ax.set_xlim(BOUND_LO, BOUND_HI)
        self.ax.set_ylim(BOUND_LO, BOUND_HI)
        self.ax.set_aspect("equal")

        self._image = None
        self._optima = None
        self._objective = None
        self._particles = self.ax.scatter([], [], s=16, c="#3b82f6", zorder=3)
        self._best = self.ax.scatter([], [], s=60, c="#ef4444", zorder=4)

        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.redraw()
        self.anim = FuncAnimation(self.fig, self._on_tick, init_func=self.redraw,
                                  interval=driver.interval_ms, cache_frame_data=False)

    def _draw_landscape(self):
        obj = self.driver.config.objective
        _, _, Z = landscape(obj, self.resolution)
        # log scale so Rosenbrock/Beale ridges do not wash out the basin
        shade = np.log1p(Z - Z.min())
        if self._image is None:
            self._image = self.ax.imshow(shade, extent=(BOUND_LO, BOUND_HI, BOUND_LO, BOUND_HI),
                                         origin="lower", cmap="Blues", alpha=0.6, zorder=1)
        else:
            self._image.set_data(shade)
            self._image.set_clim(shade.min(), shade.max())

        if self._optima is not None:
            self._optima.remove()
        opt = np.array(FUNCTIONS[obj]["optima"], dtype=float)
        self._optima = self.ax.scatter(opt[:, 0], opt[:, 1], s=180, facecolors="none",
                                       edgecolors="#10b981", linewidths=2, zorder=2)
        self._objective = obj

    def redraw(self):
        if self._objective != self.driver.config.objective:
            self._draw_landscape()

        state = self.driver.state
        self._particles.set_offsets(state.positions)
        gb = state.global_best
        # nothing to mark until a real global best exists
        self._best.set_offsets(np.array([[gb.x, gb.y]]) if gb.found else np.empty((0, 2)))

        label = FUNCTIONS[state.objective]["label"]
        mode = "running" if self.running else "paused"
        self.ax.set_title(f"{label} ({mode})\n{self.driver.describe()}", fontsize=9)
        return self._particles, self._best

    def _on_tick(self, _frame):
        if self.running:
            self.driver.step()
        if self.anim.event_source is not None:
            self.anim.event_source.interval = self.driver.interval_ms
        return self.redraw()

    def _on_key(self, event):
        if event.key == " ":
            self.running = not self.running
        elif event.key == "n" and not self.running:
            self.driver.step()
        elif event.key == "r":
            self.driver.reset()
        else:
            return
        self.redraw()
        self.fig.canvas.draw_idle()


def animate(driver: SwarmDriver, resolution: int = 200) -> SwarmView:
    """Open the interactive view and block until the window is closed."""
    view = SwarmView(driver, resolution=resolution)
    plt.show()
    return view


def plot_convergence(curves_dir: str | Path, outpath: str | Path):
    """Median global-best curve per objective from experiment `curves/` .npy files."""
    curves_dir = Path(curves_dir)
    groups: dict[str, list[np.ndarray]] = {}
    for p in sorted(curves_dir.glob("*_run*.npy")):
        name = p.stem.rsplit("_run", 1)[0]
        groups.setdefault(name, []).append(np.load(p))
    if not groups:
        raise ValueError(f"No curves found in {curves_dir}.")

    fig, ax = plt.subplots()
    for name, curves in groups.items():
        n = min(len(c) for c in curves)
        med = np.nanmedian(np.vstack([c[:n] for c in curves]), axis=0)
        # log axis cannot show exact zeros
        ax.plot(np.arange(1, n + 1), np.maximum(med, 1e-16), label=name)
    ax.set_yscale("log")
    ax.set_xlabel("Step")
    ax.set_ylabel("Global best fitness (median)")
    ax.legend()
    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return outpath


def boxplot_from_runs(runs_csv: str | Path, outpath: str | Path):
    """Compact boxplot of final best fitness per objective."""
    df = pd.read_csv(runs_csv)
    order = sorted(df["objective"].unique())
    data = [df.loc[df["objective"] == o, "best_f"].values for o in order]
    fig, ax = plt.subplots()
    ax.boxplot(data, showfliers=False)
    ax.set_xticks(range(1, len(order) + 1))
    ax.set_xticklabels(order, rotation=30, ha="right")
    ax.set_ylabel("Final best fitness")
    ax.set_title("PSO final fitness across runs")
    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)
    return outpath
