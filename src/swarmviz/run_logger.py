"""Buffered CSV logger for per-step swarm metrics."""

from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, MutableMapping, Optional

import numpy as np

from swarmviz.core import SwarmState

STEP_FIELDS = (
    'timestamp', 'iteration', 'objective', 'n_particles',
    'best_f', 'best_x', 'best_y', 'mean_f', 'mean_pbest_f',
)


def _utc_stamp(fmt: Optional[str] = None) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    if fmt:
        return now.strftime(fmt)
    return now.replace(tzinfo=None).isoformat(timespec='milliseconds') + 'Z'


def step_metrics(state: SwarmState) -> Dict[str, object]:
    """Flatten the quantities worth plotting from one state.

    While no global best exists its columns are left empty rather than
    written as inf.
    """
    gb = state.global_best
    return {
        'iteration': state.iteration,
        'objective': state.objective.value,
        'n_particles': state.n_particles,
        'best_f': gb.fitness if gb.found else '',
        'best_x': gb.x if gb.found else '',
        'best_y': gb.y if gb.found else '',
        'mean_f': float(np.mean(state.fitness())),
        'mean_pbest_f': float(np.mean(state.best_fitness)),
    }


@dataclass
class RunLogger:
    """Collect and persist step-level metrics with shared metadata."""

    base_dir: Path
    filename: Optional[str] = None
    metadata: Optional[Dict[str, object]] = None
    field_order: Optional[Iterable[str]] = None

    _records: List[MutableMapping[str, object]] = field(default_factory=list, init=False)
    _resolved_path: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.metadata = dict(self.metadata or {})

    def __len__(self) -> int:
        return len(self._records)

    def log_step(self, state: SwarmState, **extra: object) -> None:
        """Buffer one row for `state`."""

        record: MutableMapping[str, object] = {'timestamp': _utc_stamp()}
        record.update(self.metadata)
        record.update(step_metrics(state))
        record.update(extra)
        self._records.append(record)

    def update_metadata(self, **extra: object) -> None:
        """Merge additional metadata that all future rows will share."""

        self.metadata.update(extra)

    def flush(self) -> Path:
        """Write buffered records to disk and return the file path."""

        if not self._records:
            raise RuntimeError("No records to write; did you call log_step()?")

        path = self._resolve_path()
        fieldnames = self._determine_fieldnames()

        with path.open('w', newline='') as handle:
            writer = csv.DictWriter(handle, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()
            for record in self._records:
                writer.writerow(record)

        return path

    def _resolve_path(self) -> Path:
        if self._resolved_path is None:
            filename = self.filename or f"run_{_utc_stamp('%Y%m%dT%H%M%S')}.csv"
            self._resolved_path = self.base_dir / filename
        return self._resolved_path

    def _determine_fieldnames(self) -> List[str]:
        if self.field_order:
            return list(self.field_order)

        # metadata first, then the standard step columns, then anything extra
        keys: List[str] = ['timestamp', *self.metadata.keys()]
        for key in STEP_FIELDS:
            if key not in keys:
                keys.append(key)
        for record in self._records:
            for key in record.keys():
                if key not in keys:
                    keys.append(key)
        return keys

