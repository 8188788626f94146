"""Side-by-side comparison of the scheduling algorithms on one job set.

Each algorithm is an independent dispatcher call over the same jobs, so the
runs can share a thread pool without coordination.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Sequence

from .dispatcher import algorithms_for, schedule
from .metrics import calculate_metrics
from .models import Algorithm, Job, Metrics, SystemType

logger = logging.getLogger("prodsched.comparison")


@dataclass(frozen=True)
class ComparisonRow:
    algorithm: Algorithm
    makespan: float
    average_flow_time: float
    average_utilization: float
    gap_percent: float
    is_best: bool

    def to_dict(self) -> dict:
        d = asdict(self)
        d["algorithm"] = self.algorithm.value
        return d


def gap_percent(makespan: float, best_makespan: float) -> float:
    """Relative distance to the best makespan in %; 0 when the best is 0."""
    if best_makespan <= 0:
        return 0.0
    return (makespan - best_makespan) / best_makespan * 100.0


def compare_algorithms(
    jobs: Sequence[Job],
    machine_count: int,
    system_type: SystemType | str,
    algorithms: Sequence[Algorithm] | None = None,
    max_workers: int | None = None,
) -> list[ComparisonRow]:
    """Run every applicable algorithm and rank by makespan.

    Args:
        jobs: Shared job set (not modified).
        machine_count: Number of machines.
        system_type: Topology; Johnson and NEH are dropped outside flow shop.
        algorithms: Restrict to these algorithms (default: all applicable).
        max_workers: Run the algorithms on a thread pool of this size.

    Returns:
        Rows in algorithm order; every row with the lowest makespan has
        ``is_best`` set. Empty when there are no jobs.
    """
    if not jobs:
        return []
    algos = list(algorithms) if algorithms is not None else algorithms_for(system_type)

    def _run(algo: Algorithm) -> Metrics:
        result = schedule(jobs, machine_count, system_type, algo)
        return calculate_metrics(result, jobs)

    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            metrics = list(pool.map(_run, algos))
    else:
        metrics = [_run(a) for a in algos]

    best = min((m.makespan for m in metrics), default=0)
    rows = [
        ComparisonRow(
            algorithm=algo,
            makespan=m.makespan,
            average_flow_time=m.average_flow_time,
            average_utilization=m.average_utilization,
            gap_percent=gap_percent(m.makespan, best),
            is_best=m.makespan == best,
        )
        for algo, m in zip(algos, metrics)
    ]
    for row in rows:
        logger.info(
            "Compare %-8s: cmax=%s avg_flow=%.2f util=%.1f%% gap=%.1f%%%s",
            row.algorithm.value,
            row.makespan,
            row.average_flow_time,
            row.average_utilization,
            row.gap_percent,
            " (best)" if row.is_best else "",
        )
    return rows


def best_algorithms(rows: Sequence[ComparisonRow]) -> list[Algorithm]:
    return [row.algorithm for row in rows if row.is_best]
