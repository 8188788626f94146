"""Run configuration and the data-entry boundary.

Counts and processing times coming from users or config files are
corrected here (clamped, padded, renumbered) so the scheduling core only
ever sees consistent input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import yaml

from .models import Algorithm, Job, SystemType

MIN_MACHINES, MAX_MACHINES = 1, 10
MIN_JOBS, MAX_JOBS = 1, 20

logger = logging.getLogger("prodsched.config")


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from YAML file."""
    with open(config_file, "r", encoding="utf-8") as file:
        config = yaml.safe_load(file)
    return config or {}


def _clamp(value, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = low
    return max(low, min(high, number))


def clamp_machine_count(value) -> int:
    return _clamp(value, MIN_MACHINES, MAX_MACHINES)


def clamp_job_count(value) -> int:
    return _clamp(value, MIN_JOBS, MAX_JOBS)


def sanitize_processing_times(times: Sequence[float], machine_count: int) -> tuple[float, ...]:
    """Fit a vector to ``machine_count`` entries: negatives -> 0, pad with 0, truncate."""
    fitted = [max(0, t) for t in list(times)[:machine_count]]
    fitted += [0] * (machine_count - len(fitted))
    return tuple(fitted)


def sanitize_jobs(jobs: Sequence[Job], machine_count: int) -> list[Job]:
    return [
        Job(
            id=job.id,
            name=job.name,
            processing_times=sanitize_processing_times(job.processing_times, machine_count),
        )
        for job in jobs
    ]


def clamp_jobs(jobs: Sequence[Job]) -> list[Job]:
    """Keep at most MAX_JOBS jobs; the rest are dropped with a warning."""
    if len(jobs) <= MAX_JOBS:
        return list(jobs)
    logger.warning("Job table has %d jobs, keeping the first %d", len(jobs), MAX_JOBS)
    return list(jobs[:MAX_JOBS])


def renumber_jobs(jobs: Sequence[Job]) -> list[Job]:
    """Reassign ids 1..n and names J1..Jn in current order (after a removal)."""
    return [
        Job(id=i + 1, name=f"J{i + 1}", processing_times=job.processing_times)
        for i, job in enumerate(jobs)
    ]


@dataclass(slots=True)
class RunSettings:
    """Settings for one CLI run, already clamped to the supported bounds."""

    system_type: SystemType
    algorithm: Algorithm
    machines: int
    jobs: int
    jobs_file: str | None
    seed: int | None
    results_folder: str
    compare: bool
    export: bool
    charts: bool

    @classmethod
    def from_config(cls, config: dict) -> "RunSettings":
        general = config.get("general", {}) or {}
        gen_cfg = config.get("generator", {}) or {}
        out_cfg = config.get("output", {}) or {}

        system = SystemType.parse(general.get("system_type", "flow-shop"))
        algo = Algorithm.parse(general.get("algorithm", "fifo"))
        if system is None or algo is None:
            logger.warning(
                "Unknown system_type/algorithm %r/%r in config, using flow-shop/fifo",
                general.get("system_type"),
                general.get("algorithm"),
            )
        return cls(
            system_type=system or SystemType.FLOW_SHOP,
            algorithm=algo or Algorithm.FIFO,
            machines=clamp_machine_count(general.get("machines", 3)),
            jobs=clamp_job_count(gen_cfg.get("jobs", 5)),
            jobs_file=general.get("jobs_file"),
            seed=gen_cfg.get("seed"),
            results_folder=out_cfg.get("results_folder", "results"),
            compare=bool(out_cfg.get("compare", True)),
            export=bool(out_cfg.get("export", True)),
            charts=bool(out_cfg.get("charts", True)),
        )
