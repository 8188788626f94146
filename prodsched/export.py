"""JSON export of a scheduling run (configuration, jobs, results, tasks)."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Sequence

from .models import Algorithm, Job, Metrics, ScheduleResult, SystemType

logger = logging.getLogger("prodsched.export")


def build_export_record(
    system_type: SystemType,
    algorithm: Algorithm,
    machine_count: int,
    jobs: Sequence[Job],
    result: ScheduleResult,
    metrics: Metrics,
) -> dict:
    return {
        "configuration": {
            "system_type": system_type.value,
            "algorithm": algorithm.value,
            "machines": machine_count,
            "jobs": len(jobs),
        },
        "jobs": [
            {"id": job.id, "name": job.name, "processing_times": list(job.processing_times)}
            for job in jobs
        ],
        "results": {
            "makespan": metrics.makespan,
            "total_flow_time": metrics.total_flow_time,
            "average_flow_time": metrics.average_flow_time,
            "total_waiting_time": metrics.total_waiting_time,
            "average_waiting_time": metrics.average_waiting_time,
            "machine_utilization": list(metrics.machine_utilization),
            "average_utilization": metrics.average_utilization,
            "job_sequence": list(result.job_sequence),
            "warnings": list(result.warnings),
        },
        "tasks": result.to_dict()["tasks"],
    }


def next_unique_path(path: str | Path) -> str:
    """Append _1, _2 ... to the file name until it does not exist."""
    p = Path(path)
    if not p.exists():
        return str(p)
    counter = 1
    while True:
        candidate = p.parent / f"{p.stem}_{counter}{p.suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1


def write_export_json(record: dict, out_dir: str) -> str:
    """Write ``record`` as ``schedule_<system>_<algorithm>_<stamp>.json`` and return the path."""
    os.makedirs(out_dir, exist_ok=True)
    cfg = record["configuration"]
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = next_unique_path(
        os.path.join(out_dir, f"schedule_{cfg['system_type']}_{cfg['algorithm']}_{stamp}.json")
    )
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, indent=2)
    logger.info("Saved schedule export to %s", path)
    return path
