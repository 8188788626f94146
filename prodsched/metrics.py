from __future__ import annotations

from typing import Sequence

from .models import Job, Metrics, ScheduleResult


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0


def calculate_metrics(result: ScheduleResult, jobs: Sequence[Job] | None = None) -> Metrics:
    """Reduce a schedule to its summary figures.

    The job count is ``len(jobs)`` when given, otherwise the length of the
    schedule's job sequence. Averages over an empty job set are 0.
    """
    n = len(jobs) if jobs is not None else len(result.job_sequence)
    return Metrics(
        makespan=result.makespan,
        total_flow_time=result.total_flow_time,
        average_flow_time=result.total_flow_time / n if n else 0,
        total_waiting_time=result.total_waiting_time,
        average_waiting_time=result.total_waiting_time / n if n else 0,
        machine_utilization=result.machine_utilization,
        average_utilization=_mean(result.machine_utilization),
    )
