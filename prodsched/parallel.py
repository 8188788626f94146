"""Greedy list scheduling on parallel machines.

Jobs have a single operation (``processing_times[0]``) and may run on any
machine. Each job in priority order goes to the machine that frees up
first; with LPT order on identical machines this is the classical LPT
load-balancing rule.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models import Algorithm, Job, ScheduleResult, ScheduleTask, machine_utilization

logger = logging.getLogger("prodsched.parallel")


def priority_order(jobs: Sequence[Job], priority_rule: Algorithm | str | None) -> list[Job]:
    """Return a sorted copy of ``jobs`` for SPT/LPT, input order otherwise."""
    rule = Algorithm.parse(priority_rule)
    if rule is Algorithm.SPT:
        return sorted(jobs, key=lambda j: j.time_on(0))
    if rule is Algorithm.LPT:
        return sorted(jobs, key=lambda j: j.time_on(0), reverse=True)
    return list(jobs)


def least_loaded(machine_end: list[float]) -> int:
    """Index of the machine with the smallest finish time (lowest index on ties)."""
    best = 0
    for idx in range(1, len(machine_end)):
        if machine_end[idx] < machine_end[best]:
            best = idx
    return best


def schedule_parallel(
    jobs: Sequence[Job],
    machine_count: int,
    priority_rule: Algorithm | str | None = Algorithm.FIFO,
) -> ScheduleResult:
    """Assign jobs to parallel machines by the least-loaded rule.

    Args:
        jobs: Jobs to place; only their first processing time is used.
        machine_count: Number of parallel machines (>= 1).
        priority_rule: SPT or LPT pre-sort; anything else keeps input order.

    Returns:
        ScheduleResult whose flow time is the total processing time and
        whose waiting time is the idle capacity ``makespan * m - total``.
    """
    ordered = priority_order(jobs, priority_rule)
    machine_end = [0] * machine_count
    tasks: list[ScheduleTask] = []

    for job in ordered:
        idx = least_loaded(machine_end)
        start = machine_end[idx]
        processing_time = job.time_on(0)
        end = start + processing_time
        tasks.append(
            ScheduleTask(
                job_id=job.id,
                machine_id=idx + 1,
                start=start,
                end=end,
                processing_time=processing_time,
            )
        )
        machine_end[idx] = end

    makespan = max(machine_end, default=0)
    total_processing = sum(job.time_on(0) for job in jobs)
    n = len(jobs)
    logger.debug(
        "Parallel schedule rule=%s machines=%d jobs=%d cmax=%s",
        priority_rule,
        machine_count,
        n,
        makespan,
    )
    return ScheduleResult(
        tasks=tuple(tasks),
        makespan=makespan,
        total_flow_time=total_processing,
        average_flow_time=total_processing / n if n else 0,
        total_waiting_time=makespan * machine_count - total_processing,
        machine_utilization=machine_utilization(tasks, machine_count, makespan),
        job_sequence=tuple(job.id for job in ordered),
    )
