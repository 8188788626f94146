from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .models import Job, ScheduleResult, ScheduleTask, jobs_by_id, machine_utilization

logger = logging.getLogger("prodsched.simulator")


def simulate(
    jobs: Sequence[Job],
    sequence: Iterable[int],
    machine_count: int,
) -> ScheduleResult:
    """Decode a job order into a permutation flow-shop schedule.

    Every job visits machines 1..machine_count in index order and the job
    order is the same on every machine. Each operation starts as early as
    two constraints allow: (1) the machine is free (one job at a time) and
    (2) the job has finished on the previous machine.

    Args:
        jobs: Job collection the sequence refers to.
        sequence: Job ids in processing order. Ids with no matching job are
            skipped and reported through ``warnings``.
        machine_count: Number of machines in the line.

    Returns:
        ScheduleResult with tasks in emission order, makespan, flow and
        waiting totals and per-machine utilization.
    """
    index = jobs_by_id(jobs)
    machine_free = [0] * machine_count
    tasks: list[ScheduleTask] = []
    scheduled: list[int] = []
    warnings: list[str] = []
    total_flow = 0
    total_waiting = 0

    for job_id in sequence:
        job = index.get(job_id)
        if job is None:
            logger.warning("Job id %s not found, skipped in sequence", job_id)
            warnings.append(f"job {job_id} not found; skipped")
            continue
        job_available = 0
        for m in range(machine_count):
            processing_time = job.time_on(m)
            start = max(machine_free[m], job_available)
            end = start + processing_time
            tasks.append(
                ScheduleTask(
                    job_id=job_id,
                    machine_id=m + 1,
                    start=start,
                    end=end,
                    processing_time=processing_time,
                )
            )
            machine_free[m] = end
            job_available = end
        scheduled.append(job_id)
        total_flow += job_available
        total_waiting += job_available - sum(job.time_on(m) for m in range(machine_count))

    makespan = max(machine_free, default=0)
    n = len(scheduled)
    return ScheduleResult(
        tasks=tuple(tasks),
        makespan=makespan,
        total_flow_time=total_flow,
        average_flow_time=total_flow / n if n else 0,
        total_waiting_time=total_waiting,
        machine_utilization=machine_utilization(tasks, machine_count, makespan),
        job_sequence=tuple(scheduled),
        warnings=tuple(warnings),
    )


def check_no_machine_overlap(result: ScheduleResult) -> bool:
    """Ensure no two tasks overlap on the same machine.

    Raises:
        AssertionError: On the first detected temporal overlap.
    """
    by_machine: dict[int, list[ScheduleTask]] = {}
    for task in result.tasks:
        by_machine.setdefault(task.machine_id, []).append(task)
    for machine_tasks in by_machine.values():
        machine_tasks.sort(key=lambda t: (t.start, t.end))
        prev_end = None
        for t in machine_tasks:
            if prev_end is not None and t.start < prev_end:
                raise AssertionError(
                    "Overlap on machine " f"{t.machine_id} between end {prev_end} and start {t.start}"
                )
            prev_end = t.end
    return True


def check_job_precedence(result: ScheduleResult) -> bool:
    """Ensure every job finishes on machine k before it starts on machine k+1.

    Raises:
        AssertionError: On the first job that starts early on a later machine.
    """
    by_job: dict[int, list[ScheduleTask]] = {}
    for task in result.tasks:
        by_job.setdefault(task.job_id, []).append(task)
    for job_id, job_tasks in by_job.items():
        job_tasks.sort(key=lambda t: t.machine_id)
        for prev, nxt in zip(job_tasks, job_tasks[1:]):
            if nxt.start < prev.end:
                raise AssertionError(
                    f"Job {job_id} starts on machine {nxt.machine_id} at {nxt.start} "
                    f"before finishing machine {prev.machine_id} at {prev.end}"
                )
    return True
