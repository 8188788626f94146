"""Static sequencing rules for the permutation flow shop.

Each rule turns a job collection into an order of job ids and hands it to
:func:`prodsched.simulator.simulate`:

- FIFO: input order.
- SPT: ascending total processing time (stable).
- LPT: descending total processing time (stable).
- Johnson: makespan-optimal order for exactly two machines.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from .models import Job, ScheduleResult
from .simulator import simulate

logger = logging.getLogger("prodsched.heuristics")


def fifo_sequence(jobs: Sequence[Job]) -> list[int]:
    return [job.id for job in jobs]


def spt_sequence(jobs: Sequence[Job]) -> list[int]:
    return [job.id for job in sorted(jobs, key=lambda j: j.total_processing_time)]


def lpt_sequence(jobs: Sequence[Job]) -> list[int]:
    return [job.id for job in sorted(jobs, key=lambda j: j.total_processing_time, reverse=True)]


def johnson_sequence(jobs: Sequence[Job]) -> list[int]:
    """Order jobs by Johnson's rule on their first two machine times.

    Jobs with p1 <= p2 go first, ascending by p1; the rest follow,
    descending by p2. Missing times read as 0.
    """
    first = [job for job in jobs if job.time_on(0) <= job.time_on(1)]
    last = [job for job in jobs if job.time_on(0) > job.time_on(1)]
    first.sort(key=lambda j: j.time_on(0))
    last.sort(key=lambda j: j.time_on(1), reverse=True)
    return [job.id for job in first + last]


def schedule_fifo(jobs: Sequence[Job], machine_count: int) -> ScheduleResult:
    return simulate(jobs, fifo_sequence(jobs), machine_count)


def schedule_spt(jobs: Sequence[Job], machine_count: int) -> ScheduleResult:
    return simulate(jobs, spt_sequence(jobs), machine_count)


def schedule_lpt(jobs: Sequence[Job], machine_count: int) -> ScheduleResult:
    return simulate(jobs, lpt_sequence(jobs), machine_count)


def schedule_johnson(jobs: Sequence[Job], machine_count: int) -> ScheduleResult:
    """Run Johnson's rule and simulate the resulting order.

    Optimality only holds for two machines. Any other machine count still
    yields a valid schedule, with an advisory added to ``warnings``.
    """
    result = simulate(jobs, johnson_sequence(jobs), machine_count)
    if machine_count != 2:
        logger.warning(
            "Johnson's rule is only makespan-optimal for 2 machines (got %d)", machine_count
        )
        advisory = f"johnson: optimality holds for 2 machines only, got {machine_count}"
        result = _with_warning(result, advisory)
    return result


def _with_warning(result: ScheduleResult, message: str) -> ScheduleResult:
    return replace(result, warnings=result.warnings + (message,))
