"""NEH (Nawaz-Enscore-Ham) constructive heuristic for the flow shop."""

from __future__ import annotations

import logging
from typing import Sequence

from .heuristics import lpt_sequence
from .models import Job, ScheduleResult
from .simulator import simulate

logger = logging.getLogger("prodsched.neh")


def best_insertion(
    jobs: Sequence[Job],
    partial: list[int],
    job_id: int,
    machine_count: int,
) -> tuple[int, float]:
    """Find the insertion position of ``job_id`` giving the lowest makespan.

    Tries every position 0..len(partial); the first position wins ties.

    Returns:
        ``(position, makespan)`` of the best candidate.
    """
    best_pos = 0
    best_cmax = None
    for pos in range(len(partial) + 1):
        candidate = partial[:pos] + [job_id] + partial[pos:]
        cmax = simulate(jobs, candidate, machine_count).makespan
        if best_cmax is None or cmax < best_cmax:
            best_cmax = cmax
            best_pos = pos
    return best_pos, best_cmax


def neh_sequence(jobs: Sequence[Job], machine_count: int) -> list[int]:
    """Build a job order by greedy best insertion.

    Jobs are taken in descending total processing time (stable); each one is
    inserted where the partial schedule's makespan is smallest. Cost is
    O(n^3 * m) simulator work, fine for the small instances this targets.
    """
    reference = lpt_sequence(jobs)
    if not reference:
        return []
    sequence = [reference[0]]
    for job_id in reference[1:]:
        pos, cmax = best_insertion(jobs, sequence, job_id, machine_count)
        sequence.insert(pos, job_id)
        logger.debug("NEH insert job=%s pos=%d partial_cmax=%s", job_id, pos, cmax)
    return sequence


def schedule_neh(jobs: Sequence[Job], machine_count: int) -> ScheduleResult:
    return simulate(jobs, neh_sequence(jobs, machine_count), machine_count)
