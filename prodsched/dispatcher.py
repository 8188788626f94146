"""Route a (topology, algorithm) pair to the scheduling component.

Flow shop goes through a closed table keyed by :class:`Algorithm`; parallel
topologies always use the list scheduler. Job shop and unrecognized
topologies fall back to FIFO on the flow shop.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .heuristics import (
    schedule_fifo,
    schedule_johnson,
    schedule_lpt,
    schedule_spt,
)
from .models import Algorithm, Job, ScheduleResult, SystemType
from .neh import schedule_neh
from .parallel import schedule_parallel

logger = logging.getLogger("prodsched.dispatcher")

FLOW_SHOP_DISPATCH: dict[Algorithm, Callable[[Sequence[Job], int], ScheduleResult]] = {
    Algorithm.FIFO: schedule_fifo,
    Algorithm.SPT: schedule_spt,
    Algorithm.LPT: schedule_lpt,
    Algorithm.JOHNSON: schedule_johnson,
    Algorithm.NEH: schedule_neh,
}

PARALLEL_SYSTEMS = (SystemType.PARALLEL_IDENTICAL, SystemType.PARALLEL_DIFFERENT)
FLOW_SHOP_ONLY = (Algorithm.JOHNSON, Algorithm.NEH)


def algorithms_for(system_type: SystemType | str) -> list[Algorithm]:
    """Algorithms meaningful for a topology (Johnson and NEH need a flow shop)."""
    if SystemType.parse(system_type) is SystemType.FLOW_SHOP:
        return list(Algorithm)
    return [a for a in Algorithm if a not in FLOW_SHOP_ONLY]


def schedule(
    jobs: Sequence[Job],
    machine_count: int,
    system_type: SystemType | str,
    algorithm: Algorithm | str,
) -> ScheduleResult:
    """Compute a schedule for the requested topology and algorithm.

    Args:
        jobs: Job collection (not modified).
        machine_count: Number of machines.
        system_type: Topology member or tag such as ``"flow-shop"``.
        algorithm: Algorithm member or tag such as ``"neh"``.

    Returns:
        Fresh ScheduleResult for this invocation.
    """
    system = SystemType.parse(system_type)
    algo = Algorithm.parse(algorithm)

    if system in PARALLEL_SYSTEMS:
        return schedule_parallel(jobs, machine_count, algo)

    if system is None:
        logger.warning("Unknown system type %r, using FIFO flow shop", system_type)
        return schedule_fifo(jobs, machine_count)
    if system is SystemType.JOB_SHOP:
        logger.info("Job shop routing is not modelled, using FIFO flow shop")
        return schedule_fifo(jobs, machine_count)

    run_fn = FLOW_SHOP_DISPATCH.get(algo)
    if run_fn is None:
        logger.warning("Unknown algorithm %r, using FIFO", algorithm)
        run_fn = schedule_fifo
    return run_fn(jobs, machine_count)
