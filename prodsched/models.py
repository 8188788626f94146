"""Core data structures for production scheduling runs.

This module defines:
    Job            -- one job with its per-machine processing-time vector.
    ScheduleTask   -- single placement of a job on a machine.
    ScheduleResult -- immutable schedule plus aggregate figures.
    Metrics        -- read-only summary derived from a ScheduleResult.
    SystemType     -- shop topology tag.
    Algorithm      -- sequencing rule tag.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Sequence


class _TagEnum(str, Enum):
    @classmethod
    def parse(cls, value):
        """Return the member for ``value`` or ``None`` when it is not a known tag."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class SystemType(_TagEnum):
    FLOW_SHOP = "flow-shop"
    JOB_SHOP = "job-shop"
    PARALLEL_IDENTICAL = "parallel-identical"
    PARALLEL_DIFFERENT = "parallel-different"


class Algorithm(_TagEnum):
    FIFO = "fifo"
    SPT = "spt"
    LPT = "lpt"
    JOHNSON = "johnson"
    NEH = "neh"


@dataclass(frozen=True)
class Job:
    """Job with one processing time per machine.

    Attributes:
        id: Identifier, unique within a run.
        name: Display name (``J1``, ``J2`` ...).
        processing_times: Times in machine visiting order; index 0 is the
            first machine.
    """

    id: int
    name: str
    processing_times: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "processing_times", tuple(self.processing_times))

    @property
    def total_processing_time(self) -> float:
        return sum(self.processing_times)

    def time_on(self, machine_index: int) -> float:
        """Processing time on a 0-based machine; 0 past the end of the vector."""
        if 0 <= machine_index < len(self.processing_times):
            return self.processing_times[machine_index]
        return 0


@dataclass(frozen=True)
class ScheduleTask:
    """Single scheduled operation.

    Fields:
        job_id: Job identifier.
        machine_id: Machine number (1-based).
        start: Start time.
        end: Completion time (start + processing_time).
        processing_time: Duration of the operation.
    """

    job_id: int
    machine_id: int
    start: float
    end: float
    processing_time: float


@dataclass(frozen=True)
class ScheduleResult:
    """Full schedule plus objective values.

    Fields:
        tasks: All placements in emission order.
        makespan: Maximum completion time over all machines.
        total_flow_time: Sum of completion times (flow shop) or total
            processing time (parallel machines).
        average_flow_time: total_flow_time divided by the job count.
        total_waiting_time: Time jobs spent not being processed.
        machine_utilization: Busy share of the makespan per machine, in %.
        job_sequence: Job visiting order used to build the schedule.
        warnings: Advisory messages raised while building it.
    """

    tasks: tuple[ScheduleTask, ...]
    makespan: float
    total_flow_time: float
    average_flow_time: float
    total_waiting_time: float
    machine_utilization: tuple[float, ...]
    job_sequence: tuple[int, ...]
    warnings: tuple[str, ...] = field(default=())

    def tasks_on(self, machine_id: int) -> list[ScheduleTask]:
        return [t for t in self.tasks if t.machine_id == machine_id]

    def to_dict(self) -> dict:
        d = asdict(self)
        d["tasks"] = [asdict(t) for t in self.tasks]
        d["machine_utilization"] = list(self.machine_utilization)
        d["job_sequence"] = list(self.job_sequence)
        d["warnings"] = list(self.warnings)
        return d


@dataclass(frozen=True)
class Metrics:
    makespan: float
    total_flow_time: float
    average_flow_time: float
    total_waiting_time: float
    average_waiting_time: float
    machine_utilization: tuple[float, ...]
    average_utilization: float

    def to_dict(self) -> dict:
        d = asdict(self)
        d["machine_utilization"] = list(self.machine_utilization)
        return d


def jobs_by_id(jobs: Sequence[Job]) -> dict[int, Job]:
    """Index jobs by id; the first job wins when ids repeat."""
    index: dict[int, Job] = {}
    for job in jobs:
        index.setdefault(job.id, job)
    return index


def machine_utilization(
    tasks: Sequence[ScheduleTask], machine_count: int, makespan: float
) -> tuple[float, ...]:
    """Busy time per machine as a percentage of the makespan (0 when makespan is 0)."""
    busy = [0.0] * machine_count
    for task in tasks:
        busy[task.machine_id - 1] += task.processing_time
    if makespan <= 0:
        return tuple(0.0 for _ in busy)
    return tuple(b / makespan * 100.0 for b in busy)
