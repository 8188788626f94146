"""Parser for job tables in Taillard-style text files.

Layout (blank lines ignored)::

    number of jobs, number of machines
    3 2
    processing times :
    3 6 1
    5 2 4

One row per machine, one column per job. Jobs get ids 1..n and names J1..Jn.
"""

from __future__ import annotations

import math

from .models import Job


def parse_jobs_file(file_path: str) -> tuple[list[Job], int]:
    """Read a job table file.

    Returns:
        ``(jobs, machine_count)``; ``jobs`` is empty when the header declares 0 jobs.

    Raises:
        ValueError: On a missing header, malformed numbers, a wrong row or
            column count, or a negative or non-finite processing time.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        lines = iter([line.strip() for line in f if line.strip()])

    for line in lines:
        if line.lower().startswith("number of jobs"):
            break
    else:
        raise ValueError(f"{file_path}: missing 'number of jobs' header")

    try:
        header = next(lines).split()
        if len(header) < 2:
            raise ValueError(f"{file_path}: header needs jobs and machines counts")
        num_jobs, num_machines = int(header[0]), int(header[1])
        if num_jobs == 0:
            return [], num_machines
        next(lines)  # skip "processing times :"
        rows = [[float(tok) for tok in next(lines).split()] for _ in range(num_machines)]
    except StopIteration:
        raise ValueError(f"{file_path}: unexpected end of file") from None

    for m, row in enumerate(rows):
        if len(row) != num_jobs:
            raise ValueError(
                f"{file_path}: machine row {m + 1} has {len(row)} values, expected {num_jobs}"
            )
        if any(not math.isfinite(p) for p in row):
            raise ValueError(f"{file_path}: non-finite processing time on machine {m + 1}")
        if any(p < 0 for p in row):
            raise ValueError(f"{file_path}: negative processing time on machine {m + 1}")

    jobs = [
        Job(
            id=j + 1,
            name=f"J{j + 1}",
            processing_times=tuple(_as_number(rows[m][j]) for m in range(num_machines)),
        )
        for j in range(num_jobs)
    ]
    return jobs, num_machines


def _as_number(value: float) -> float:
    return int(value) if float(value).is_integer() else value
