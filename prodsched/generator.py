import random

from .models import Job


def generate_sample_jobs(
    num_jobs: int,
    num_machines: int,
    seed: int | None = None,
    low: int = 1,
    high: int = 10,
) -> list[Job]:
    """Generate jobs J1..Jn with uniform integer processing times in [low, high]."""
    rng = random.Random(seed)
    return [
        Job(
            id=i + 1,
            name=f"J{i + 1}",
            processing_times=tuple(rng.randint(low, high) for _ in range(num_machines)),
        )
        for i in range(num_jobs)
    ]
