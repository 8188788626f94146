"""Production scheduling heuristics for flow shops and parallel machines.

Exports the data model, the dispatcher and the metrics calculator.
"""

from prodsched.dispatcher import schedule  # noqa: F401
from prodsched.metrics import calculate_metrics  # noqa: F401
from prodsched.models import (  # noqa: F401
    Algorithm,
    Job,
    Metrics,
    ScheduleResult,
    ScheduleTask,
    SystemType,
)
from prodsched.simulator import simulate  # noqa: F401

__all__ = [
    "Algorithm",
    "Job",
    "Metrics",
    "ScheduleResult",
    "ScheduleTask",
    "SystemType",
    "calculate_metrics",
    "schedule",
    "simulate",
]
