import logging
import os
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from .comparison import ComparisonRow  # noqa: E402
from .models import ScheduleResult  # noqa: E402

logger = logging.getLogger("prodsched.visualization")


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_gantt(
    result: ScheduleResult,
    save_path: str,
    algo_name: str = "",
    show_legend: Optional[bool] = None,
) -> str:
    """Draw the schedule as a Gantt chart and save it.

    One row per machine (M1 at the top), one bar per task, coloured by job.
    The legend is dropped automatically above 20 jobs unless forced.
    """
    machine_count = len(result.machine_utilization)
    job_ids = sorted({t.job_id for t in result.tasks})
    cmap = matplotlib.colormaps["tab20"]
    colors = {job_id: cmap(i % 20) for i, job_id in enumerate(job_ids)}

    fig, ax = plt.subplots(
        figsize=(10, min(0.6 * machine_count + 2, 10)),
        constrained_layout=True,
    )
    for task in result.tasks:
        if task.processing_time <= 0:
            continue
        ax.barh(
            task.machine_id,
            task.processing_time,
            left=task.start,
            height=0.8,
            color=colors[task.job_id],
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        ax.text(
            task.start + task.processing_time / 2,
            task.machine_id,
            f"J{task.job_id}",
            ha="center",
            va="center",
            fontsize=8,
        )
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    title = f"Gantt Chart - Cmax = {result.makespan}"
    if algo_name:
        title = f"{algo_name.upper()}: {title}"
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_yticks(range(1, machine_count + 1))
    ax.set_yticklabels([f"M{i}" for i in range(1, machine_count + 1)])
    ax.invert_yaxis()
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)

    if show_legend is None:
        show_legend = len(job_ids) <= 20
    if show_legend and job_ids:
        legend_elements = [
            plt.Rectangle(
                (0, 0), 1, 1, facecolor=colors[j], alpha=0.85, edgecolor="black", label=f"Job {j}"
            )
            for j in job_ids
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
        )

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    logger.info("Gantt chart saved as: %s", save_path)
    return save_path


def plot_comparison(rows: Sequence[ComparisonRow], save_path: str) -> str:
    """Bar chart of makespan per algorithm; the best rows are highlighted."""
    fig, ax = plt.subplots(figsize=(8, 5), constrained_layout=True)
    names = [row.algorithm.value.upper() for row in rows]
    values = [row.makespan for row in rows]
    bar_colors = ["#7CFF00" if row.is_best else "#00A5CF" for row in rows]
    bars = ax.bar(names, values, color=bar_colors, edgecolor="black", linewidth=0.6)
    for bar, row in zip(bars, rows):
        ax.annotate(
            f"{row.makespan}",
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            xytext=(0, 3),
            textcoords="offset points",
            ha="center",
            fontsize=9,
        )
    ax.set_ylabel("Cmax", fontsize=12)
    ax.set_title("Algorithm comparison", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, axis="y", linestyle="--", linewidth=0.7)

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    logger.info("Comparison plot saved as: %s", save_path)
    return save_path
