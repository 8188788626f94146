#!/usr/bin/env python3

import argparse
import logging
import os
import sys
from datetime import datetime

from prodsched.comparison import best_algorithms, compare_algorithms
from prodsched.config import (
    RunSettings,
    clamp_job_count,
    clamp_jobs,
    clamp_machine_count,
    load_config,
    sanitize_jobs,
)
from prodsched.dispatcher import algorithms_for, schedule
from prodsched.export import build_export_record, write_export_json
from prodsched.generator import generate_sample_jobs
from prodsched.metrics import calculate_metrics
from prodsched.models import Algorithm, SystemType
from prodsched.parser import parse_jobs_file
from prodsched.visualization import plot_comparison, plot_gantt

logger = logging.getLogger("prodsched.main")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Flow shop / parallel machine scheduling")
    p.add_argument("--config", default="config.yaml", help="YAML config file")
    p.add_argument("--system", choices=[s.value for s in SystemType], help="Shop topology")
    p.add_argument("--algo", choices=[a.value for a in Algorithm], help="Sequencing rule")
    p.add_argument("--machines", type=int, help="Number of machines (1-10)")
    p.add_argument("--jobs", type=int, help="Number of generated jobs (1-20)")
    p.add_argument("--jobs-file", help="Taillard-style job table instead of generated jobs")
    p.add_argument("--seed", type=int, help="Seed for generated jobs")
    p.add_argument("--results", help="Output folder")
    p.add_argument("--no-compare", action="store_true", help="Skip algorithm comparison")
    p.add_argument("--no-export", action="store_true", help="Skip JSON export")
    p.add_argument("--no-charts", action="store_true", help="Skip chart rendering")
    p.add_argument("--log-level", default="INFO", help="Logging level")
    return p


def resolve_settings(args: argparse.Namespace) -> RunSettings:
    config = load_config(args.config) if os.path.exists(args.config) else {}
    settings = RunSettings.from_config(config)
    if args.system:
        settings.system_type = SystemType(args.system)
    if args.algo:
        settings.algorithm = Algorithm(args.algo)
    if args.machines is not None:
        settings.machines = clamp_machine_count(args.machines)
    if args.jobs is not None:
        settings.jobs = clamp_job_count(args.jobs)
    if args.jobs_file:
        settings.jobs_file = args.jobs_file
    if args.seed is not None:
        settings.seed = args.seed
    if args.results:
        settings.results_folder = args.results
    settings.compare = settings.compare and not args.no_compare
    settings.export = settings.export and not args.no_export
    settings.charts = settings.charts and not args.no_charts
    return settings


def load_jobs(settings: RunSettings):
    if settings.jobs_file:
        jobs, machines = parse_jobs_file(settings.jobs_file)
        settings.machines = clamp_machine_count(machines)
        return sanitize_jobs(clamp_jobs(jobs), settings.machines)
    return generate_sample_jobs(settings.jobs, settings.machines, seed=settings.seed)


def run(settings: RunSettings) -> int:
    jobs = load_jobs(settings)
    if not jobs:
        logger.error("No jobs defined")
        return 1
    logger.info(
        "Instance: system=%s algorithm=%s jobs=%d machines=%d",
        settings.system_type.value,
        settings.algorithm.value,
        len(jobs),
        settings.machines,
    )
    if settings.system_type is SystemType.JOB_SHOP:
        logger.warning(
            "Job shop routing is not modelled; %s is replaced by FIFO on a flow shop",
            settings.algorithm.value,
        )
    elif settings.algorithm not in algorithms_for(settings.system_type):
        logger.warning(
            "%s is not meaningful for %s; jobs are dispatched in input order",
            settings.algorithm.value,
            settings.system_type.value,
        )

    result = schedule(jobs, settings.machines, settings.system_type, settings.algorithm)
    metrics = calculate_metrics(result, jobs)
    logger.info(
        "Cmax=%s total_flow=%s avg_flow=%.2f avg_wait=%.2f avg_util=%.1f%%",
        metrics.makespan,
        metrics.total_flow_time,
        metrics.average_flow_time,
        metrics.average_waiting_time,
        metrics.average_utilization,
    )
    logger.info("Job sequence: %s", " ".join(f"J{j}" for j in result.job_sequence))

    out_dir = settings.results_folder
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    if settings.export:
        try:
            record = build_export_record(
                settings.system_type,
                settings.algorithm,
                settings.machines,
                jobs,
                result,
                metrics,
            )
            write_export_json(record, out_dir)
        except OSError as e:
            logger.warning("Failed to write export JSON: %s", e)
    if settings.charts:
        try:
            plot_gantt(
                result,
                os.path.join(out_dir, f"gantt_{settings.algorithm.value}_{stamp}.png"),
                algo_name=settings.algorithm.value,
            )
        except Exception as e:  # pragma: no cover
            logger.warning("Failed to create Gantt chart: %s", e)

    if settings.compare:
        rows = compare_algorithms(jobs, settings.machines, settings.system_type)
        winners = ", ".join(a.value for a in best_algorithms(rows))
        logger.info("Best makespan: %s", winners)
        if settings.charts and rows:
            try:
                plot_comparison(rows, os.path.join(out_dir, f"comparison_{stamp}.png"))
            except Exception as e:  # pragma: no cover
                logger.warning("Failed to create comparison chart: %s", e)
    return 0


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = resolve_settings(args)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
