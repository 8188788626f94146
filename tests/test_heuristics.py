import itertools

import pytest

from conftest import make_jobs
from prodsched.generator import generate_sample_jobs
from prodsched.heuristics import (
    fifo_sequence,
    johnson_sequence,
    lpt_sequence,
    schedule_fifo,
    schedule_johnson,
    schedule_lpt,
    schedule_spt,
    spt_sequence,
)
from prodsched.simulator import simulate


def brute_force_cmax(jobs, machines):
    ids = [job.id for job in jobs]
    return min(simulate(jobs, list(p), machines).makespan for p in itertools.permutations(ids))


def test_fifo_keeps_input_order():
    jobs = make_jobs((5,), (1,), (3,))
    assert fifo_sequence(jobs) == [1, 2, 3]
    assert schedule_fifo(jobs, 1).job_sequence == (1, 2, 3)


def test_spt_and_lpt_order_by_total_time():
    jobs = make_jobs((2, 3), (1, 1), (4, 4))
    assert spt_sequence(jobs) == [2, 1, 3]
    assert lpt_sequence(jobs) == [3, 1, 2]


def test_sorts_are_stable_on_ties():
    jobs = make_jobs((2, 2), (1, 3), (3, 1), (0, 1))
    assert spt_sequence(jobs) == [4, 1, 2, 3]
    assert lpt_sequence(jobs) == [1, 2, 3, 4]


def test_sorting_does_not_mutate_input():
    jobs = make_jobs((9,), (1,), (5,))
    snapshot = list(jobs)
    schedule_spt(jobs, 1)
    schedule_lpt(jobs, 1)
    johnson_sequence(jobs)
    assert jobs == snapshot


def test_single_machine_spt_lpt_same_makespan_different_flow():
    jobs = make_jobs((5,), (1,), (3,))
    spt = schedule_spt(jobs, 1)
    lpt = schedule_lpt(jobs, 1)
    assert spt.makespan == lpt.makespan == 9
    assert spt.total_flow_time == 1 + 4 + 9
    assert lpt.total_flow_time == 5 + 8 + 9


def test_two_machine_spt_lpt_differ():
    jobs = make_jobs((1, 2), (4, 1))
    assert schedule_spt(jobs, 2).makespan == 6
    assert schedule_lpt(jobs, 2).makespan == 7


def test_johnson_classic_example(johnson_jobs):
    assert johnson_sequence(johnson_jobs) == [3, 1, 2]
    res = schedule_johnson(johnson_jobs, 2)
    assert res.makespan == 12
    assert res.makespan == brute_force_cmax(johnson_jobs, 2)
    assert res.warnings == ()


@pytest.mark.parametrize("seed", range(6))
def test_johnson_matches_brute_force_on_two_machines(seed):
    jobs = generate_sample_jobs(6, 2, seed=seed)
    assert schedule_johnson(jobs, 2).makespan == brute_force_cmax(jobs, 2)


def test_johnson_on_three_machines_warns_but_schedules(caplog):
    jobs = make_jobs((3, 5, 2), (6, 2, 1), (1, 4, 3))
    with caplog.at_level("WARNING", logger="prodsched.heuristics"):
        res = schedule_johnson(jobs, 3)
    assert res.job_sequence == (3, 1, 2)
    assert len(res.tasks) == 9
    assert res.warnings and "2 machines" in res.warnings[0]
    assert caplog.records


def test_johnson_single_machine_reads_missing_second_time_as_zero():
    jobs = make_jobs((2,), (0,), (5,))
    # p2 == 0 everywhere: only p1 == 0 qualifies for the first group
    assert johnson_sequence(jobs) == [2, 1, 3]
    assert schedule_johnson(jobs, 1).makespan == 7
