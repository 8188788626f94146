import math

import pytest

from conftest import make_jobs
from prodsched.generator import generate_sample_jobs
from prodsched.models import Algorithm
from prodsched.parallel import least_loaded, priority_order, schedule_parallel
from prodsched.simulator import check_no_machine_overlap


def four_jobs():
    return make_jobs((5,), (3,), (8,), (2,))


def test_fifo_list_scheduling():
    res = schedule_parallel(four_jobs(), 2, Algorithm.FIFO)
    placements = [(t.job_id, t.machine_id, t.start, t.end) for t in res.tasks]
    assert placements == [(1, 1, 0, 5), (2, 2, 0, 3), (3, 2, 3, 11), (4, 1, 5, 7)]
    assert res.makespan == 11
    assert res.job_sequence == (1, 2, 3, 4)


def test_lpt_balances_load_and_breaks_ties_by_lowest_index():
    res = schedule_parallel(four_jobs(), 2, "lpt")
    assert res.job_sequence == (3, 1, 2, 4)
    last = res.tasks[-1]
    assert (last.job_id, last.machine_id, last.start) == (4, 1, 8)
    assert res.makespan == 10
    assert res.total_waiting_time == 10 * 2 - 18


def test_spt_order():
    res = schedule_parallel(four_jobs(), 2, Algorithm.SPT)
    assert res.job_sequence == (4, 2, 1, 3)
    assert res.makespan == 11


def test_flow_time_is_total_processing_time():
    res = schedule_parallel(four_jobs(), 3, Algorithm.LPT)
    assert res.total_flow_time == 18
    assert res.average_flow_time == 4.5


def test_only_first_processing_time_is_used():
    jobs = make_jobs((2, 50, 50), (3, 50, 50))
    res = schedule_parallel(jobs, 2, Algorithm.FIFO)
    assert res.makespan == 3
    assert [t.processing_time for t in res.tasks] == [2, 3]


def test_idle_machine_has_zero_utilization():
    res = schedule_parallel(make_jobs((4,)), 3, Algorithm.FIFO)
    assert res.machine_utilization == (100.0, 0.0, 0.0)


def test_flow_shop_only_rule_keeps_input_order():
    assert [j.id for j in priority_order(four_jobs(), Algorithm.NEH)] == [1, 2, 3, 4]
    assert [j.id for j in priority_order(four_jobs(), None)] == [1, 2, 3, 4]


def test_least_loaded_lowest_index_on_tie():
    assert least_loaded([4, 2, 2]) == 1
    assert least_loaded([0]) == 0


def test_empty_job_set():
    res = schedule_parallel([], 2, Algorithm.LPT)
    assert res.tasks == ()
    assert res.makespan == 0
    assert res.average_flow_time == 0
    assert res.machine_utilization == (0.0, 0.0)


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("rule", list(Algorithm)[:3])
@pytest.mark.parametrize("machines", [1, 2, 4])
def test_busy_time_and_lower_bound(seed, rule, machines):
    jobs = generate_sample_jobs(9, 1, seed=seed)
    res = schedule_parallel(jobs, machines, rule)
    total = sum(job.processing_times[0] for job in jobs)
    busy = [sum(t.processing_time for t in res.tasks_on(m)) for m in range(1, machines + 1)]
    assert sum(busy) == total
    assert res.makespan >= math.ceil(total / machines)
    assert check_no_machine_overlap(res)
    assert all(0 <= u <= 100 for u in res.machine_utilization)
