import math

import numpy as np
import pytest

from Core.Errors import EmptyInputError
from Metrics.Collector import (
    Build_Run_Summary,
    Kind_Distribution,
    Run_Value_Type,
    Summarize,
    SummaryStats,
)
from Models.Store_Base import Store_Kind
from Models.Stores import Fifo_Store, Nudging_Store


def test_summarize_rejects_empty_input() -> None:
    with pytest.raises(EmptyInputError):
        Summarize([])


def test_best_and_worst_bound_every_total(make_job, small_kind) -> None:
    rng = np.random.default_rng(17)
    for _ in range(25):
        totals = [float(v) for v in rng.integers(1, 50_000, size=int(rng.integers(1, 40)))]
        jobs = [make_job(small_kind, total_f64=t) for t in totals]

        results = Summarize(jobs)

        assert results.count_i32 == len(jobs)
        assert results.average.value_f64 == sum(totals) / len(totals)
        assert all(results.best.value_f64 <= t <= results.worst.value_f64 for t in totals)
        assert results.best.value_f64 == min(totals)
        assert results.worst.value_f64 == max(totals)


def test_ties_keep_first_occurrence(make_job, small_kind) -> None:
    jobs = [make_job(small_kind, total_f64=t) for t in (5.0, 3.0, 3.0, 9.0, 9.0)]

    results = Summarize(jobs)

    assert results.best.job_opt is jobs[1]
    assert results.worst.job_opt is jobs[3]
    assert results.best.value_type == Run_Value_Type.BEST
    assert results.worst.value_type == Run_Value_Type.WORST
    assert results.average.value_type == Run_Value_Type.AVERAGE
    assert results.average.job_opt is None


def test_single_job_is_best_and_worst(make_job, big_kind) -> None:
    job = make_job(big_kind, total_f64=42.0)

    results = Summarize([job])

    assert results.best.job_opt is job
    assert results.worst.job_opt is job
    assert results.average.value_f64 == 42.0


def test_latency_only_counts_finished_jobs(make_job, small_kind) -> None:
    finished = make_job(small_kind, created_ms=0.0, total_f64=10.0)
    finished.Mark_Started(100.0)
    finished.Mark_Finished(110.0)
    unfinished = make_job(small_kind, created_ms=0.0, total_f64=20.0)

    results = Summarize([finished, unfinished])

    assert results.latency.count_i32 == 1
    assert results.latency.p50_f64 == 110.0


def test_summary_stats_from_no_samples() -> None:
    stats = SummaryStats.From_Samples([])

    assert stats.count_i32 == 0
    assert math.isnan(stats.mean_f64)


def test_run_summary_groups_ledger_by_kind(make_job, small_kind, big_kind) -> None:
    store = Nudging_Store()
    for kind, total in ((big_kind, 300.0), (small_kind, 10.0), (small_kind, 30.0), (big_kind, 100.0)):
        store.Push(make_job(kind, total_f64=total))
    while store.Get_Next() is not None:
        pass

    summary = Build_Run_Summary("run_1", store)

    assert summary.run_id == "run_1"
    assert summary.store_kind == Store_Kind.NUDGE
    assert summary.nudges_opt == 1
    assert set(summary.results) == {small_kind.title, big_kind.title}
    assert summary.results[small_kind.title].average.value_f64 == 20.0
    assert summary.results[big_kind.title].worst.value_f64 == 300.0
    assert summary.distribution == {big_kind.title: 2, small_kind.title: 2}


def test_run_summary_of_untouched_store_is_empty() -> None:
    summary = Build_Run_Summary("run_2", Fifo_Store())

    assert summary.results == {}
    assert summary.distribution == {}
    assert summary.nudges_opt is None


def test_kind_distribution_counts_titles(make_job, small_kind, medium_kind) -> None:
    jobs = [make_job(small_kind), make_job(medium_kind), make_job(small_kind)]

    assert Kind_Distribution(jobs) == {small_kind.title: 2, medium_kind.title: 1}
    assert Kind_Distribution([]) == {}
