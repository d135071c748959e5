from dataclasses import replace

import pytest

from Core.Errors import PersistenceError
from Data.Access import Activity_DAL, Summary_DAL
from Data.Record_Stores import In_Memory_Record_Store, Sqlite_Record_Store
from Data.Records import (
    Activity_Type,
    From_Timestamp,
    Map_Job,
    Map_Summary,
    Remap_Job,
    Remap_Summary,
    To_Timestamp,
)
from Metrics.Collector import Build_Run_Summary
from Models.Store_Base import Store_Kind
from Models.Stores import Nudging_Store


def _Finished(make_job, kind, created_ms: float, total_f64: float):
    job = make_job(kind, created_ms=created_ms)
    job.Mark_Started(created_ms + 40.0)
    job.acquire_duration_f64 = 250.0
    job.install_duration_f64 = total_f64 - 250.0
    job.total_duration_f64 = total_f64
    job.Mark_Finished(job.started_ms_opt + total_f64)
    job.runner_id_opt = "runner_abc"
    return job


def test_timestamps_are_iso_utc_with_milliseconds() -> None:
    assert To_Timestamp(0.0) == "1970-01-01T00:00:00.000Z"
    assert To_Timestamp(1_700_000_000_123.0) == "2023-11-14T22:13:20.123Z"
    assert From_Timestamp("2023-11-14T22:13:20.123Z") == 1_700_000_000_123.0
    assert To_Timestamp(None) is None
    assert From_Timestamp(None) is None


def test_activity_type_discriminator() -> None:
    assert Activity_Type() == "ACTIVITY"
    assert Activity_Type(Store_Kind.FIFO) == "ACTIVITY_FIFO"
    assert Activity_Type(Store_Kind.NUDGE) == "ACTIVITY_NUDGE"


def test_map_job_flattens_kind_and_drops_runner(make_job, big_kind) -> None:
    job = _Finished(make_job, big_kind, 1_700_000_000_000.0, 30_000.0)
    job.was_nudged_bool = True

    entry = Map_Job(job, Store_Kind.NUDGE, run_id_opt="run_1")

    assert entry["key"] == job.job_id
    assert entry["type"] == "ACTIVITY_NUDGE"
    assert entry["title"] == "World of Warcraft"
    assert entry["size"] == "BIG"
    assert entry["nudged"] is True
    assert entry["run_id"] == "run_1"
    assert entry["created"].endswith("Z")
    assert "runner_id_opt" not in entry and "runner" not in entry


def test_remap_job_restores_everything_but_runner(make_job, small_kind) -> None:
    job = _Finished(make_job, small_kind, 1_700_000_000_000.0, 1_750.0)

    assert Remap_Job(Map_Job(job)) == replace(job, runner_id_opt=None)


def test_remap_job_keeps_missing_stamps(make_job, medium_kind) -> None:
    job = make_job(medium_kind, created_ms=1_700_000_000_500.0)

    restored = Remap_Job(Map_Job(job, Store_Kind.FIFO))

    assert restored.started_ms_opt is None
    assert restored.finished_ms_opt is None
    assert restored == job


def test_summary_round_trip(make_job, small_kind, big_kind) -> None:
    store = Nudging_Store()
    store.Push(_Finished(make_job, big_kind, 1_700_000_000_000.0, 30_000.0))
    store.Push(_Finished(make_job, small_kind, 1_700_000_000_100.0, 1_800.0))
    while store.Get_Next() is not None:
        pass
    summary = Build_Run_Summary("run_7", store)

    entry = Map_Summary(summary, created_ms_f64_opt=1_700_000_100_000.0)
    restored = Remap_Summary(entry)

    assert entry["key"] == "run_7"
    assert entry["type"] == "NUDGE"
    assert entry["nudges"] == 1
    assert entry["created"] == "2023-11-14T22:15:00.000Z"
    assert restored.run_id == summary.run_id
    assert restored.store_kind == Store_Kind.NUDGE
    assert restored.nudges_opt == 1
    assert restored.distribution == summary.distribution
    for title, results in summary.results.items():
        again = restored.results[title]
        assert again.count_i32 == results.count_i32
        assert again.average.value_f64 == results.average.value_f64
        assert again.best.job_opt == replace(results.best.job_opt, runner_id_opt=None)
        assert again.worst.job_opt.job_id == results.worst.job_opt.job_id
        assert again.latency == results.latency


@pytest.fixture(params=["memory", "sqlite"])
def record_store(request, tmp_path):
    if request.param == "memory":
        yield In_Memory_Record_Store()
    else:
        with Sqlite_Record_Store(str(tmp_path / "activities.db")) as store:
            yield store


def test_record_store_put_get_and_overwrite(record_store) -> None:
    record_store.Put({"key": "k1", "type": "ACTIVITY", "run_id": "r", "value": 1})
    record_store.Put({"key": "k1", "type": "ACTIVITY_FIFO", "run_id": "r", "value": 2})
    record_store.Put({"key": "k1", "type": "ACTIVITY", "run_id": "r", "value": 3})

    assert record_store.Get("k1", "ACTIVITY")["value"] == 3
    assert record_store.Get("k1", "ACTIVITY_FIFO")["value"] == 2
    assert record_store.Get("k1", "SUMMARY") is None
    assert len(record_store.Query_Run("r")) == 2


def test_record_store_rejects_unserializable_record(record_store) -> None:
    with pytest.raises(PersistenceError):
        record_store.Put({"key": "k1", "type": "ACTIVITY", "value": object()})
    with pytest.raises(PersistenceError):
        record_store.Put({"type": "ACTIVITY"})


def test_sqlite_store_reports_closed_connection() -> None:
    store = Sqlite_Record_Store()
    store.Close()

    with pytest.raises(PersistenceError):
        store.Put({"key": "k1", "type": "ACTIVITY"})


def test_sqlite_store_persists_across_connections(tmp_path) -> None:
    db_path = str(tmp_path / "persist.db")
    with Sqlite_Record_Store(db_path) as store:
        store.Put({"key": "k9", "type": "FIFO", "nudges": None})

    with Sqlite_Record_Store(db_path) as store:
        assert store.Get("k9", "FIFO") == {"key": "k9", "type": "FIFO", "nudges": None}


def test_activity_dal_keeps_one_record_per_store_kind(record_store, make_job, small_kind) -> None:
    dal = Activity_DAL(record_store, run_id_opt="run_3")
    fifo_copy = _Finished(make_job, small_kind, 1_700_000_000_000.0, 1_700.0)
    nudge_copy = replace(fifo_copy, total_duration_f64=9_999.0, was_nudged_bool=True)

    dal.Store(fifo_copy, Store_Kind.FIFO)
    dal.Store(nudge_copy, Store_Kind.NUDGE)

    assert dal.Get(fifo_copy.job_id, Store_Kind.FIFO).total_duration_f64 == 1_700.0
    assert dal.Get(fifo_copy.job_id, Store_Kind.NUDGE).was_nudged_bool is True
    assert dal.Get(fifo_copy.job_id) is None
    assert dal.Get("missing", Store_Kind.FIFO) is None


def test_summary_dal_round_trip(record_store, make_job, small_kind) -> None:
    store = Nudging_Store()
    store.Push(_Finished(make_job, small_kind, 1_700_000_000_000.0, 1_700.0))
    store.Get_Next()
    dal = Summary_DAL(record_store)

    dal.Store(Build_Run_Summary("run_5", store))

    restored = dal.Get("run_5", Store_Kind.NUDGE)
    assert restored is not None
    assert restored.results[small_kind.title].count_i32 == 1
    assert dal.Get("run_5", Store_Kind.FIFO) is None
