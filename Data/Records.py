# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Data/Records.py
#  Purpose: Map jobs and run summaries to flat, persistence-friendly records.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from Core.Job import Job, Job_Kind, Size_Class
from Metrics.Collector import Run_Results, Run_Summary, Run_Value, Run_Value_Type, SummaryStats
from Models.Store_Base import Store_Kind


class Record_Kind(str, Enum):
    ACTIVITY = "ACTIVITY"
    SUMMARY  = "SUMMARY"


def Activity_Type(store_kind_opt: Optional[Store_Kind] = None) -> str:
    if store_kind_opt is None:
        return Record_Kind.ACTIVITY.value
    return f"{Record_Kind.ACTIVITY.value}_{Store_Kind(store_kind_opt).value}"


def To_Timestamp(ms_f64_opt: Optional[float]) -> Optional[str]:
    if ms_f64_opt is None:
        return None
    instant = datetime.fromtimestamp(float(ms_f64_opt) / 1000.0, tz=timezone.utc)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def From_Timestamp(value_str_opt: Optional[str]) -> Optional[float]:
    if value_str_opt is None:
        return None
    instant = datetime.fromisoformat(str(value_str_opt).replace("Z", "+00:00"))
    return float(round(instant.timestamp() * 1000.0))


def Map_Job(job: Job, store_kind_opt: Optional[Store_Kind] = None, run_id_opt: Optional[str] = None) -> Dict[str, Any]:
    entry_dict: Dict[str, Any] = {
        "key": job.job_id,
        "type": Activity_Type(store_kind_opt),
        "title": job.kind.title,
        "size": Size_Class(job.kind.size_class).name,
        "launch_time_ms": float(job.kind.launch_time_ms),
        "nudged": bool(job.was_nudged_bool),
        "created": To_Timestamp(job.created_ms),
        "started": To_Timestamp(job.started_ms_opt),
        "finished": To_Timestamp(job.finished_ms_opt),
        "time": float(job.total_duration_f64),
        "time_acquire": float(job.acquire_duration_f64),
        "time_install": float(job.install_duration_f64),
    }
    if run_id_opt is not None:
        entry_dict["run_id"] = run_id_opt
    return entry_dict


def Remap_Job(entry_dict: Dict[str, Any]) -> Job:
    kind = Job_Kind(
        title=str(entry_dict["title"]),
        size_class=Size_Class[str(entry_dict["size"])],
        launch_time_ms=float(entry_dict.get("launch_time_ms", 0.0)),
    )
    return Job(
        job_id=str(entry_dict["key"]),
        kind=kind,
        created_ms=From_Timestamp(entry_dict["created"]),
        started_ms_opt=From_Timestamp(entry_dict.get("started")),
        finished_ms_opt=From_Timestamp(entry_dict.get("finished")),
        acquire_duration_f64=float(entry_dict.get("time_acquire", 0.0)),
        install_duration_f64=float(entry_dict.get("time_install", 0.0)),
        total_duration_f64=float(entry_dict.get("time", 0.0)),
        was_nudged_bool=bool(entry_dict.get("nudged", False)),
        runner_id_opt=None,
    )


def _Map_Value(run_value: Run_Value) -> Dict[str, Any]:
    value_dict: Dict[str, Any] = {"type": run_value.value_type.value, "value": float(run_value.value_f64)}
    if run_value.job_opt is not None:
        value_dict["instance"] = Map_Job(run_value.job_opt)
    return value_dict


def _Remap_Value(value_dict: Dict[str, Any]) -> Run_Value:
    instance_opt = value_dict.get("instance")
    return Run_Value(
        value_type=Run_Value_Type(value_dict["type"]),
        value_f64=float(value_dict["value"]),
        job_opt=Remap_Job(instance_opt) if instance_opt is not None else None,
    )


def Map_Summary(summary: Run_Summary, created_ms_f64_opt: Optional[float] = None) -> Dict[str, Any]:
    if created_ms_f64_opt is None:
        created_ms_f64_opt = datetime.now(tz=timezone.utc).timestamp() * 1000.0

    results_dict: Dict[str, Any] = {}
    for title_str, results in summary.results.items():
        results_dict[title_str] = {
            "best": _Map_Value(results.best),
            "worst": _Map_Value(results.worst),
            "average": _Map_Value(results.average),
            "count": int(results.count_i32),
            "latency": asdict(results.latency),
        }

    return {
        "key": summary.run_id,
        "type": summary.store_kind.value,
        "results": results_dict,
        "distribution": dict(summary.distribution),
        "nudges": summary.nudges_opt,
        "created": To_Timestamp(created_ms_f64_opt),
    }


def Remap_Summary(entry_dict: Dict[str, Any]) -> Run_Summary:
    results_dict: Dict[str, Run_Results] = {}
    for title_str, raw_dict in (entry_dict.get("results") or {}).items():
        results_dict[title_str] = Run_Results(
            average=_Remap_Value(raw_dict["average"]),
            best=_Remap_Value(raw_dict["best"]),
            worst=_Remap_Value(raw_dict["worst"]),
            count_i32=int(raw_dict["count"]),
            latency=SummaryStats(**raw_dict.get("latency", {})),
        )

    nudges_opt = entry_dict.get("nudges")
    return Run_Summary(
        run_id=str(entry_dict["key"]),
        store_kind=Store_Kind(entry_dict["type"]),
        results=results_dict,
        distribution={str(k): int(v) for k, v in (entry_dict.get("distribution") or {}).items()},
        nudges_opt=int(nudges_opt) if nudges_opt is not None else None,
    )


"""
Notes:

Activity record: instants become ISO-8601 UTC strings (millisecond
precision), the kind is flattened into title / size name / launch time and
the runner reference is dropped. Summary record: one per run and store kind,
with each best/worst job embedded as an activity record.
"""
