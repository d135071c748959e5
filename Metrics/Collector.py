# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Metrics/Collector.py
#  Purpose: Reduce completed job ledgers into best/average/worst statistics.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from Core.Errors import EmptyInputError
from Core.Job import Job
from Models.Store_Base import Activity_Store, Store_Kind


@dataclass
class SummaryStats:

    count_i32 : int   = 0
    mean_f64  : float = float("nan")
    p50_f64   : float = float("nan")
    p90_f64   : float = float("nan")
    p95_f64   : float = float("nan")
    p99_f64   : float = float("nan")

    @staticmethod
    def From_Samples(samples_list_f64: List[float]) -> "SummaryStats":
        if not samples_list_f64:
            return SummaryStats(count_i32=0)

        arr_f64 = np.asarray(samples_list_f64, dtype=float)

        return SummaryStats(
            count_i32=int(arr_f64.size),
            mean_f64=float(arr_f64.mean()),
            p50_f64=float(np.percentile(arr_f64, 50)),
            p90_f64=float(np.percentile(arr_f64, 90)),
            p95_f64=float(np.percentile(arr_f64, 95)),
            p99_f64=float(np.percentile(arr_f64, 99)),
        )


class Run_Value_Type(str, Enum):
    AVERAGE = "average"
    BEST    = "best"
    WORST   = "worst"


@dataclass
class Run_Value:

    value_type : Run_Value_Type
    value_f64  : float
    job_opt    : Optional[Job] = None


@dataclass
class Run_Results:

    average   : Run_Value
    best      : Run_Value
    worst     : Run_Value
    count_i32 : int
    latency   : SummaryStats = field(default_factory=SummaryStats)


@dataclass
class Run_Summary:

    run_id       : str
    store_kind   : Store_Kind
    results      : Dict[str, Run_Results] = field(default_factory=dict)
    distribution : Dict[str, int]         = field(default_factory=dict)
    nudges_opt   : Optional[int]          = None


def Summarize(jobs_seq_job: Sequence[Job]) -> Run_Results:
    if len(jobs_seq_job) == 0:
        raise EmptyInputError("Cannot summarize zero jobs.")

    first_job = jobs_seq_job[0]
    best  = Run_Value(Run_Value_Type.BEST,  float(first_job.total_duration_f64), first_job)
    worst = Run_Value(Run_Value_Type.WORST, float(first_job.total_duration_f64), first_job)

    total_f64 = 0.0
    latencies_list_f64: List[float] = []
    for job_ in jobs_seq_job:
        time_f64 = float(job_.total_duration_f64)
        if time_f64 < best.value_f64:
            best.value_f64 = time_f64
            best.job_opt = job_
        if time_f64 > worst.value_f64:
            worst.value_f64 = time_f64
            worst.job_opt = job_
        total_f64 += time_f64

        if job_.Latency is not None:
            latencies_list_f64.append(float(job_.Latency))

    count_i32 = len(jobs_seq_job)
    return Run_Results(
        average=Run_Value(Run_Value_Type.AVERAGE, total_f64 / count_i32),
        best=best,
        worst=worst,
        count_i32=count_i32,
        latency=SummaryStats.From_Samples(latencies_list_f64),
    )


def Group_By_Kind(jobs_seq_job: Sequence[Job]) -> Dict[str, List[Job]]:
    by_kind_dict: Dict[str, List[Job]] = {}
    for job_ in jobs_seq_job:
        by_kind_dict.setdefault(job_.Title, []).append(job_)
    return by_kind_dict


def Kind_Distribution(jobs_seq_job: Sequence[Job]) -> Dict[str, int]:
    return {title: len(jobs) for title, jobs in Group_By_Kind(jobs_seq_job).items()}


def Build_Run_Summary(run_id_str: str, store: Activity_Store) -> Run_Summary:
    ledger_list_job = store.Get_Ledger()
    summary_ = Run_Summary(
        run_id=run_id_str,
        store_kind=store.store_kind,
        nudges_opt=store.Get_Nudge_Count(),
    )

    for title_str, jobs_list_job in Group_By_Kind(ledger_list_job).items():
        results_ = Summarize(jobs_list_job)
        summary_.results[title_str] = results_
        summary_.distribution[title_str] = results_.count_i32

    return summary_


"""
Notes:

Summarize() makes one pass over the jobs: best and worst by total duration
(first occurrence wins ties), average as sum / count. Latency percentiles
cover only the jobs whose finished stamp is set.
"""
