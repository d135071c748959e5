# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Job.py
#  Purpose: Define the Job and Job_Kind data model and timing helpers.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import uuid
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional


class Size_Class(IntEnum):
    SMALL  = 2
    MEDIUM = 10
    BIG    = 50


@dataclass(frozen=True)
class Job_Kind:

    title          : str
    size_class     : Size_Class
    launch_time_ms : float = 0.0


def New_Id(prefix_str: str) -> str:
    return f"{prefix_str}_{uuid.uuid4().hex}"


@dataclass
class Job:

    job_id     : str
    kind       : Job_Kind
    created_ms : float


    started_ms_opt  : Optional[float] = None
    finished_ms_opt : Optional[float] = None

    acquire_duration_f64 : float = 0.0
    install_duration_f64 : float = 0.0
    total_duration_f64   : float = 0.0

    was_nudged_bool : bool = False

    # lookup id only; the runner owns the job, never the other way round
    runner_id_opt : Optional[str] = None

    def Clone(self) -> "Job":
        return replace(self)

    def Mark_Started(self, now_ms: float) -> None:
        self.started_ms_opt = now_ms

    def Mark_Finished(self, now_ms: float) -> None:
        self.finished_ms_opt = now_ms

    @property
    def Title(self) -> str:
        return self.kind.title

    @property
    def Queue_Wait(self) -> Optional[float]:
        if self.started_ms_opt is None:
            return None
        return self.started_ms_opt - self.created_ms

    @property
    def Latency(self) -> Optional[float]:
        if self.finished_ms_opt is None:
            return None
        return self.finished_ms_opt - self.created_ms
