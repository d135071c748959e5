# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Models/Store_Base.py
#  Purpose: Define the activity store interface and the shared pending/ledger queue.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Protocol

from Core.Job import Job
from Metrics.Observability import Observability


class Store_Kind(str, Enum):
    FIFO  = "FIFO"
    NUDGE = "NUDGE"


class Activity_Store(Protocol):

    name       : str
    short      : str
    store_kind : Store_Kind

    def Push(self, job: Job) -> None:
        ...

    def Get_Next(self) -> Optional[Job]:
        ...

    def Length(self) -> int:
        ...

    def Get_Ledger(self) -> List[Job]:
        ...

    def Get_Pending(self) -> List[Job]:
        ...

    def Get_Nudge_Count(self) -> Optional[int]:
        ...


class Ledger_Store:

    name       : str        = "LedgerStore"
    short      : str        = "ledger"
    store_kind : Store_Kind = Store_Kind.FIFO

    def __init__(self, obs: Optional[Observability] = None) -> None:
        self.obs = (obs or Observability()).Child(self.short)
        self.pending_deque_job : Deque[Job] = deque()
        self.ledger_list_job   : List[Job]  = []

    def Push(self, job: Job) -> None:
        self.pending_deque_job.append(job)

    def Get_Next(self) -> Optional[Job]:
        if not self.pending_deque_job:
            return None
        job_ = self.pending_deque_job.popleft()
        self.ledger_list_job.append(job_)
        return job_

    def Length(self) -> int:
        return len(self.pending_deque_job)

    def Get_Ledger(self) -> List[Job]:
        return self.ledger_list_job

    def Get_Pending(self) -> List[Job]:
        return list(self.pending_deque_job)

    def Get_Nudge_Count(self) -> Optional[int]:
        return None

    def __len__(self) -> int:
        return self.Length()


"""
Notes:

Get_Next() pops the pending head and appends it to the ledger in the same
step, so the ledger records intake order and a job can never re-enter
pending once extracted.
"""
