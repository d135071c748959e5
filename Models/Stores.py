# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Models/Stores.py
#  Purpose: Implement the FIFO and Nudging queueing disciplines.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from typing import List, Optional

from Core.Job import Job
from Metrics.Observability import Observability
from Models.Store_Base import Activity_Store, Ledger_Store, Store_Kind


class Fifo_Store(Ledger_Store):

    name       = "SimpleFIFOStore"
    short      = "fifo"
    store_kind = Store_Kind.FIFO


class Nudging_Store(Ledger_Store):

    name       = "SimpleNudgingStore"
    short      = "nudge"
    store_kind = Store_Kind.NUDGE

    def __init__(self, obs: Optional[Observability] = None) -> None:
        super().__init__(obs)
        self.nudges_i32 : int = 0

    def Push(self, job: Job) -> None:
        if not self.pending_deque_job:
            self.pending_deque_job.append(job)
            return

        last_job = self.pending_deque_job[-1]
        if not last_job.was_nudged_bool and job.kind.size_class < last_job.kind.size_class:
            self.nudges_i32 += 1

            # we can only nudge once
            last_job.was_nudged_bool = True
            self.obs.logger.info("> Nudging %s over %s", job.Title, last_job.Title)

            self.pending_deque_job[-1] = job
            self.pending_deque_job.append(last_job)
        else:
            self.pending_deque_job.append(job)

    def Get_Nudge_Count(self) -> int:
        return self.nudges_i32


def Build_Stores(obs: Optional[Observability] = None) -> List[Activity_Store]:
    return [Nudging_Store(obs), Fifo_Store(obs)]


"""
Notes:

Nudging is FIFO with one admission-time rule: a job strictly smaller than
the pending tail swaps ahead of it, unless that tail was already nudged.
A job is displaced by at most one position over its lifetime.
"""
