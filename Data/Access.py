# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Data/Access.py
#  Purpose: Data access objects for activity and run-summary records.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from typing import Optional

from Core.Job import Job, New_Id
from Data.Record_Stores import Record_Store
from Data.Records import Activity_Type, Map_Job, Map_Summary, Remap_Job, Remap_Summary
from Metrics.Collector import Run_Summary
from Metrics.Observability import Observability
from Models.Store_Base import Store_Kind


class Activity_DAL:

    def __init__(
        self,
        record_store : Record_Store,
        run_id_opt   : Optional[str] = None,
        obs          : Optional[Observability] = None,
    ) -> None:
        self.record_store = record_store
        self.run_id       = run_id_opt or New_Id("run")
        self.obs          = (obs or Observability()).Child("activity_dal")

    def Store(self, job: Job, store_kind_opt: Optional[Store_Kind] = None) -> None:
        entry_dict = Map_Job(job, store_kind_opt, run_id_opt=self.run_id)
        self.obs.logger.debug("put %s", entry_dict)
        self.record_store.Put(entry_dict)

    def Get(self, key_str: str, store_kind_opt: Optional[Store_Kind] = None) -> Optional[Job]:
        entry_opt = self.record_store.Get(key_str, Activity_Type(store_kind_opt))
        if entry_opt is None:
            return None
        return Remap_Job(entry_opt)


class Summary_DAL:

    def __init__(self, record_store: Record_Store, obs: Optional[Observability] = None) -> None:
        self.record_store = record_store
        self.obs          = (obs or Observability()).Child("summary_dal")

    def Store(self, summary: Run_Summary) -> None:
        entry_dict = Map_Summary(summary)
        self.obs.logger.debug("put summary %s/%s", entry_dict["key"], entry_dict["type"])
        self.record_store.Put(entry_dict)

    def Get(self, run_id_str: str, store_kind: Store_Kind) -> Optional[Run_Summary]:
        entry_opt = self.record_store.Get(run_id_str, Store_Kind(store_kind).value)
        if entry_opt is None:
            return None
        return Remap_Summary(entry_opt)
