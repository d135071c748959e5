# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Simulator.py
#  Purpose: Drive generation and per-tick draining of the stores, then summarize.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from Analysis.Comparison_Plots import Plot_Latency_Comparison
from Configurations import Simulation_Config
from Core.Clock import Clock, Virtual_Clock, Wall_Clock
from Core.Emitter import Job_Emitter
from Core.Errors import PersistenceError
from Core.Events import Emitter_Event, Event_Type
from Core.Job import Job, New_Id
from Core.Runner import Job_Runner
from Data.Access import Activity_DAL, Summary_DAL
from Data.Files import Save_Jobs_Json, Write_Results_Csv
from Metrics.Collector import Build_Run_Summary, Group_By_Kind, Kind_Distribution, Run_Summary
from Metrics.Observability import Checkpoint, Observability
from Metrics.Reports import Format_Distribution, Format_Summary
from Models.Distributions import Timing_Policy
from Models.Store_Base import Activity_Store


@dataclass
class Simulation_Result:

    run_id         : str
    summaries      : Dict[str, Run_Summary] = field(default_factory=dict)
    distribution   : Dict[str, int]         = field(default_factory=dict)
    elapsed_ms_f64 : float = 0.0
    ticks_i32      : int   = 0
    generated_i32  : int   = 0
    persistence_failures_i32 : int = 0


class Simulator:

    def __init__(
        self,
        cfg_simulation_config : Simulation_Config,
        emitter               : Job_Emitter,
        stores                : Sequence[Activity_Store],
        timing_policy         : Timing_Policy,
        clock                 : Optional[Clock] = None,
        activity_dal_opt      : Optional[Activity_DAL] = None,
        summary_dal_opt       : Optional[Summary_DAL] = None,
        obs                   : Optional[Observability] = None,
        run_id_opt            : Optional[str] = None,
    ) -> None:
        self.cfg_simulation_config = cfg_simulation_config
        self.emitter               = emitter
        self.stores_list           : List[Activity_Store] = list(stores)
        self.timing_policy         = timing_policy
        self.clock                 = clock or Wall_Clock()
        self.activity_dal_opt      = activity_dal_opt
        self.summary_dal_opt       = summary_dal_opt
        self.obs                   = obs or Observability()
        self.run_id                = run_id_opt or (activity_dal_opt.run_id if activity_dal_opt else New_Id("run"))

        self._complete_event_opt       : Optional[asyncio.Event] = None
        self._generation_finished_bool : bool = False
        self._in_flight_i32            : int  = 0

        self.ticks_i32                : int = 0
        self.generated_i32            : int = 0
        self.persistence_failures_i32 : int = 0

        self.emitter.Subscribe(self._On_Emitter_Event)

    # ------------------------------------------------------------------
    # coordination
    # ------------------------------------------------------------------

    def _On_Emitter_Event(self, event_: Emitter_Event) -> None:
        if event_.event_type == Event_Type.NEW_JOB and event_.job_opt is not None:
            self.generated_i32 += 1
            # each store owns its own copy, nudge marks must not leak across
            for store in self.stores_list:
                store.Push(event_.job_opt.Clone())
        elif event_.event_type == Event_Type.GENERATION_COMPLETE:
            self._generation_finished_bool = True
            self._Check_Complete()

    def _Check_Complete(self) -> None:
        if self._complete_event_opt is None:
            return
        if self._generation_finished_bool and self._in_flight_i32 == 0:
            self._complete_event_opt.set()

    def Stop(self) -> None:
        self.emitter.Stop()
        self._generation_finished_bool = True
        self._Check_Complete()

    # ------------------------------------------------------------------
    # draining
    # ------------------------------------------------------------------

    def _Persist_Activity(self, job_: Job, store: Activity_Store) -> None:
        if self.activity_dal_opt is None:
            return
        try:
            self.activity_dal_opt.Store(job_, store.store_kind)
        except PersistenceError as exc:
            self.persistence_failures_i32 += 1
            self.obs.logger.error("Could not store activity %s (%s): %s", job_.job_id, store.name, exc)

    def _Persist_Summary(self, summary: Run_Summary) -> None:
        if self.summary_dal_opt is None:
            return
        try:
            self.summary_dal_opt.Store(summary)
            self.obs.logger.info("Run summary stored: %s %s.", summary.run_id, summary.store_kind.value)
        except PersistenceError as exc:
            self.persistence_failures_i32 += 1
            self.obs.logger.error("There was an error attempting to store the summary: %s", exc)

    async def _Drain_Store(self, store: Activity_Store, label_str: str) -> int:
        with self.obs.tracer.Span("ConsumerRun", store=store.short, label=label_str) as span_:
            span_.Add_Metadata("items", store.Length())

            launched_list_job: List[Job] = []
            runs_list = []
            job_opt = store.Get_Next()
            while job_opt is not None:
                runner = Job_Runner(
                    job_opt,
                    self.timing_policy,
                    clock=self.clock,
                    blocking_bool=self.cfg_simulation_config.driver_config.blocking_bool,
                    obs=self.obs,
                )
                launched_list_job.append(job_opt)
                runs_list.append(runner.Run())
                job_opt = store.Get_Next()

            if not runs_list:
                return 0

            self.obs.logger.info("Running %d activities on %s (%s).", len(runs_list), store.name, label_str)
            await asyncio.gather(*runs_list)

            for job_ in launched_list_job:
                self._Persist_Activity(job_, store)
            return len(launched_list_job)

    async def _Drain_All(self, label_str: str) -> int:
        counts_list = await asyncio.gather(*(self._Drain_Store(store, label_str) for store in self.stores_list))
        return int(sum(counts_list))

    async def _Drain_Loop(self) -> None:
        interval_ms_f64 = float(self.cfg_simulation_config.driver_config.drain_interval_ms_f64)
        complete_event = self._complete_event_opt

        while not complete_event.is_set():
            await self.clock.Sleep(interval_ms_f64)
            if complete_event.is_set():
                break

            self._in_flight_i32 += 1
            try:
                drained_i32 = await self._Drain_All("tick")
            finally:
                self._in_flight_i32 -= 1

            self.ticks_i32 += 1
            self.obs.tracer.Checkpoint(Checkpoint.TICK_DRAINED, tick=self.ticks_i32, drained=drained_i32)
            self._Check_Complete()

    async def _Await_Completion(self, tasks_list: List["asyncio.Future"]) -> None:
        complete_event = self._complete_event_opt
        waiter = asyncio.ensure_future(complete_event.wait())
        pending_set = set(tasks_list) | {waiter}
        try:
            while not complete_event.is_set():
                done_set, pending_set = await asyncio.wait(pending_set, return_when=asyncio.FIRST_COMPLETED)
                for task_ in done_set:
                    if task_ is waiter or task_.cancelled():
                        continue
                    exc_opt = task_.exception()
                    if exc_opt is not None:
                        raise exc_opt
        finally:
            waiter.cancel()

    # ------------------------------------------------------------------
    # modes
    # ------------------------------------------------------------------

    async def Run(self) -> Simulation_Result:
        if self.cfg_simulation_config.driver_config.mode_str == "batch":
            return await self.Run_Batch()
        return await self.Run_Ticked()

    async def Run_Ticked(self) -> Simulation_Result:
        start_f64 = time.perf_counter()
        self._complete_event_opt = asyncio.Event()

        with self.obs.tracer.Span("Generate", run_id=self.run_id) as span_:
            self.obs.tracer.Checkpoint(Checkpoint.RUN_STARTED, run_id=self.run_id)
            self.obs.logger.info("Run %s started.", self.run_id)

            emitter_task = self.emitter.Start()
            drain_task = asyncio.ensure_future(self._Drain_Loop())
            # Stop() may have been called before the loop existed
            self._Check_Complete()

            try:
                await self._Await_Completion([emitter_task, drain_task])
            finally:
                drain_task.cancel()
                self.emitter.Stop()
                await asyncio.gather(drain_task, emitter_task, return_exceptions=True)

            self.obs.logger.info("Done processing.")
            # jobs generated after the last tick
            await self._Drain_All("last")

            span_.Add_Metadata("ticks", self.ticks_i32)
            return self._Finish(start_f64)

    async def _Serve_Sequentially(self, store: Activity_Store, clock: Virtual_Clock) -> None:
        progress = tqdm(total=store.Length(), desc=store.name, disable=not self.cfg_simulation_config.output_config.print_bool)
        try:
            job_opt = store.Get_Next()
            while job_opt is not None:
                runner = Job_Runner(job_opt, self.timing_policy, clock=clock, blocking_bool=True, obs=self.obs)
                await runner.Run()
                self._Persist_Activity(job_opt, store)
                progress.update(1)
                job_opt = store.Get_Next()
        finally:
            progress.close()

    async def Run_Batch(self) -> Simulation_Result:
        start_f64 = time.perf_counter()
        total_i32 = self.emitter.total_i32

        with self.obs.tracer.Span("Batch", run_id=self.run_id):
            self.obs.tracer.Checkpoint(Checkpoint.RUN_STARTED, run_id=self.run_id)
            self.obs.logger.info("Generating %d activities...", total_i32)

            for _ in range(total_i32):
                job_ = self.emitter.factory.Generate()
                self.generated_i32 += 1
                for store in self.stores_list:
                    store.Push(job_.Clone())

            start_ms_f64 = self.clock.Now()
            await asyncio.gather(*(
                self._Serve_Sequentially(store, Virtual_Clock(start_ms_f64)) for store in self.stores_list
            ))
            self.ticks_i32 += 1
            self.obs.tracer.Checkpoint(Checkpoint.TICK_DRAINED, tick=self.ticks_i32, drained=total_i32)

            return self._Finish(start_f64)

    # ------------------------------------------------------------------
    # results
    # ------------------------------------------------------------------

    def _Finish(self, start_f64: float) -> Simulation_Result:
        output_cfg = self.cfg_simulation_config.output_config
        summaries_dict: Dict[str, Run_Summary] = {}

        for store in self.stores_list:
            summary_ = Build_Run_Summary(self.run_id, store)
            summaries_dict[store.short] = summary_
            if output_cfg.print_bool:
                print(Format_Summary(summary_, store.name))
            self._Persist_Summary(summary_)

        distribution_dict: Dict[str, int] = {}
        if self.stores_list:
            distribution_dict = Kind_Distribution(self.stores_list[0].Get_Ledger())
        self.obs.logger.info(Format_Distribution(distribution_dict))

        if output_cfg.output_dir_str_opt:
            out_dir = Path(output_cfg.output_dir_str_opt)
            for store in self.stores_list:
                Save_Jobs_Json(out_dir, f"{store.short}_results", store.Get_Ledger(), store.store_kind)
                for title_str, jobs_list_job in Group_By_Kind(store.Get_Ledger()).items():
                    Save_Jobs_Json(out_dir, f"summary_{store.short}_{title_str}", jobs_list_job, store.store_kind)
            Write_Results_Csv(out_dir, summaries_dict)
            if output_cfg.plots_bool and summaries_dict:
                Plot_Latency_Comparison(summaries_dict, out_dir)

        elapsed_ms_f64 = (time.perf_counter() - start_f64) * 1000.0
        self.obs.logger.info("Done in %.0f ms!", elapsed_ms_f64)
        self.obs.tracer.Checkpoint(Checkpoint.RUN_COMPLETE, run_id=self.run_id, elapsed_ms=elapsed_ms_f64)

        return Simulation_Result(
            run_id=self.run_id,
            summaries=summaries_dict,
            distribution=distribution_dict,
            elapsed_ms_f64=elapsed_ms_f64,
            ticks_i32=self.ticks_i32,
            generated_i32=self.generated_i32,
            persistence_failures_i32=self.persistence_failures_i32,
        )


"""
Notes:

Ticked mode: the emitter pushes a copy of every new job into each store.
Every drain interval all pending jobs of every store are launched and
awaited together (join-all per tick). Once generation has finished and no
tick is in flight, ticking stops, one final drain runs, and the summaries
are built, persisted and printed before Run() returns. Stop() ends
generation early and the run still drains and summarizes what exists.

Batch mode: all jobs are generated up front and each store is served one
job at a time on its own virtual clock.

With an output directory, each store writes its full ledger, one
summary_<store>_<kind>.json per kind, and the shared results.csv.
"""
