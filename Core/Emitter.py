# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Emitter.py
#  Purpose: Produce jobs at a fixed cadence and notify subscribers.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import asyncio
from typing import List, Optional

from Configurations import Emitter_Config
from Core.Clock import Clock, Wall_Clock
from Core.Events import Emitter_Event, Emitter_Listener, Event_Type
from Metrics.Observability import Observability
from Models.Factories import Job_Factory


class Job_Emitter:

    def __init__(
        self,
        cfg_emitter_config : Emitter_Config,
        factory            : Job_Factory,
        clock              : Optional[Clock] = None,
        obs                : Optional[Observability] = None,
    ) -> None:
        self.cfg_emitter_config = cfg_emitter_config
        self.factory            = factory
        self.clock              = clock or Wall_Clock()
        self.obs                = (obs or Observability()).Child("emitter")

        self._listeners_list : List[Emitter_Listener] = []
        self._task_opt       : Optional["asyncio.Task[None]"] = None
        self._seq_i32        : int  = 0
        self._done_bool      : bool = False
        self._stop_requested_bool : bool = False

        self.emitted_count_i32 : int = 0

    @property
    def total_i32(self) -> int:
        return int(self.cfg_emitter_config.total_i32)

    def Subscribe(self, listener: Emitter_Listener) -> None:
        self._listeners_list.append(listener)

    def _Notify(self, event_type: Event_Type, job_opt=None) -> None:
        self._seq_i32 += 1
        event_ = Emitter_Event(seq=self._seq_i32, event_type=event_type, job_opt=job_opt)
        for listener in list(self._listeners_list):
            listener(event_)

    def Start(self) -> "asyncio.Task[None]":
        if self._task_opt is not None:
            raise RuntimeError("Emitter already started.")
        self._task_opt = asyncio.get_running_loop().create_task(self._Generate_Loop())
        return self._task_opt

    async def _Generate_Loop(self) -> None:
        interval_ms_f64 = float(self.cfg_emitter_config.interval_ms_f64)

        while not self._stop_requested_bool and self.emitted_count_i32 < self.total_i32:
            await self.clock.Sleep(interval_ms_f64)
            if self._stop_requested_bool:
                break

            job_ = self.factory.Generate()
            self.emitted_count_i32 += 1
            self.obs.logger.debug("Generated new activity %s (%s)", job_.Title, job_.job_id)
            self._Notify(Event_Type.NEW_JOB, job_)

        if self._stop_requested_bool:
            self.obs.logger.info("Generation stopped after %d of %d activities.", self.emitted_count_i32, self.total_i32)
            return

        self._done_bool = True
        self.obs.logger.info("Done generating %d activities.", self.emitted_count_i32)
        self._Notify(Event_Type.GENERATION_COMPLETE)

    def Stop(self) -> None:
        self._stop_requested_bool = True

        task_opt = self._task_opt
        if task_opt is None or task_opt.done():
            return
        # a listener stopping us from inside the loop: the flag ends it
        if task_opt is asyncio.current_task():
            return
        task_opt.cancel()

    def Is_Done(self) -> bool:
        return self._done_bool

    def Is_Running(self) -> bool:
        return self._task_opt is not None and not self._task_opt.done()

    async def Join(self) -> None:
        if self._task_opt is None:
            return
        try:
            await self._task_opt
        except asyncio.CancelledError:
            if not self._task_opt.cancelled():
                raise


"""
Notes:

One job per interval until `total` jobs, then exactly one
GENERATION_COMPLETE event. Listeners are called synchronously, in
subscription order, from inside the generation task. Start() must be called
with a running event loop.
"""
