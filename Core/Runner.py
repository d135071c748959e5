# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Runner.py
#  Purpose: Execute the two-phase (acquire, install) timing of a single job.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from enum import Enum
from typing import Optional

from Core.Clock import Clock, Wall_Clock
from Core.Errors import DoubleRunError
from Core.Job import Job, New_Id
from Metrics.Observability import Observability
from Models.Distributions import Timing_Policy


class Runner_State(str, Enum):
    CREATED             = "created"
    ACQUIRE_IN_PROGRESS = "acquire_in_progress"
    INSTALL_IN_PROGRESS = "install_in_progress"
    COMPLETED           = "completed"


class Job_Runner:

    def __init__(
        self,
        job             : Job,
        timing_policy   : Timing_Policy,
        clock           : Optional[Clock] = None,
        blocking_bool   : bool = False,
        runner_id_opt   : Optional[str] = None,
        obs             : Optional[Observability] = None,
    ) -> None:
        self.runner_id     = runner_id_opt or New_Id("runner")
        self.job           = job
        self.timing_policy = timing_policy
        self.clock         = clock or Wall_Clock()
        self.blocking_bool = bool(blocking_bool)
        self.state         = Runner_State.CREATED
        self.obs           = (obs or Observability()).Child("runner")

        self.planned_acquire_f64_opt : Optional[float] = None
        self.planned_install_f64_opt : Optional[float] = None

    async def _Phase(self, planned_f64: float, label_str: str) -> float:
        if not self.blocking_bool:
            return planned_f64

        phase_start_f64 = self.clock.Now()
        self.obs.logger.debug("%s %s (%s) for %.0f ms", label_str, self.job.Title, self.job.job_id, planned_f64)
        await self.clock.Sleep(planned_f64)
        return self.clock.Now() - phase_start_f64

    async def Acquire(self) -> float:
        self.state = Runner_State.ACQUIRE_IN_PROGRESS
        planned_f64 = self.timing_policy.Sample_Acquire(self.job.kind)
        self.planned_acquire_f64_opt = planned_f64
        self.job.acquire_duration_f64 = await self._Phase(planned_f64, "acquiring")
        return planned_f64

    async def Install(self) -> float:
        self.state = Runner_State.INSTALL_IN_PROGRESS
        planned_f64 = self.timing_policy.Sample_Install(self.job.kind)
        self.planned_install_f64_opt = planned_f64
        self.job.install_duration_f64 = await self._Phase(planned_f64, "installing")
        return planned_f64

    async def Run(self) -> Job:
        if self.state != Runner_State.CREATED or self.job.started_ms_opt is not None:
            raise DoubleRunError(f"Job {self.job.job_id} was already run.")

        job_ = self.job
        job_.runner_id_opt = self.runner_id
        job_.Mark_Started(self.clock.Now())

        await self.Acquire()
        await self.Install()

        if self.blocking_bool:
            job_.Mark_Finished(self.clock.Now())
            job_.total_duration_f64 = job_.finished_ms_opt - job_.started_ms_opt
        else:
            job_.total_duration_f64 = job_.acquire_duration_f64 + job_.install_duration_f64
            job_.Mark_Finished(job_.started_ms_opt + job_.total_duration_f64)

        self.state = Runner_State.COMPLETED
        self.obs.logger.debug("%s (%s) done in %.0f ms", job_.Title, job_.job_id, job_.total_duration_f64)
        return job_


"""
Notes:

Non-blocking runners assign the planned durations and never suspend.
Blocking runners sleep on the clock for each phase and record the measured
elapsed time instead of the planned one.

The runner id is written onto the job only once Run() has passed its
double-run check, so a rejected runner leaves the job untouched.
"""
