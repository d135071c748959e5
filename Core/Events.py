# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Events.py
#  Purpose: Define the typed events published by the job emitter.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from Core.Job import Job


class Event_Type(str, Enum):
    NEW_JOB             = "new_job"
    GENERATION_COMPLETE = "generation_complete"


@dataclass(frozen=True)
class Emitter_Event:

    seq        : int
    event_type : Event_Type
    job_opt    : Optional[Job] = None


Emitter_Listener = Callable[[Emitter_Event], None]
