# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Models/Distributions.py
#  Purpose: Define jittered duration sources and the per-kind timing policy.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from Configurations import Duration_Config
from Core.Job import Job_Kind


class Duration_Model(Protocol):
    def Sample(self, base_ms_f64: float, jitter_f64: float) -> float:
        ...


@dataclass(frozen=True)
class Jittered_Duration_Model:

    rng_generator : np.random.Generator

    def Sample(self, base_ms_f64: float, jitter_f64: float) -> float:
        if jitter_f64 < 0:
            raise ValueError("jitter_f64 must be >= 0.")

        # uniform in [-jitter, +jitter), rounded to whole ms
        jitter_factor_f64 = (float(self.rng_generator.random()) - 0.5) * float(jitter_f64) * 2.0
        return float(max(round(float(base_ms_f64) + jitter_factor_f64), 0))


@dataclass(frozen=True)
class Fixed_Duration_Model:

    def Sample(self, base_ms_f64: float, jitter_f64: float) -> float:
        return float(max(base_ms_f64, 0.0))


@dataclass(frozen=True)
class Timing_Policy:

    cfg_duration_config  : Duration_Config
    duration_model       : Duration_Model

    def Base_Acquire(self, kind: Job_Kind) -> float:
        cfg = self.cfg_duration_config
        size_f64 = float(int(kind.size_class))
        return (size_f64 * cfg.acquire_per_size_f64 + cfg.acquire_offset_f64) * cfg.scale_f64

    def Base_Install(self, kind: Job_Kind) -> float:
        cfg = self.cfg_duration_config
        size_f64 = float(int(kind.size_class))
        return (size_f64 * cfg.install_per_size_f64 + cfg.install_offset_f64) * cfg.scale_f64

    def Sample_Acquire(self, kind: Job_Kind) -> float:
        return float(self.duration_model.Sample(self.Base_Acquire(kind), self.cfg_duration_config.jitter_small_f64))

    def Sample_Install(self, kind: Job_Kind) -> float:
        return float(self.duration_model.Sample(self.Base_Install(kind), self.cfg_duration_config.jitter_large_f64))
