# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Core/Clock.py
#  Purpose: Provide wall-clock and virtual time sources with async sleeping.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import asyncio
import time
from typing import Optional, Protocol


class Clock(Protocol):
    def Now(self) -> float:
        ...

    async def Sleep(self, duration_ms_f64: float) -> None:
        ...


class Wall_Clock:

    def Now(self) -> float:
        return float(int(time.time() * 1000))

    async def Sleep(self, duration_ms_f64: float) -> None:
        await asyncio.sleep(max(float(duration_ms_f64), 0.0) / 1000.0)


class Virtual_Clock:

    def __init__(self, start_ms_f64_opt: Optional[float] = None, overshoot_ms_f64: float = 0.0) -> None:
        if start_ms_f64_opt is None:
            start_ms_f64_opt = float(int(time.time() * 1000))
        self.now_ms_f64       : float = float(start_ms_f64_opt)
        self.overshoot_ms_f64 : float = float(overshoot_ms_f64)
        self.sleeps_i32       : int   = 0

    def Now(self) -> float:
        return self.now_ms_f64

    def Advance(self, duration_ms_f64: float) -> None:
        self.now_ms_f64 += max(float(duration_ms_f64), 0.0)

    async def Sleep(self, duration_ms_f64: float) -> None:
        self.sleeps_i32 += 1
        self.Advance(float(duration_ms_f64) + self.overshoot_ms_f64)
        await asyncio.sleep(0)


"""
Notes:

Wall_Clock reports epoch milliseconds truncated to whole ms.

Virtual_Clock only moves when someone sleeps on it: each Sleep() advances
Now() by the requested duration (plus an optional fixed overshoot) and
yields to the loop once. Concurrent sleepers add up, so a virtual clock
models one sequential server.
"""
