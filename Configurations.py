# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Configurations.py
#  Purpose: Define configuration dataclasses for simulation components.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass, field
from typing import Dict, Optional

from Core.Errors import ConfigurationError
from Models.Catalog import DEFAULT_WEIGHTS


FACTORY_VARIANTS = ("weighted", "uniform")
DRIVER_MODES     = ("ticked", "batch")


@dataclass(frozen=True)
class Duration_Config:

    # base magnitudes are "size * per_size + offset", then scaled to ms
    scale_f64            : float = 10.0
    acquire_per_size_f64 : float = 10.0
    acquire_offset_f64   : float = 5.0
    install_per_size_f64 : float = 50.0
    install_offset_f64   : float = 50.0

    jitter_small_f64 : float = 50.0
    jitter_large_f64 : float = 150.0

    def __post_init__(self) -> None:
        if self.scale_f64 <= 0.0:
            raise ConfigurationError("scale_f64 must be > 0.")
        if self.jitter_small_f64 < 0.0 or self.jitter_large_f64 < 0.0:
            raise ConfigurationError("jitter spreads must be >= 0.")
        for name_str in ("acquire_per_size_f64", "acquire_offset_f64", "install_per_size_f64", "install_offset_f64"):
            if getattr(self, name_str) < 0.0:
                raise ConfigurationError(f"{name_str} must be >= 0.")


@dataclass(frozen=True)
class Emitter_Config:

    interval_ms_f64 : float = 100.0
    total_i32       : int   = 100

    def __post_init__(self) -> None:
        if self.interval_ms_f64 <= 0.0:
            raise ConfigurationError("interval_ms_f64 must be > 0.")
        if self.total_i32 < 0:
            raise ConfigurationError("total_i32 must be >= 0.")


@dataclass(frozen=True)
class Driver_Config:

    drain_interval_ms_f64 : float = 633.0
    blocking_bool         : bool  = False
    mode_str              : str   = "ticked"

    def __post_init__(self) -> None:
        if self.drain_interval_ms_f64 <= 0.0:
            raise ConfigurationError("drain_interval_ms_f64 must be > 0.")
        if self.mode_str not in DRIVER_MODES:
            raise ConfigurationError(f"mode_str must be one of {DRIVER_MODES}.")


@dataclass(frozen=True)
class Output_Config:

    db_path_str_opt    : Optional[str] = None
    output_dir_str_opt : Optional[str] = None
    plots_bool         : bool = False
    print_bool         : bool = True


@dataclass(frozen=True)
class Simulation_Config:

    seed_i32_opt : Optional[int] = 1453
    factory_str  : str = "weighted"
    weights_dict : Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    duration_config : Duration_Config = Duration_Config()
    emitter_config  : Emitter_Config  = Emitter_Config()
    driver_config   : Driver_Config   = Driver_Config()
    output_config   : Output_Config   = Output_Config()

    def __post_init__(self) -> None:
        if self.factory_str not in FACTORY_VARIANTS:
            raise ConfigurationError(f"factory_str must be one of {FACTORY_VARIANTS}.")


"""
Notes (implementation choices embedded in config):

Timing constants are configuration, not behaviour: the defaults reproduce the
reference workload (acquire ~ size*10+5, install ~ size*50+50, x10 ms).

The default drain interval (633 ms) is not a multiple of the default
generation interval (100 ms).
"""
