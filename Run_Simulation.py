# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Run_Simulation.py
#  Purpose: Build and run a FIFO vs Nudge comparison and print its summaries.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import argparse
import asyncio
import logging
import os
from dataclasses import replace
from typing import List, Optional, Sequence

import numpy as np

from Configurations import (
    DRIVER_MODES,
    FACTORY_VARIANTS,
    Driver_Config,
    Emitter_Config,
    Output_Config,
    Simulation_Config,
)
from Core.Clock import Clock, Wall_Clock
from Core.Emitter import Job_Emitter
from Core.Simulator import Simulation_Result, Simulator
from Data.Access import Activity_DAL, Summary_DAL
from Data.Record_Stores import In_Memory_Record_Store, Record_Store, Sqlite_Record_Store
from Metrics.Observability import ROOT_LOGGER_NAME, Logging_Tracer, Observability
from Models.Catalog import DEFAULT_CATALOG
from Models.Distributions import Jittered_Duration_Model, Timing_Policy
from Models.Factories import Build_Factory
from Models.Stores import Build_Stores


def Build_Simulation(
    simulation_config : Simulation_Config,
    obs               : Optional[Observability] = None,
    record_store_opt  : Optional[Record_Store] = None,
    clock_opt         : Optional[Clock] = None,
) -> Simulator:
    obs = obs or Observability()
    clock = clock_opt or Wall_Clock()

    seed_opt = simulation_config.seed_i32_opt
    factory_rng = np.random.default_rng(seed_opt)
    duration_rng = np.random.default_rng(None if seed_opt is None else seed_opt + 1000)

    factory = Build_Factory(
        simulation_config.factory_str,
        DEFAULT_CATALOG,
        simulation_config.weights_dict,
        factory_rng,
        clock,
    )
    timing_policy = Timing_Policy(simulation_config.duration_config, Jittered_Duration_Model(duration_rng))
    emitter = Job_Emitter(simulation_config.emitter_config, factory, clock=clock, obs=obs)

    if record_store_opt is None:
        db_path_opt = simulation_config.output_config.db_path_str_opt
        record_store_opt = Sqlite_Record_Store(db_path_opt) if db_path_opt else In_Memory_Record_Store()

    activity_dal = Activity_DAL(record_store_opt, obs=obs)
    summary_dal = Summary_DAL(record_store_opt, obs=obs)

    return Simulator(
        simulation_config,
        emitter,
        Build_Stores(obs),
        timing_policy,
        clock=clock,
        activity_dal_opt=activity_dal,
        summary_dal_opt=summary_dal,
        obs=obs,
    )


def Run(simulation_config: Simulation_Config, obs: Optional[Observability] = None) -> Simulation_Result:
    simulator = Build_Simulation(simulation_config, obs=obs)
    try:
        return asyncio.run(simulator.Run())
    finally:
        close_opt = getattr(simulator.summary_dal_opt.record_store, "Close", None)
        if callable(close_opt):
            close_opt()


def Parse_Args(argv_opt: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = Simulation_Config()

    parser = argparse.ArgumentParser(description="Compare FIFO and nudging queues on a synthetic workload.")
    parser.add_argument("--total", type=int, default=int(os.environ.get("TOTAL_RUNS", defaults.emitter_config.total_i32)))
    parser.add_argument("--interval-ms", type=float, default=defaults.emitter_config.interval_ms_f64)
    parser.add_argument("--drain-interval-ms", type=float, default=defaults.driver_config.drain_interval_ms_f64)
    parser.add_argument("--mode", choices=list(DRIVER_MODES), default=defaults.driver_config.mode_str)
    parser.add_argument("--blocking", action="store_true", help="actually wait for acquire/install durations")
    parser.add_argument("--factory", choices=list(FACTORY_VARIANTS), default=defaults.factory_str)
    parser.add_argument("--seed", type=int, default=defaults.seed_i32_opt)
    parser.add_argument("--db-path", default=None, help="SQLite file for activity and summary records")
    parser.add_argument("--outdir", default=None, help="directory for JSON/CSV results")
    parser.add_argument("--plots", action="store_true")
    parser.add_argument("--trace", action="store_true", help="log spans and checkpoints")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "info"))
    return parser.parse_args(argv_opt)


def Config_From_Args(args: argparse.Namespace) -> Simulation_Config:
    base = Simulation_Config()
    return replace(
        base,
        seed_i32_opt=args.seed,
        factory_str=args.factory,
        emitter_config=Emitter_Config(interval_ms_f64=args.interval_ms, total_i32=args.total),
        driver_config=Driver_Config(
            drain_interval_ms_f64=args.drain_interval_ms,
            blocking_bool=bool(args.blocking),
            mode_str=args.mode,
        ),
        output_config=Output_Config(
            db_path_str_opt=args.db_path,
            output_dir_str_opt=args.outdir,
            plots_bool=bool(args.plots),
        ),
    )


def main(argv_opt: Optional[List[str]] = None) -> None:
    args = Parse_Args(argv_opt)
    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s: %(message)s")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    tracer = Logging_Tracer(logger.getChild("trace")) if args.trace else None
    obs = Observability(logger=logger, tracer=tracer) if tracer else Observability(logger=logger)

    result = Run(Config_From_Args(args), obs=obs)

    print(f"Run {result.run_id}: {result.generated_i32} activities, {result.ticks_i32} ticks, "
          f"{result.elapsed_ms_f64:.0f} ms")


if __name__ == "__main__":
    main()
