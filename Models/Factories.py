# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Models/Factories.py
#  Purpose: Sample new jobs from the kind catalog (weighted or uniform).
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Sequence, Tuple

import numpy as np

from Core.Clock import Clock, Wall_Clock
from Core.Errors import ConfigurationError
from Core.Job import Job, Job_Kind, New_Id
from Models.Catalog import Catalog_By_Title


class Job_Factory(Protocol):
    def Generate(self) -> Job:
        ...


def _New_Job(kind: Job_Kind, clock: Clock) -> Job:
    return Job(job_id=New_Id("activity"), kind=kind, created_ms=clock.Now())


@dataclass
class Weighted_Job_Factory:

    catalog       : Sequence[Job_Kind]
    weights_dict  : Dict[str, float]
    rng_generator : np.random.Generator
    clock         : Clock = field(default_factory=Wall_Clock)

    _table_list_tuple : List[Tuple[Job_Kind, float]] = field(init=False, repr=False)
    _total_weight_f64 : float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.weights_dict:
            raise ConfigurationError("Weight table is empty.")

        by_title_dict = Catalog_By_Title(self.catalog)
        table_list: List[Tuple[Job_Kind, float]] = []
        for title_str, weight in self.weights_dict.items():
            if title_str not in by_title_dict:
                raise ConfigurationError(f"Weight table names unknown kind: {title_str}")
            weight_f64 = float(weight)
            if weight_f64 < 0.0:
                raise ConfigurationError(f"Weight for {title_str} must be >= 0.")
            table_list.append((by_title_dict[title_str], weight_f64))

        total_f64 = sum(weight_f64 for _, weight_f64 in table_list)
        if total_f64 <= 0.0:
            raise ConfigurationError("All weights are zero.")

        self._table_list_tuple = table_list
        self._total_weight_f64 = total_f64

    @property
    def Total_Weight(self) -> float:
        return self._total_weight_f64

    def Select_Kind(self, r_f64: float) -> Job_Kind:
        cumulative_f64 = 0.0
        for kind, weight_f64 in self._table_list_tuple:
            cumulative_f64 += weight_f64
            if r_f64 < cumulative_f64:
                return kind

        # float edge at r ~ total: fall back to the last kind that can be drawn
        for kind, weight_f64 in reversed(self._table_list_tuple):
            if weight_f64 > 0.0:
                return kind
        raise ConfigurationError("All weights are zero.")

    def Generate(self) -> Job:
        r_f64 = float(self.rng_generator.random()) * self._total_weight_f64
        return _New_Job(self.Select_Kind(r_f64), self.clock)


@dataclass
class Uniform_Job_Factory:

    catalog       : Sequence[Job_Kind]
    rng_generator : np.random.Generator
    clock         : Clock = field(default_factory=Wall_Clock)

    def __post_init__(self) -> None:
        if len(self.catalog) == 0:
            raise ConfigurationError("Catalog is empty.")

    def Generate(self) -> Job:
        index_i32 = int(self.rng_generator.integers(0, len(self.catalog)))
        return _New_Job(self.catalog[index_i32], self.clock)


def Build_Factory(
    factory_str   : str,
    catalog       : Sequence[Job_Kind],
    weights_dict  : Dict[str, float],
    rng_generator : np.random.Generator,
    clock         : Clock,
) -> Job_Factory:
    if factory_str == "weighted":
        return Weighted_Job_Factory(catalog, weights_dict, rng_generator, clock)
    if factory_str == "uniform":
        return Uniform_Job_Factory(catalog, rng_generator, clock)
    raise ConfigurationError(f"Unknown factory variant: {factory_str}")


"""
Notes:

Weighted sampling walks a fixed-order weight table: a uniform draw r in
[0, total) selects the first kind whose running cumulative weight exceeds r.
Zero-weight entries are never selected.
"""
