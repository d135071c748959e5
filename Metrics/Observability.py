# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Metrics/Observability.py
#  Purpose: Thread logging and tracing through the simulation explicitly.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Protocol


ROOT_LOGGER_NAME = "qns"


class Checkpoint(str, Enum):
    RUN_STARTED  = "run started"
    TICK_DRAINED = "tick drained"
    RUN_COMPLETE = "run complete"


@dataclass
class Span:

    name          : str
    started_f64   : float
    annotations   : Dict[str, Any] = field(default_factory=dict)
    metadata      : Dict[str, Any] = field(default_factory=dict)
    ended_f64_opt : Optional[float] = None
    error_str_opt : Optional[str] = None

    def Add_Metadata(self, key_str: str, value_any: Any) -> None:
        self.metadata[key_str] = value_any

    @property
    def Elapsed_Ms(self) -> Optional[float]:
        if self.ended_f64_opt is None:
            return None
        return (self.ended_f64_opt - self.started_f64) * 1000.0


class Tracer(Protocol):
    def Span(self, name_str: str, **annotations_any: Any):
        ...

    def Checkpoint(self, checkpoint: Checkpoint, **fields_any: Any) -> None:
        ...


class Null_Tracer:

    @contextmanager
    def Span(self, name_str: str, **annotations_any: Any) -> Iterator[Span]:
        yield Span(name=name_str, started_f64=0.0)

    def Checkpoint(self, checkpoint: Checkpoint, **fields_any: Any) -> None:
        return


class Logging_Tracer:

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(f"{ROOT_LOGGER_NAME}.trace")
        self.finished_spans_list : List[Span] = []
        self.checkpoints_list    : List[Dict[str, Any]] = []

    @contextmanager
    def Span(self, name_str: str, **annotations_any: Any) -> Iterator[Span]:
        span_ = Span(name=name_str, started_f64=time.perf_counter(), annotations=dict(annotations_any))
        self.logger.debug("span %s opened %s", name_str, span_.annotations)
        try:
            yield span_
        except BaseException as exc:
            span_.error_str_opt = repr(exc)
            raise
        finally:
            span_.ended_f64_opt = time.perf_counter()
            self.finished_spans_list.append(span_)
            self.logger.debug("span %s closed after %.1f ms", name_str, span_.Elapsed_Ms)

    def Checkpoint(self, checkpoint: Checkpoint, **fields_any: Any) -> None:
        record_dict = {"checkpoint": Checkpoint(checkpoint).value, **fields_any}
        self.checkpoints_list.append(record_dict)
        self.logger.info("checkpoint: %s %s", record_dict["checkpoint"], fields_any)

    def Checkpoint_Names(self) -> List[str]:
        return [str(record["checkpoint"]) for record in self.checkpoints_list]


@dataclass(frozen=True)
class Observability:

    logger : logging.Logger = field(default_factory=lambda: logging.getLogger(ROOT_LOGGER_NAME))
    tracer : Tracer = field(default_factory=Null_Tracer)

    def Child(self, suffix_str: str) -> "Observability":
        return replace(self, logger=self.logger.getChild(suffix_str))


"""
Notes:

The observability context is passed explicitly to the driver, stores,
runners and DALs. The default Null_Tracer turns every span and checkpoint
into a no-op. Logging_Tracer writes span boundaries and checkpoints to the
context logger and keeps them in memory for inspection.
"""
