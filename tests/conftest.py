from typing import Callable

import pytest

from Configurations import Duration_Config
from Core.Job import Job, Job_Kind, New_Id, Size_Class
from Models.Distributions import Fixed_Duration_Model, Timing_Policy


SMALL_KIND  = Job_Kind(title="Tunic", size_class=Size_Class.SMALL, launch_time_ms=1500.0)
MEDIUM_KIND = Job_Kind(title="Lost Ark", size_class=Size_Class.MEDIUM, launch_time_ms=5000.0)
BIG_KIND    = Job_Kind(title="World of Warcraft", size_class=Size_Class.BIG, launch_time_ms=20000.0)


@pytest.fixture
def small_kind() -> Job_Kind:
    return SMALL_KIND


@pytest.fixture
def medium_kind() -> Job_Kind:
    return MEDIUM_KIND


@pytest.fixture
def big_kind() -> Job_Kind:
    return BIG_KIND


@pytest.fixture
def make_job() -> Callable[..., Job]:
    def _Make(kind: Job_Kind, created_ms: float = 1_700_000_000_000.0, total_f64: float = 0.0) -> Job:
        return Job(job_id=New_Id("activity"), kind=kind, created_ms=created_ms, total_duration_f64=total_f64)

    return _Make


@pytest.fixture
def fixed_policy() -> Timing_Policy:
    return Timing_Policy(Duration_Config(), Fixed_Duration_Model())
