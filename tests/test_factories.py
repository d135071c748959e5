import numpy as np
import pytest

from Core.Clock import Virtual_Clock
from Core.Errors import ConfigurationError
from Core.Job import Job_Kind, Size_Class
from Models.Catalog import DEFAULT_CATALOG, DEFAULT_WEIGHTS
from Models.Factories import Build_Factory, Uniform_Job_Factory, Weighted_Job_Factory


KIND_A = Job_Kind(title="A", size_class=Size_Class.SMALL)
KIND_B = Job_Kind(title="B", size_class=Size_Class.BIG)
KIND_Z = Job_Kind(title="Z", size_class=Size_Class.MEDIUM)


def _Weighted(weights: dict, seed: int = 7) -> Weighted_Job_Factory:
    return Weighted_Job_Factory(
        catalog=[KIND_A, KIND_B, KIND_Z],
        weights_dict=weights,
        rng_generator=np.random.default_rng(seed),
        clock=Virtual_Clock(start_ms_f64_opt=1000.0),
    )


@pytest.mark.parametrize(
    "weights",
    [{}, {"A": 0, "B": 0}, {"A": 1, "B": -1}, {"A": 1, "Nope": 1}],
)
def test_invalid_weight_tables_are_rejected(weights) -> None:
    with pytest.raises(ConfigurationError):
        _Weighted(weights)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        _Weighted({})


def test_select_kind_uses_first_cumulative_weight_exceeding_draw() -> None:
    factory = _Weighted({"A": 1, "B": 1})

    assert factory.Total_Weight == 2.0
    assert factory.Select_Kind(0.0) is KIND_A
    assert factory.Select_Kind(0.999) is KIND_A
    assert factory.Select_Kind(1.0) is KIND_B
    assert factory.Select_Kind(1.999) is KIND_B


def test_zero_weight_kind_is_never_selected() -> None:
    factory = _Weighted({"A": 1, "Z": 0, "B": 1})

    assert factory.Select_Kind(1.0) is KIND_B
    titles = {factory.Generate().kind.title for _ in range(2000)}
    assert titles == {"A", "B"}


def test_equal_weights_give_balanced_kinds() -> None:
    factory = _Weighted({"A": 1, "B": 1}, seed=2024)

    counts = {"A": 0, "B": 0}
    for _ in range(100_000):
        counts[factory.Generate().kind.title] += 1

    assert counts["A"] + counts["B"] == 100_000
    assert 0.95 <= counts["A"] / counts["B"] <= 1.05


def test_default_weights_favour_the_heaviest_kind() -> None:
    factory = Weighted_Job_Factory(DEFAULT_CATALOG, DEFAULT_WEIGHTS, np.random.default_rng(11))

    counts: dict = {}
    for _ in range(20_000):
        title = factory.Generate().kind.title
        counts[title] = counts.get(title, 0) + 1

    share = counts["Tunic"] / 20_000
    assert 0.50 <= share <= 0.59
    assert counts["Hollow Knight"] < counts["Lost Ark"]


def test_generated_job_only_has_created_stamp() -> None:
    job = _Weighted({"A": 1}).Generate()

    assert job.kind is KIND_A
    assert job.created_ms == 1000.0
    assert job.started_ms_opt is None
    assert job.finished_ms_opt is None
    assert job.runner_id_opt is None
    assert job.was_nudged_bool is False
    assert job.job_id.startswith("activity_")


def test_same_seed_gives_same_sequence() -> None:
    f1 = _Weighted({"A": 1, "B": 3}, seed=5)
    f2 = _Weighted({"A": 1, "B": 3}, seed=5)

    assert [f1.Generate().kind.title for _ in range(50)] == [f2.Generate().kind.title for _ in range(50)]


def test_uniform_factory_covers_catalog() -> None:
    factory = Uniform_Job_Factory(DEFAULT_CATALOG, np.random.default_rng(3))

    titles = {factory.Generate().kind.title for _ in range(500)}
    assert titles == {kind.title for kind in DEFAULT_CATALOG}


def test_uniform_factory_rejects_empty_catalog() -> None:
    with pytest.raises(ConfigurationError):
        Uniform_Job_Factory([], np.random.default_rng(3))


def test_build_factory_selects_variant() -> None:
    rng = np.random.default_rng(1)
    clock = Virtual_Clock(0.0)

    assert isinstance(Build_Factory("weighted", DEFAULT_CATALOG, DEFAULT_WEIGHTS, rng, clock), Weighted_Job_Factory)
    assert isinstance(Build_Factory("uniform", DEFAULT_CATALOG, DEFAULT_WEIGHTS, rng, clock), Uniform_Job_Factory)
    with pytest.raises(ConfigurationError):
        Build_Factory("roulette", DEFAULT_CATALOG, DEFAULT_WEIGHTS, rng, clock)
