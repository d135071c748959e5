import pytest

from Metrics.Observability import Checkpoint, Logging_Tracer, Null_Tracer, Observability, Span


def test_logging_tracer_records_span_annotations_and_metadata() -> None:
    tracer = Logging_Tracer()

    with tracer.Span("ConsumerRun", store="fifo") as span_:
        span_.Add_Metadata("items", 3)

    finished = tracer.finished_spans_list
    assert [s.name for s in finished] == ["ConsumerRun"]
    assert finished[0].annotations == {"store": "fifo"}
    assert finished[0].metadata == {"items": 3}
    assert finished[0].Elapsed_Ms is not None and finished[0].Elapsed_Ms >= 0.0
    assert not hasattr(Span, "Annotate")


def test_logging_tracer_keeps_failed_spans() -> None:
    tracer = Logging_Tracer()

    with pytest.raises(RuntimeError):
        with tracer.Span("Generate"):
            raise RuntimeError("stop")

    assert tracer.finished_spans_list[0].error_str_opt == "RuntimeError('stop')"


def test_checkpoints_are_recorded_in_order() -> None:
    tracer = Logging_Tracer()

    tracer.Checkpoint(Checkpoint.RUN_STARTED, run_id="r")
    tracer.Checkpoint(Checkpoint.RUN_COMPLETE, run_id="r")

    assert tracer.Checkpoint_Names() == ["run started", "run complete"]
    assert tracer.checkpoints_list[0]["run_id"] == "r"


def test_null_tracer_and_child_logger() -> None:
    obs = Observability()

    with obs.tracer.Span("anything") as span_:
        span_.Add_Metadata("k", 1)
    obs.tracer.Checkpoint(Checkpoint.TICK_DRAINED)

    assert isinstance(obs.tracer, Null_Tracer)
    assert obs.Child("runner").logger.name == "qns.runner"
