"""Tests for the pipeline orchestrator."""

import copy

import pytest

from plantsight.engine.config import EngineConfig
from plantsight.engine.context import SummaryContext
from plantsight.engine.pipeline import Pipeline, create_pipeline, summarize
from plantsight.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry
from plantsight.models.snapshot import PlantSnapshot, ScaleInfo
from plantsight.snapshot.loader import build_context
from tests.conftest import END_TO_END, PLANT


def _ctx(ratio=1.0) -> SummaryContext:
    return SummaryContext(snapshot=PlantSnapshot(scale=ScaleInfo(ratio=ratio)))


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def t1(ctx: SummaryContext) -> None:
        results.append("t1")

    def t2(ctx: SummaryContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.METRICS, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.METRICS, fn=t1))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T0.02"}


def test_pipeline_handles_errors():
    reg = TransformRegistry()
    ran = []

    def fail(ctx: SummaryContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="T0.01", layer=Layer.METRICS, fn=fail))
    reg.register(TransformSpec(id="T0.02", layer=Layer.METRICS, fn=lambda ctx: ran.append(1)))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert "test error" in ctx.errors["T0.01"]
    assert "T0.02" in ctx.completed_transforms
    assert ran == [1]


def test_scale_gate_skips_matchers_when_uncalibrated():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.01", layer=Layer.MATCHING, fn=lambda ctx: None, requires_scale=True))
    reg.register(TransformSpec(id="T2.01", layer=Layer.TOPOLOGY, fn=lambda ctx: None, dependencies=["T1.01"]))

    ctx = Pipeline(registry=reg).run(_ctx(ratio=0))
    assert ctx.skipped_transforms == {"T1.01"}
    assert ctx.completed_transforms == {"T2.01"}

    ctx = Pipeline(registry=reg).run(_ctx(ratio=0.1))
    assert ctx.skipped_transforms == set()


def test_targets_run_only_their_dependencies():
    ctx = create_pipeline().run(build_context(END_TO_END), targets={"T0.04"})
    assert ctx.completed_transforms == {"T0.01", "T0.04"}
    assert ctx.strings == []

    ctx = create_pipeline().run(build_context(PLANT), targets={"T3.02"})
    assert ctx.completed_transforms == {"T0.01", "T0.03", "T0.04", "T1.01", "T1.02", "T1.03", "T2.01", "T3.02"}
    assert ctx.cable_groups == {}
    assert ctx.unassigned_inverters == ["invC"]


def test_targets_skip_only_queued_matchers():
    snapshot = dict(END_TO_END, scale={"ratio": None})
    ctx = create_pipeline().run(build_context(snapshot), targets={"T0.02"})
    assert ctx.skipped_transforms == set()

    ctx = create_pipeline().run(build_context(snapshot), targets={"T2.01"})
    assert ctx.skipped_transforms == {"T1.01", "T1.02", "T1.03"}
    assert "T2.01" in ctx.completed_transforms


def test_full_registry_runs_clean():
    pipeline = create_pipeline()
    ctx = pipeline.run(build_context(PLANT))
    assert ctx.errors == {}
    assert ctx.completed_transforms == {s.id for s in get_registry().all()}


def test_summarize_is_deterministic():
    first = summarize(PLANT).model_dump_json()
    second = summarize(PLANT).model_dump_json()
    assert first == second


def test_summarize_does_not_mutate_input():
    raw = copy.deepcopy(PLANT)
    summarize(raw)
    assert raw == PLANT

    model = PlantSnapshot.model_validate(PLANT)
    before = model.model_dump()
    summarize(model)
    assert model.model_dump() == before


def test_config_threshold_widens_matching():
    # Inverter 20px from the board feeder end: 2 m at 0.1 m/px
    snapshot = copy.deepcopy(END_TO_END)
    snapshot["equipment"][1]["position"] = {"x": 25, "y": 0}
    snapshot["lines"][1]["points"][0] = {"x": 25, "y": 0}

    tight = summarize(snapshot)
    assert tight.topology.main_boards[0].inverters == []

    loose = summarize(snapshot, EngineConfig(proximity_threshold_m=2.5))
    assert [i.id for i in loose.topology.main_boards[0].inverters] == ["inv1"]


def test_pipeline_config_applies_to_context():
    snapshot = copy.deepcopy(END_TO_END)
    snapshot["equipment"][1]["position"] = {"x": 25, "y": 0}
    snapshot["lines"][1]["points"][0] = {"x": 25, "y": 0}

    ctx = create_pipeline(EngineConfig(proximity_threshold_m=2.5)).run(build_context(snapshot))
    assert ctx.config.proximity_threshold_m == 2.5
    assert ctx.threshold_px == pytest.approx(25.0)
    assert ctx.main_boards[0].inverter_ids == ["inv1"]

    # No pipeline config: the context keeps the one it was built with
    ctx = create_pipeline().run(build_context(snapshot, EngineConfig(proximity_threshold_m=2.5)))
    assert ctx.main_boards[0].inverter_ids == ["inv1"]


def test_engine_config_rejects_bad_values():
    with pytest.raises(ValueError, match="array_tie_break"):
        EngineConfig(array_tie_break="frist")
    with pytest.raises(ValueError, match="proximity_threshold_m"):
        EngineConfig(proximity_threshold_m=0)
