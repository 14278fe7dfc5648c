"""Tests for Layer 2 — hierarchy assembly and unassigned buckets."""

import copy

from plantsight.engine.pipeline import create_pipeline, summarize
from plantsight.snapshot.loader import build_context
from tests.conftest import END_TO_END, PLANT


def _run(snapshot):
    return create_pipeline().run(build_context(snapshot))


def test_unassigned_buckets():
    ctx = _run(PLANT)
    assert ctx.unassigned_inverters == ["invC"]
    assert ctx.unassigned_dc_cables == ["dc-loose", "dc-empty"]
    assert ctx.unassigned_ac_cables == ["ac-loose"]
    assert ctx.unassigned_arrays == ["pv-roofb"]


def test_every_inverter_appears_exactly_once():
    summary = summarize(PLANT)
    topo = summary.topology
    placed = [inv.id for b in topo.main_boards for inv in b.inverters]
    placed += [inv.id for inv in topo.unassigned_inverters]
    assert sorted(placed) == ["invA", "invB", "invC"]


def test_every_dc_cable_in_at_most_one_string():
    summary = summarize(PLANT)
    topo = summary.topology
    inverters = [inv for b in topo.main_boards for inv in b.inverters] + topo.unassigned_inverters
    in_strings = [s.cable_id for inv in inverters for s in inv.strings]
    assert len(in_strings) == len(set(in_strings))
    dc_ids = [line["id"] for line in PLANT["lines"] if line["type"] == "dc"]
    assert sorted(in_strings + topo.unassigned_dc_cables) == sorted(dc_ids)


def test_uncalibrated_tree_degrades_to_empty():
    snapshot = dict(PLANT, scale={"ratio": 0})
    summary = summarize(snapshot)
    topo = summary.topology
    assert [b.id for b in topo.main_boards] == ["mb1", "mb2"]
    assert all(b.inverters == [] and b.feeder_ids == [] for b in topo.main_boards)
    assert [inv.id for inv in topo.unassigned_inverters] == ["invA", "invB", "invC"]
    assert all(inv.strings == [] for inv in topo.unassigned_inverters)
    assert summary.calibrated is False


def test_no_equipment():
    snapshot = copy.deepcopy(END_TO_END)
    snapshot["equipment"] = []
    ctx = _run(snapshot)
    assert ctx.errors == {}
    assert ctx.main_boards == [] and ctx.inverters == []
    assert ctx.unassigned_dc_cables == ["dc1"]
    assert ctx.unassigned_arrays == ["pv1"]
