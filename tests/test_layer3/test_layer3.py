"""Tests for Layer 3 — capacity, DC/AC ratio, cable schedule, roofs, materials, simulation."""

import copy

import pytest

from plantsight.engine.pipeline import summarize
from plantsight.models.snapshot import PlantSnapshot
from tests.conftest import END_TO_END, PLANT


def test_end_to_end_scenario():
    summary = summarize(END_TO_END)
    board = summary.topology.main_boards[0]
    assert [inv.id for inv in board.inverters] == ["inv1"]

    inverter = board.inverters[0]
    assert len(inverter.strings) == 1
    string = inverter.strings[0]
    assert string.pv_array_id == "pv1"
    assert string.capacity_kwp == pytest.approx(2.4)
    assert string.length_m == pytest.approx(1.5)
    assert summary.cables["dc"].total_length_m == pytest.approx(1.5)
    assert inverter.dc_ac_ratio == "1.20"


def test_plant_totals():
    t = summarize(PLANT).totals
    assert t.panel_count == 24
    assert t.capacity_kwp == pytest.approx(9.6)
    assert t.connected_panel_count == 22
    assert t.connected_capacity_kwp == pytest.approx(8.8)
    assert t.inverter_count == 3
    assert t.ac_capacity_kw == pytest.approx(30.0)
    assert t.dc_ac_ratio == "0.29"
    assert t.roof_area_m2 == pytest.approx(225.0)


def test_inverter_ratios():
    topo = summarize(PLANT).topology
    boards = {b.id: b for b in topo.main_boards}
    inv_a = boards["mb1"].inverters[0]
    assert inv_a.panel_count == 22
    assert inv_a.dc_capacity_kw == pytest.approx(8.8)
    assert inv_a.ac_capacity_kw == pytest.approx(10.0)
    assert inv_a.dc_ac_ratio == "0.88"

    inv_b = boards["mb2"].inverters[0]
    assert inv_b.dc_capacity_kw == 0.0
    assert inv_b.dc_ac_ratio == "0.00"

    # No config lookup: AC 0 → ratio shown as 0.00, never inf/nan
    inv_c = topo.unassigned_inverters[0]
    assert inv_c.ac_capacity_kw == 0.0
    assert inv_c.dc_ac_ratio == "0.00"

    assert boards["mb1"].dc_capacity_kw == pytest.approx(8.8)
    assert boards["mb2"].ac_capacity_kw == pytest.approx(20.0)


def test_cable_groups_by_type_and_thickness():
    cables = summarize(PLANT).cables
    dc = cables["dc"]
    assert [g.thickness_mm for g in dc.groups] == [4, 6]
    assert dc.groups[0].cable_ids == ["dcA1", "dcB1"]
    assert dc.groups[1].cable_ids == ["dcA2", "dc-loose", "dc-empty"]
    assert dc.count == 5

    dc_a1 = (500**2 + 100**2) ** 0.5 * 0.05
    assert dc.groups[0].length_m == pytest.approx(dc_a1 + 60.0, abs=0.01)

    ac = cables["ac"]
    assert [g.thickness_mm for g in ac.groups] == [6, 16]
    assert ac.groups[0].length_m == pytest.approx(5.0)
    assert ac.total_length_m == pytest.approx(sum(g.length_m for g in ac.groups), abs=0.01)


def test_roof_totals():
    roofs = {r.id: r for r in summarize(PLANT).roofs}
    assert roofs["roof-a"].area_m2 == pytest.approx(200.0)
    assert roofs["roof-a"].array_ids == ["pvA1", "pvA2"]
    assert roofs["roof-a"].panel_count == 22
    assert roofs["roof-b"].capacity_kwp == pytest.approx(0.8)
    assert roofs["roof-b"].pitch == 0


def test_placed_materials():
    summary = summarize(PLANT)
    walkways = summary.walkways
    assert walkways.total_length_m == pytest.approx(23.0)
    groups = {g.key: g for g in walkways.groups}
    assert groups["walk-600"].length_m == pytest.approx(20.0)
    assert groups["walk-600"].item_ids == ["w1", "w2"]
    assert groups["default"].length_m == pytest.approx(3.0)
    assert summary.cable_trays.total_length_m == pytest.approx(20.0)


def test_simulation_check():
    sim = summarize(PLANT).simulation
    assert sim.linked
    assert sim.layout_modules == 24
    assert not sim.modules_match
    assert not sim.inverters_match

    matched = copy.deepcopy(PLANT)
    matched["simulation"] = {"module_count": 24, "inverter_count": None}
    sim = summarize(matched).simulation
    assert sim.modules_match and sim.inverters_match

    sim = summarize(END_TO_END).simulation
    assert not sim.linked and sim.modules_match


def test_missing_panel_config_zeroes_capacity_only():
    snapshot = dict(PLANT, panel_config=None)
    summary = summarize(snapshot)
    assert summary.totals.panel_count == 24
    assert summary.totals.capacity_kwp == 0.0


def test_zero_ratio_zeroes_every_geometric_metric():
    snapshot = dict(PLANT, scale={"ratio": 0})
    summary = summarize(snapshot)
    t = summary.totals
    assert t.roof_area_m2 == 0.0
    assert t.dc_cable_length_m == 0.0
    assert t.ac_cable_length_m == 0.0
    assert all(r.area_m2 == 0.0 for r in summary.roofs)
    assert all(g.length_m == 0.0 for c in summary.cables.values() for g in c.groups)
    assert t.connected_panel_count == 0
    assert t.dc_capacity_kw == 0.0


def test_empty_snapshot():
    summary = summarize(PlantSnapshot())
    assert summary.totals.panel_count == 0
    assert summary.totals.dc_ac_ratio == "0.00"
    assert summary.cables["dc"].groups == []
    assert summary.topology.main_boards == []
    assert "PLANT SUMMARY" in summary.summary_text


def test_summary_text_lists_tree():
    text = summarize(PLANT).summary_text
    assert "Main board mb1: 1 inverter(s)" in text
    assert "Unassigned inverters: 1" in text
    assert "String 1: 10p" in text
