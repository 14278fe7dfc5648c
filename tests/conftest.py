"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest


PANEL_400W = {"name": "400W mono", "width": 1.0, "length": 2.0, "wattage": 400}

# Board at origin, AC feeder to an inverter 5px away, one DC string out to a
# 2x3 array at (20, 0). At 0.1 m/px the 1 m threshold is 10px.
END_TO_END = {
    "scale": {"ratio": 0.1},
    "panel_config": PANEL_400W,
    "plant_setup": {"inverters": [{"id": "inv-cfg-5k", "name": "5 kW", "ac_capacity": 2.0}]},
    "equipment": [
        {"id": "mb1", "type": "main_board", "position": {"x": 0, "y": 0}, "name": "MB-1"},
        {"id": "inv1", "type": "inverter", "position": {"x": 5, "y": 0}, "config_id": "inv-cfg-5k"},
    ],
    "lines": [
        {"id": "ac1", "type": "ac", "points": [{"x": 0, "y": 0}, {"x": 5, "y": 0}]},
        {"id": "dc1", "type": "dc", "points": [{"x": 5, "y": 0}, {"x": 20, "y": 0}]},
    ],
    "pv_arrays": [
        {"id": "pv1", "position": {"x": 20, "y": 0}, "rows": 2, "columns": 3},
    ],
}

# Two boards, three inverters (one orphan), routed and unmatched cables,
# roofs, walkways and a simulation target. Scale 0.05 m/px → threshold 20px.
PLANT = {
    "scale": {"ratio": 0.05},
    "panel_config": PANEL_400W,
    "plant_setup": {
        "inverters": [
            {"id": "cfg-10", "name": "10 kW", "ac_capacity": 10.0},
            {"id": "cfg-20", "name": "20 kW", "ac_capacity": 20.0},
        ]
    },
    "roof_masks": [
        {
            "id": "roof-a",
            "points": [{"x": 0, "y": 0}, {"x": 400, "y": 0}, {"x": 400, "y": 200}, {"x": 0, "y": 200}],
            "pitch": 15,
            "direction": 180,
        },
        {
            "id": "roof-b",
            "points": [{"x": 0, "y": 300}, {"x": 200, "y": 300}, {"x": 200, "y": 400}],
            "pitch": 0,
            "direction": 90,
        },
    ],
    "equipment": [
        {"id": "mb1", "type": "main_board", "position": {"x": 1000, "y": 0}},
        {"id": "mb2", "type": "main_board", "position": {"x": 1000, "y": 800}},
        {"id": "invA", "type": "inverter", "position": {"x": 600, "y": 0}, "config_id": "cfg-10"},
        {"id": "invB", "type": "inverter", "position": {"x": 600, "y": 800}, "config_id": "cfg-20"},
        {"id": "invC", "type": "inverter", "position": {"x": 600, "y": 1500}},
        {"id": "meter1", "type": "meter", "position": {"x": 1000, "y": 5}},
    ],
    "lines": [
        # Feeder routed through a midpoint; ends at board and inverter
        {"id": "ac1", "type": "ac", "thickness": 16, "points": [{"x": 1000, "y": 0}, {"x": 800, "y": 50}, {"x": 605, "y": 0}]},
        {"id": "ac2", "type": "ac", "thickness": 16, "points": [{"x": 600, "y": 790}, {"x": 1000, "y": 790}]},
        {"id": "ac-loose", "type": "ac", "points": [{"x": 3000, "y": 0}, {"x": 3100, "y": 0}]},
        {"id": "dcA1", "type": "dc", "thickness": 4, "points": [{"x": 600, "y": 0}, {"x": 100, "y": 100}]},
        {"id": "dcA2", "type": "dc", "points": [{"x": 300, "y": 100}, {"x": 600, "y": 10}]},
        {"id": "dcB1", "type": "dc", "thickness": 4, "points": [{"x": 600, "y": 800}, {"x": 600, "y": 2000}]},
        {"id": "dc-loose", "type": "dc", "points": [{"x": 5000, "y": 5000}, {"x": 5100, "y": 5000}]},
        {"id": "dc-empty", "type": "dc", "points": []},
    ],
    "pv_arrays": [
        {"id": "pvA1", "position": {"x": 100, "y": 100}, "rows": 2, "columns": 5},
        {"id": "pvA2", "position": {"x": 300, "y": 100}, "rows": 3, "columns": 4, "orientation": "landscape"},
        {"id": "pv-roofb", "position": {"x": 150, "y": 320}, "rows": 1, "columns": 2},
    ],
    "walkways": [
        {"id": "w1", "config_id": "walk-600", "name": "Walkway 600", "width": 0.6, "length": 12},
        {"id": "w2", "config_id": "walk-600", "name": "Walkway 600", "width": 8, "length": 0.6},
        {"id": "w3", "name": "Generic", "width": 0.5, "length": 3},
    ],
    "cable_trays": [
        {"id": "t1", "config_id": "tray-100", "name": "Tray 100", "width": 0.1, "length": 20},
    ],
    "simulation": {"module_count": 28, "inverter_count": 2},
}


@pytest.fixture
def end_to_end() -> dict:
    return copy.deepcopy(END_TO_END)


@pytest.fixture
def plant() -> dict:
    return copy.deepcopy(PLANT)
