import io
import json

import pytest

from warehouse_planner.cli import main
from warehouse_planner.config import Settings

EXAMPLE_PLAN = {
    "building_length": 200,
    "building_width": 100,
    "ceiling_height": 30,
    "pallet_width": 40,
    "pallet_depth": 48,
    "pallets_per_level": 2,
    "rack_beam_length": 96,
    "rack_depth": 48,
    "equipment_type": "Reach Truck",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(store_path=tmp_path / "plans.json", log_level="WARNING")


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(EXAMPLE_PLAN), encoding="utf-8")
    return str(path)


def test_calculate_prints_summary(plan_file, settings, capsys):
    assert main(["calculate", plan_file], settings=settings) == 0
    out = capsys.readouterr().out
    assert "Racks per row: 11" in out
    assert "Rack rows: 6" in out
    assert "Total racks: 66" in out
    assert "Total pallets: 132" in out
    assert "Used sq ft: 2112.00" in out
    assert "Unused sq ft: 17888.00" in out
    assert "Warnings" not in out


def test_calculate_reads_stdin(settings, capsys, monkeypatch):
    plan = dict(EXAMPLE_PLAN, building_length=5, building_width=3)
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(plan)))
    assert main(["calculate", "-"], settings=settings) == 0
    out = capsys.readouterr().out
    assert "Total racks: 0" in out
    assert "- no racks fit along building length" in out


def test_calculate_writes_scene_and_saves(plan_file, settings, tmp_path, capsys):
    scene = tmp_path / "scene.html"
    assert main(["calculate", plan_file, "--scene", str(scene), "--save"], settings=settings) == 0
    assert "mesh3d" in scene.read_text(encoding="utf-8")
    assert "Plan saved!" in capsys.readouterr().out
    assert settings.store_path.exists()


def test_save_then_load(plan_file, settings, capsys):
    assert main(["save", plan_file], settings=settings) == 0
    assert main(["load"], settings=settings) == 0
    out = capsys.readouterr().out
    assert "Equipment: Reach Truck" in out
    assert "Total pallets: 132" in out


def test_load_without_saved_plan_fails_cleanly(settings, capsys):
    assert main(["load"], settings=settings) == 1
    captured = capsys.readouterr()
    assert "No saved plan found" in captured.err
    assert captured.out == ""


def test_unknown_equipment_is_reported(tmp_path, settings, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(dict(EXAMPLE_PLAN, equipment_type="Nonexistent Truck")), encoding="utf-8")
    assert main(["calculate", str(path)], settings=settings) == 1
    assert "Unknown equipment type 'Nonexistent Truck'" in capsys.readouterr().err


def test_invalid_plan_is_reported(tmp_path, settings, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"building_length": 10}), encoding="utf-8")
    assert main(["calculate", str(path)], settings=settings) == 1
    assert "Invalid plan specification" in capsys.readouterr().err


@pytest.mark.parametrize(
    "overrides",
    [{"building_length": float("inf")}, {"building_length": 10**400}, {"pallets_per_level": float("inf")}],
)
def test_out_of_range_numbers_are_reported(tmp_path, settings, capsys, overrides):
    path = tmp_path / "huge.json"
    path.write_text(json.dumps(dict(EXAMPLE_PLAN, **overrides)), encoding="utf-8")
    assert main(["calculate", str(path)], settings=settings) == 1
    assert "Invalid plan specification" in capsys.readouterr().err


def test_load_reports_out_of_range_snapshot(settings, capsys):
    settings.store_path.write_text(
        json.dumps({"warehousePlan": dict(EXAMPLE_PLAN, building_length=10**400)}),
        encoding="utf-8",
    )
    assert main(["load"], settings=settings) == 1
    assert "is invalid" in capsys.readouterr().err


def test_oversized_scene_is_skipped(tmp_path, settings, capsys):
    path = tmp_path / "big.json"
    path.write_text(
        json.dumps(dict(EXAMPLE_PLAN, building_length=6000, building_width=6000)),
        encoding="utf-8",
    )
    scene = tmp_path / "scene.html"
    assert main(["calculate", str(path), "--scene", str(scene)], settings=settings) == 0
    captured = capsys.readouterr()
    assert "Total racks: 150304" in captured.out
    assert "3D preview skipped" in captured.err
    assert not scene.exists()


def test_clear_removes_saved_plan(plan_file, settings, capsys):
    assert main(["save", plan_file], settings=settings) == 0
    assert main(["clear"], settings=settings) == 0
    assert "Saved plan cleared." in capsys.readouterr().out
    assert main(["load"], settings=settings) == 1
    assert "No saved plan found" in capsys.readouterr().err


def test_equipment_lists_profiles(settings, capsys):
    assert main(["equipment"], settings=settings) == 0
    out = capsys.readouterr().out
    assert "- Reach Truck: aisle 108 in, intersecting aisle 120 in" in out
    assert out.count("\n") == 4
