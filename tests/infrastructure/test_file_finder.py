from __future__ import annotations

from pathlib import Path

from reststeps.infrastructure.scenario.file_finder import ScenarioFileFinder


def test_file_finder_prefers_json(tmp_path: Path) -> None:
    base_dir = tmp_path / "scenarios"
    base_dir.mkdir()
    (base_dir / "sample.yaml").write_text("steps: []", encoding="utf-8")
    (base_dir / "sample.json").write_text("{}", encoding="utf-8")

    found = ScenarioFileFinder(base_dir).find_by_id("sample")

    assert found is not None
    assert found.suffix == ".json"


def test_file_finder_searches_subdirectories(tmp_path: Path) -> None:
    nested = tmp_path / "scenarios" / "users"
    nested.mkdir(parents=True)
    (nested / "profile.yml").write_text("steps: []", encoding="utf-8")

    found = ScenarioFileFinder(tmp_path / "scenarios").find_by_id("profile")

    assert found == nested / "profile.yml"


def test_file_finder_returns_none(tmp_path: Path) -> None:
    assert ScenarioFileFinder(tmp_path).find_by_id("nothing") is None
    assert ScenarioFileFinder(tmp_path / "absent").find_by_id("nothing") is None
