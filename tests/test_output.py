import json
from pathlib import Path

from usageowners.output import DEFAULT_OUTPUT_FILENAME, resolve_output_path, write_results


def test_default_output_path_is_created(tmp_path: Path):
    p = resolve_output_path(None, cwd=tmp_path)
    assert p == tmp_path / "output" / DEFAULT_OUTPUT_FILENAME
    assert p.parent.is_dir()


def test_existing_directory_gets_default_filename(tmp_path: Path):
    (tmp_path / "reports").mkdir()
    assert resolve_output_path("reports", cwd=tmp_path) == tmp_path / "reports" / DEFAULT_OUTPUT_FILENAME


def test_file_output_creates_parents(tmp_path: Path):
    p = resolve_output_path(str(tmp_path / "a" / "b" / "usage.json"))
    assert p.parent.is_dir()


def test_write_results_round_trips(tmp_path: Path):
    table = {"Button": {"@a": 2}, "Card": {}}
    p = write_results(table, tmp_path / "out.json")
    assert json.loads(p.read_text(encoding="utf-8")) == table
