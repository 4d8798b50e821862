import json
from pathlib import Path

import pytest

from usageowners.errors import MalformedReportShape, ReportUnavailable
from usageowners.usage_report import instance_file_path, load_report


def test_instance_file_path_prefers_location_file():
    assert instance_file_path({"location": {"file": "src/a.jsx"}, "file": "other.js"}) == "src/a.jsx"
    assert instance_file_path({"filePath": "src/b.jsx"}) == "src/b.jsx"
    assert instance_file_path({"location": "src/c.jsx"}) == "src/c.jsx"
    assert instance_file_path({"location": {"file": "   "}}) is None
    assert instance_file_path(None) is None


def test_load_json_report(tmp_path: Path):
    p = tmp_path / "raw-report.json"
    p.write_text(json.dumps({"Button": {"instances": []}}), encoding="utf-8")
    assert load_report(p) == {"Button": {"instances": []}}


def test_load_yaml_report(tmp_path: Path):
    p = tmp_path / "raw-report.yaml"
    p.write_text("Button:\n  instances:\n    - location:\n        file: src/a.jsx\n", encoding="utf-8")
    assert load_report(p) == {"Button": {"instances": [{"location": {"file": "src/a.jsx"}}]}}


def test_load_missing_report(tmp_path: Path):
    with pytest.raises(ReportUnavailable):
        load_report(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path: Path):
    p = tmp_path / "raw-report.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ReportUnavailable):
        load_report(p)


def test_load_non_mapping_report(tmp_path: Path):
    p = tmp_path / "raw-report.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(MalformedReportShape):
        load_report(p)
