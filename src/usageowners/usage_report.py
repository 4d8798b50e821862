from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import yaml

from .errors import MalformedReportShape, ReportUnavailable

# Keys that may carry an instance's file path, in lookup order. react-scanner
# uses {"location": {"file": ...}}; the rest are accepted from other scanners.
FILE_KEYS = ("file", "filePath", "path")


def instance_file_path(instance: Any) -> str | None:
    """Return the file path of a usage instance, or None if it has none."""
    if not isinstance(instance, Mapping):
        return None

    location = instance.get("location")
    candidates: list[Any] = []
    if isinstance(location, Mapping):
        candidates.extend(location.get(k) for k in FILE_KEYS)
    elif isinstance(location, str):
        candidates.append(location)
    candidates.extend(instance.get(k) for k in FILE_KEYS)

    for value in candidates:
        if isinstance(value, str) and value.strip():
            return value
    return None


def iter_components(report: Any, *, source: str = "report") -> Iterator[tuple[str, Sequence[Any]]]:
    """Yield (component name, instances) pairs from a raw usage report."""
    if not isinstance(report, Mapping):
        raise MalformedReportShape(f"{source}: expected a mapping of component -> usage, got {type(report).__name__}")

    for name, data in report.items():
        if not isinstance(name, str):
            raise MalformedReportShape(f"{source}: component keys must be strings, got {name!r}")
        if not isinstance(data, Mapping):
            raise MalformedReportShape(f"{source}: component '{name}' must be a mapping")

        instances = data.get("instances")
        if instances is None:
            instances = []
        if not isinstance(instances, Sequence) or isinstance(instances, (str, bytes)):
            raise MalformedReportShape(f"{source}: component '{name}': instances must be a sequence")

        yield name, instances


def load_report(path: Path) -> dict[str, Any]:
    """Load a scanner raw report from JSON, or YAML for .yaml/.yml files."""
    if not path.exists():
        raise ReportUnavailable(f"Usage report not found: {path}")
    try:
        txt = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportUnavailable(f"Failed to read usage report: {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            obj = yaml.safe_load(txt)
        else:
            obj = json.loads(txt)
    except (ValueError, yaml.YAMLError) as e:
        raise ReportUnavailable(f"Failed to parse usage report {path}: {e}") from e

    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise MalformedReportShape(f"{path}: expected a mapping of component -> usage")
    return obj
