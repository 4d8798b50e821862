from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .ownership import OwnershipIndex
from .paths import normalize_usage_path
from .usage_report import instance_file_path, iter_components

logger = logging.getLogger(__name__)

ResultTable = dict[str, dict[str, int]]


@dataclass(frozen=True)
class SkippedInstance:
    component: str
    position: int
    reason: str


@dataclass
class AggregationDiagnostics:
    """Optional record of what an aggregation run could not attribute."""

    instances_seen: int = 0
    attributions: int = 0
    skipped: list[SkippedInstance] = field(default_factory=list)
    unattributed: dict[str, list[str]] = field(default_factory=dict)  # component -> paths

    def unattributed_count(self) -> int:
        return sum(len(v) for v in self.unattributed.values())

    def unattributed_files(self) -> list[str]:
        return sorted({p for paths in self.unattributed.values() for p in paths})


def aggregate(
    report: Any,
    index: OwnershipIndex,
    *,
    diagnostics: AggregationDiagnostics | None = None,
    repo_root: Path | None = None,
) -> ResultTable:
    """Count component usages per owner.

    Each instance adds 1 to every owner ``index.owners_for`` returns for its
    file, so one instance can count for several owners. Instances without a
    usable path, or owned by nobody, add nothing.

    Paths go through ``normalize_usage_path`` before matching, with or
    without ``repo_root``: surrounding whitespace is trimmed, backslashes
    become '/', and leading './' and '/' are stripped.
    """
    diag = diagnostics if diagnostics is not None else AggregationDiagnostics()
    table: ResultTable = {}

    for component, instances in iter_components(report):
        usage = table.setdefault(component, {})

        for pos, instance in enumerate(instances):
            diag.instances_seen += 1
            raw_path = instance_file_path(instance)
            if raw_path is None:
                logger.debug("%s[%d]: instance has no file location, skipping", component, pos)
                diag.skipped.append(SkippedInstance(component=component, position=pos, reason="missing file path"))
                continue

            path = normalize_usage_path(raw_path, repo_root=repo_root)
            owners = index.owners_for(path)
            if not owners:
                logger.debug("%s: no owner for %s", component, path)
                diag.unattributed.setdefault(component, []).append(path)
                continue

            for owner in owners:
                usage[owner] = usage.get(owner, 0) + 1
            diag.attributions += len(owners)

    if diag.skipped or diag.unattributed:
        logger.info(
            "%d instance(s) skipped, %d unattributed",
            len(diag.skipped),
            diag.unattributed_count(),
        )
    return table
