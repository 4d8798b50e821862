from __future__ import annotations

from typing import Mapping

from .aggregate import AggregationDiagnostics
from .lint import LintResult


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def render_usage_markdown(
    table: Mapping[str, Mapping[str, int]],
    *,
    diagnostics: AggregationDiagnostics | None = None,
    title: str = "Component usage by codeowner",
    max_unattributed: int = 50,
) -> str:
    lines: list[str] = []
    lines.append(f"## {title}")
    lines.append("")

    if not table:
        lines.append("_No components in report._")
        return "\n".join(lines)

    # Most used components first
    components = sorted(table.items(), key=lambda kv: (-sum(kv[1].values()), kv[0]))

    lines.append(f"### Components ({len(components)})")
    lines.append("")

    for name, usage in components:
        total = sum(usage.values())
        lines.append(f"- **{name}** ({_plural(total, 'attributed use')})")
        for owner, count in sorted(usage.items(), key=lambda kv: (-kv[1], kv[0])):
            lines.append(f"  - `{owner}`: {count}")

    lines.append("")

    if diagnostics is not None:
        unattributed = diagnostics.unattributed_files()
        if unattributed:
            lines.append(f"### Unattributed files ({len(unattributed)})")
            lines.append("")
            for f in unattributed[:max_unattributed]:
                lines.append(f"- `{f}`")
            if len(unattributed) > max_unattributed:
                lines.append(f"- _…and {len(unattributed) - max_unattributed} more_")
            lines.append("")
        if diagnostics.skipped:
            lines.append(f"_{_plural(len(diagnostics.skipped), 'instance')} without a file location skipped._")
            lines.append("")

    return "\n".join(lines)


def render_owners_markdown(owners: Mapping[str, list[str]], *, title: str = "Owners") -> str:
    if not owners:
        return f"### {title}\n\n_No owners defined._\n"

    lines: list[str] = [f"### {title}", ""]
    for owner, patterns in owners.items():
        lines.append(f"- **{owner}** ({_plural(len(patterns), 'pattern')})")
        for p in patterns:
            lines.append(f"  - `{p or '/'}`")
    lines.append("")
    return "\n".join(lines)


def render_lint_markdown(result: LintResult, *, title: str = "Lint") -> str:
    if not result.issues:
        return f"### {title}\n\n✅ No lint issues found.\n"

    lines: list[str] = [f"### {title}", ""]
    for iss in result.issues:
        loc = ""
        if iss.file and iss.line:
            loc = f"{iss.file}:{iss.line}: "
        hint = f" _(hint: {iss.hint})_" if iss.hint else ""
        icon = "❌" if iss.severity == "ERROR" else "⚠️"
        lines.append(f"- {icon} **{iss.code}**: {loc}{iss.message}{hint}")
    lines.append("")
    return "\n".join(lines)
