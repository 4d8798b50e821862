from __future__ import annotations

from dataclasses import dataclass

from .codeowners_file import CodeownersManifest


@dataclass(frozen=True)
class Issue:
    severity: str  # "ERROR" | "WARN"
    code: str
    message: str
    file: str | None = None
    line: int | None = None
    hint: str | None = None


@dataclass(frozen=True)
class LintResult:
    issues: list[Issue]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "ERROR" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "WARN" for i in self.issues)


def lint_manifest(manifest: CodeownersManifest, *, strict: bool = False) -> LintResult:
    """Lint a parsed CODEOWNERS manifest.

    Nothing here changes how the manifest is applied: skipped lines and
    overwritten patterns are already resolved by the parser. Strict mode
    turns warnings into errors for "enforce in CI" use-cases.
    """
    issues: list[Issue] = []
    severity = "ERROR" if strict else "WARN"
    current = {r.pattern: r for r in manifest.rules}

    for prev in manifest.overridden:
        winner = current[prev.pattern]
        if prev.owners == winner.owners:
            continue
        issues.append(
            Issue(
                severity=severity,
                code="DUPLICATE_PATTERN",
                message=(
                    f"Pattern '{prev.pattern}' is defined multiple times; line {winner.line} replaces "
                    f"{' '.join(prev.owners)} (line {prev.line}) with {' '.join(winner.owners)}."
                ),
                file=manifest.source,
                line=prev.line,
                hint="Owners are not merged. List every owner on one line.",
            )
        )

    for line in manifest.skipped_lines:
        issues.append(
            Issue(
                severity=severity,
                code="MISSING_OWNERS",
                message="Line has a pattern but no owners and is ignored.",
                file=manifest.source,
                line=line,
                hint="Add at least one owner after the pattern.",
            )
        )

    for r in manifest.rules:
        if not r.pattern:
            issues.append(
                Issue(
                    severity=severity,
                    code="ROOT_PATTERN",
                    message=f"Pattern '/' matches every file; {' '.join(r.owners)} will own all usage.",
                    file=manifest.source,
                    line=r.line,
                    hint="Use '*' or '**' if a catch-all owner is intended.",
                )
            )

    return LintResult(issues=issues)
