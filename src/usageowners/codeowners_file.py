from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    pattern: str
    owners: tuple[str, ...]
    line: int
    source: str


@dataclass(frozen=True)
class CodeownersManifest:
    """Parsed CODEOWNERS rules, one per distinct pattern, in file order.

    A later line with the same literal pattern replaces the earlier line's
    owners. The replaced rules are kept in ``overridden`` and retained lines
    without owners in ``skipped_lines`` so lint can report them.
    """

    rules: list[Rule] = field(default_factory=list)
    source: str = "CODEOWNERS"
    overridden: list[Rule] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)


def parse_codeowners_text(text: str, source: str = "CODEOWNERS") -> CodeownersManifest:
    by_pattern: dict[str, Rule] = {}
    overridden: list[Rule] = []
    skipped: list[int] = []

    for idx, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        pattern, *owners = line.split()
        if not owners:
            logger.debug("%s:%d: no owners for %r, skipping", source, idx, pattern)
            skipped.append(idx)
            continue

        pattern = pattern.lstrip("/")
        prev = by_pattern.get(pattern)
        if prev is not None:
            overridden.append(prev)
        by_pattern[pattern] = Rule(pattern=pattern, owners=tuple(owners), line=idx, source=source)

    # Empty is valid; the manifest may be all comments.
    return CodeownersManifest(
        rules=list(by_pattern.values()),
        source=source,
        overridden=overridden,
        skipped_lines=skipped,
    )


def read_codeowners(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestUnavailable(f"CODEOWNERS file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestUnavailable(f"Failed to read CODEOWNERS: {path}: {e}") from e


def load_codeowners(path: Path) -> CodeownersManifest:
    return parse_codeowners_text(read_codeowners(path), source=str(path))
