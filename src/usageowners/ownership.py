from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Union

from .codeowners_file import CodeownersManifest, Rule, parse_codeowners_text
from .errors import ManifestUnavailable
from .patterns import CompiledPattern, MatchMode, compile_pattern

logger = logging.getLogger(__name__)

ManifestSource = Union[str, Callable[[], str]]


@dataclass(frozen=True)
class Match:
    path: str
    matches: list[Rule]

    @property
    def owners(self) -> list[str]:
        out: dict[str, None] = {}
        for r in self.matches:
            for o in r.owners:
                out.setdefault(o, None)
        return list(out)


class OwnershipIndex:
    """Owner-keyed index over a parsed CODEOWNERS manifest.

    A path is owned by every owner that has at least one matching pattern;
    there is no "last rule wins". The owner list and owner -> patterns map are
    built once, on first use, and never change afterwards. Load a new manifest
    to get a new index.
    """

    def __init__(self, manifest: CodeownersManifest, mode: MatchMode = MatchMode.SUBSTRING):
        self._manifest = manifest
        self._mode = MatchMode(mode)
        self._lock = threading.Lock()
        self._patterns: dict[str, list[str]] | None = None
        self._compiled: dict[str, CompiledPattern] = {
            r.pattern: compile_pattern(r.pattern, self._mode) for r in manifest.rules
        }

    @property
    def manifest(self) -> CodeownersManifest:
        return self._manifest

    @property
    def mode(self) -> MatchMode:
        return self._mode

    @property
    def rules(self) -> list[Rule]:
        return list(self._manifest.rules)

    def _ensure_loaded(self) -> dict[str, list[str]]:
        patterns = self._patterns
        if patterns is not None:
            return patterns
        with self._lock:
            if self._patterns is None:
                by_owner: dict[str, list[str]] = {}
                for r in self._manifest.rules:
                    for o in r.owners:
                        bucket = by_owner.setdefault(o, [])
                        if r.pattern not in bucket:
                            bucket.append(r.pattern)
                self._patterns = by_owner
                logger.debug(
                    "indexed %d owner(s) across %d pattern(s) from %s",
                    len(by_owner),
                    len(self._manifest.rules),
                    self._manifest.source,
                )
            return self._patterns

    def all_owners(self) -> list[str]:
        """Distinct owners, in order of first appearance in the manifest."""
        return list(self._ensure_loaded())

    def patterns_for(self, owner: str) -> list[str]:
        return list(self._ensure_loaded().get(owner, ()))

    def owners_for(self, path: str) -> list[str]:
        """Every owner with a pattern matching ``path``; zero, one or many."""
        normalized = path.lstrip("/")
        out: list[str] = []
        for owner, patterns in self._ensure_loaded().items():
            if any(self._compiled[p].matches(normalized) for p in patterns):
                out.append(owner)
        return out

    def match(self, path: str) -> Match:
        normalized = path.lstrip("/")
        matches = [r for r in self._manifest.rules if self._compiled[r.pattern].matches(normalized)]
        return Match(path=normalized, matches=matches)


def build_index(
    manifest: ManifestSource,
    *,
    mode: MatchMode = MatchMode.SUBSTRING,
    source: str = "CODEOWNERS",
) -> OwnershipIndex:
    """Read and parse a manifest exactly once and wrap it in an index.

    ``manifest`` is either the CODEOWNERS text or a zero-argument callable
    that returns it.
    """
    if callable(manifest):
        try:
            text = manifest()
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestUnavailable(f"Failed to read {source}: {e}") from e
    else:
        text = manifest

    if not isinstance(text, str):
        raise ManifestUnavailable(f"{source}: expected text, got {type(text).__name__}")

    return OwnershipIndex(parse_codeowners_text(text, source=source), mode=mode)
