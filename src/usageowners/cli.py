from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from .aggregate import AggregationDiagnostics, aggregate
from .codeowners_file import load_codeowners, read_codeowners
from .errors import MalformedReportShape, ManifestUnavailable, ReportUnavailable, UsageError
from .lint import lint_manifest
from .markdown import render_lint_markdown, render_owners_markdown, render_usage_markdown
from .output import resolve_output_path, write_results
from .ownership import OwnershipIndex, build_index
from .paths import normalize_usage_path
from .patterns import MatchMode
from .usage_report import load_report
from .version import __version__

logger = logging.getLogger(__name__)

CODEOWNERS_LOCATIONS = ("CODEOWNERS", ".github/CODEOWNERS", "docs/CODEOWNERS")


@dataclass(frozen=True)
class ScanOptions:
    report: Path
    codeowners: Path
    repo_root: Path
    output: str | None = None
    match_mode: MatchMode = MatchMode.SUBSTRING
    format: str = "json"
    fail_on_unattributed: bool = False
    max_unattributed: int = 50


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _repo_root(args_repo_root: str | None) -> Path:
    if args_repo_root:
        return Path(args_repo_root).resolve()
    return Path.cwd()


def _find_codeowners(repo_root: Path) -> Path | None:
    for rel in CODEOWNERS_LOCATIONS:
        p = repo_root / rel
        if p.exists():
            return p
    return None


def _codeowners_path(args: argparse.Namespace, repo_root: Path) -> Path:
    if args.codeowners:
        return Path(args.codeowners).resolve()
    found = _find_codeowners(repo_root)
    if found is None:
        raise ManifestUnavailable(f"CODEOWNERS file not found under {repo_root} (use --codeowners PATH)")
    return found


def _load_index(args: argparse.Namespace, repo_root: Path) -> OwnershipIndex:
    path = _codeowners_path(args, repo_root)
    logger.debug("CODEOWNERS path: %s", path)
    return build_index(lambda: read_codeowners(path), mode=MatchMode(args.match_mode), source=str(path))


def run_scan(opts: ScanOptions) -> int:
    index = build_index(
        lambda: read_codeowners(opts.codeowners),
        mode=opts.match_mode,
        source=str(opts.codeowners),
    )
    report = load_report(opts.report)
    logger.debug("loaded %d component(s) from %s", len(report), opts.report)

    diagnostics = AggregationDiagnostics()
    table = aggregate(report, index, diagnostics=diagnostics, repo_root=opts.repo_root)

    if opts.format == "markdown":
        print(render_usage_markdown(table, diagnostics=diagnostics, max_unattributed=opts.max_unattributed))
    else:
        out_path = resolve_output_path(opts.output)
        write_results(table, out_path)
        print("Component usage analysis completed successfully.")
        print(f"Results written to {out_path}")

    if diagnostics.skipped:
        logger.warning("%d instance(s) had no file location", len(diagnostics.skipped))

    if opts.fail_on_unattributed and diagnostics.unattributed:
        return 3
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    repo_root = _repo_root(args.repo_root)
    opts = ScanOptions(
        report=Path(args.report).resolve(),
        codeowners=_codeowners_path(args, repo_root),
        repo_root=repo_root,
        output=args.output,
        match_mode=MatchMode(args.match_mode),
        format=args.format,
        fail_on_unattributed=args.fail_on_unattributed,
        max_unattributed=args.max_unattributed,
    )
    return run_scan(opts)


def cmd_who_owns(args: argparse.Namespace) -> int:
    repo_root = _repo_root(args.repo_root)
    idx = _load_index(args, repo_root)

    path = normalize_usage_path(args.path, repo_root=repo_root)
    owners = idx.owners_for(path)

    if args.format == "json":
        m = idx.match(path)
        payload = {
            "path": path,
            "owners": owners,
            "match_mode": idx.mode.value,
            "matches": [
                {"pattern": r.pattern, "owners": list(r.owners), "line": r.line, "source": r.source}
                for r in m.matches
            ],
            "version": __version__,
        }
        print(json.dumps(payload, indent=2))
        return 0

    if not owners:
        print(f"{path}: (unowned)")
    else:
        print(f"{path}: {', '.join(owners)}")

    if args.explain:
        m = idx.match(path)
        print("")
        if not m.matches:
            print("No matching rules.")
        else:
            print(f"Matched rules ({idx.mode.value} matching, all owners count):")
            for r in m.matches:
                print(f"- {r.pattern or '/'} -> {' '.join(r.owners)} ({r.source}:{r.line})")

    return 0


def cmd_owners(args: argparse.Namespace) -> int:
    repo_root = _repo_root(args.repo_root)
    idx = _load_index(args, repo_root)
    owners = {o: idx.patterns_for(o) for o in idx.all_owners()}

    if args.format == "json":
        print(json.dumps({"owners": owners, "version": __version__}, indent=2))
    else:
        print(render_owners_markdown(owners))
    return 0


def cmd_lint(args: argparse.Namespace) -> int:
    repo_root = _repo_root(args.repo_root)
    manifest = load_codeowners(_codeowners_path(args, repo_root))
    res = lint_manifest(manifest, strict=False)

    if args.format == "json":
        payload = {
            "issues": [
                {
                    "severity": i.severity,
                    "code": i.code,
                    "message": i.message,
                    "file": i.file,
                    "line": i.line,
                    "hint": i.hint,
                }
                for i in res.issues
            ],
            "version": __version__,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(render_lint_markdown(res, title="Lint"))

    if res.has_errors:
        return 2
    if args.strict and res.has_warnings:
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="usage-by-codeowner",
        description="Attribute design system component usage to CODEOWNERS",
    )
    p.add_argument("--codeowners", default=None, help="Path to CODEOWNERS (default: search common locations)")
    p.add_argument("--repo-root", default=None, help="Repository root (default: current directory)")
    p.add_argument(
        "--match-mode",
        choices=[m.value for m in MatchMode],
        default=MatchMode.SUBSTRING.value,
        help="substring: pattern may match anywhere in the path; anchored: whole path must match",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"usage-by-codeowner {__version__}")

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("scan", help="Count component usage per codeowner from a scanner raw report")
    s.add_argument("-r", "--report", required=True, help="Path to the scanner raw report (.json, .yaml)")
    s.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory or file (default: ./output/usage-by-codeowner.json)",
    )
    s.add_argument("--format", choices=["json", "markdown"], default="json")
    s.add_argument("--fail-on-unattributed", action="store_true", help="Exit 3 if any usage has no owner")
    s.add_argument("--max-unattributed", type=int, default=50, help="Max unattributed files to list in markdown")
    s.set_defaults(func=cmd_scan)

    w = sub.add_parser("who-owns", aliases=["who", "owner"], help="Find the owners for a path")
    w.add_argument("path", help="Path to a file (relative or absolute)")
    w.add_argument("--format", choices=["text", "json"], default="text")
    w.add_argument("--explain", action="store_true", help="Show the matching rules")
    w.set_defaults(func=cmd_who_owns)

    o = sub.add_parser("owners", help="List every owner and the patterns they own")
    o.add_argument("--format", choices=["text", "json"], default="text")
    o.set_defaults(func=cmd_owners)

    l = sub.add_parser("lint", help="Lint CODEOWNERS")
    l.add_argument("--format", choices=["text", "json"], default="text")
    l.add_argument("--strict", action="store_true", help="Exit non-zero on warnings")
    l.set_defaults(func=cmd_lint)

    return p


def main(argv: list[str] | None = None) -> None:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        _configure_logging(args.debug)
        rc = args.func(args)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        rc = 2
    except ManifestUnavailable as e:
        print(f"codeowners error: {e}", file=sys.stderr)
        rc = 2
    except (ReportUnavailable, MalformedReportShape) as e:
        print(f"report error: {e}", file=sys.stderr)
        rc = 2
    except KeyboardInterrupt:
        rc = 130

    raise SystemExit(rc)
