from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from .errors import UsageError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_OUTPUT_FILENAME = "usage-by-codeowner.json"


def resolve_output_path(output: str | None, cwd: Path | None = None) -> Path:
    """Pick the results file and create its parent directory.

    No output: ``<cwd>/output/usage-by-codeowner.json``. An existing
    directory gets the default filename appended.
    """
    cwd = cwd or Path.cwd()
    if not output:
        path = cwd / DEFAULT_OUTPUT_DIR / DEFAULT_OUTPUT_FILENAME
    else:
        path = Path(output)
        if not path.is_absolute():
            path = cwd / path
        if path.is_dir():
            path = path / DEFAULT_OUTPUT_FILENAME

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise UsageError(f"cannot create output directory {path.parent}: {e}") from e
    return path


def write_results(table: Mapping[str, Mapping[str, int]], path: Path) -> Path:
    logger.debug("writing results to %s", path)
    path.write_text(json.dumps(table, indent=2) + "\n", encoding="utf-8")
    return path
