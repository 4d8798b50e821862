from __future__ import annotations

from pathlib import Path, PurePosixPath


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def normalize_usage_path(path: str, repo_root: Path | None = None) -> str:
    """Normalize a scanner-reported file path for ownership matching.

    - Converts backslashes to slashes
    - If absolute and repo_root is provided, makes it relative to repo_root
    - Strips leading './' (repeatable) and every leading '/'
    """
    p = to_posix(path).strip()

    if repo_root is not None:
        pp = PurePosixPath(p)
        if pp.is_absolute():
            try:
                p = str(pp.relative_to(to_posix(str(repo_root))))
            except ValueError:
                # Outside the repo root; match against the absolute path.
                pass

    while p.startswith("./"):
        p = p[2:]

    return p.lstrip("/")
