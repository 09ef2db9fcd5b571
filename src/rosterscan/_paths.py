"""Utility helpers for locating packaged resources."""

from __future__ import annotations

import sys
from pathlib import Path


def _candidate_roots() -> list[Path]:
    roots: list[Path] = []
    meipass = getattr(sys, "_MEIPASS", None)
    if isinstance(meipass, str):
        base = Path(meipass)
        roots.append(base)
        roots.append(base / "Resources")
    package_root = Path(__file__).resolve().parent
    roots.append(package_root)
    roots.append(package_root.parents[1])
    return roots


def _candidate_rel_paths(rel_path: Path) -> list[Path]:
    if rel_path.is_absolute():
        return [rel_path]
    candidates = [rel_path]
    if rel_path.parts and rel_path.parts[0] != "rosterscan":
        candidates.append(Path("rosterscan") / rel_path)
    candidates.append(Path("Resources") / rel_path)
    return candidates


def resource_path(rel: str | Path) -> Path:
    """Return an absolute path for ``rel`` inside the package, bundle or repository."""
    rel_path = Path(rel)
    for root in _candidate_roots():
        for candidate in _candidate_rel_paths(rel_path):
            candidate_path = (root / candidate).resolve()
            if candidate_path.exists():
                return candidate_path
    # Fall back to best-effort join with the package directory.
    return (Path(__file__).resolve().parent / rel_path).resolve()
