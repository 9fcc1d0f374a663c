"""Repository and manifest discovery utilities."""

from __future__ import annotations

from pathlib import Path


EXCLUDES = {"node_modules", ".git", ".venv"}
MANIFEST_NAME = "package.json"


def discover_manifests(root: Path) -> list[Path]:
    """Find package.json manifests recursively under root (excluding vendor dirs)."""
    root = root.resolve()
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    for path in root.rglob(MANIFEST_NAME):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)
