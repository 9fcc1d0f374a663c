"""Parse package.json and extract dependencies across sections."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..models import Dependency

SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def parse(path: Path, sections: Iterable[str] | None = None) -> list[Dependency]:
    """Return dependencies from the requested sections, in manifest order.

    Sections default to dependencies, devDependencies, peerDependencies and
    optionalDependencies. Sections that are missing or not objects are skipped.
    """
    import json

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    wanted = tuple(sections) if sections is not None else SECTIONS
    dependencies: list[Dependency] = []
    for section in wanted:
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            dependencies.append(Dependency(name=name, requirement=str(version), section=section))

    return dependencies
