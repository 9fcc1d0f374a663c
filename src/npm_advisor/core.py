"""Core checking entrypoints.

This module MUST NOT contain CI-specific dependencies so it can be used by
both the command line wrapper and other callers embedding the advisor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .advisor import advise
from .config import Settings
from .discovery import discover_manifests
from .models import Finding
from .parsers.package_json import parse as parse_package_json
from .registry import RegistryError, fetch_latest_stable
from .report import aggregate

# Takes a package name and returns its latest stable version.
LatestLookup = Callable[[str], str]

logger = logging.getLogger(__name__)


def _registry_lookup(settings: Settings) -> LatestLookup:
    cache: dict[str, str] = {}

    def lookup(name: str) -> str:
        if name not in cache:
            cache[name] = fetch_latest_stable(
                name, registry_url=settings.registry, timeout=settings.timeout
            )
        return cache[name]

    return lookup


def check_manifest(
    path: Path,
    settings: Settings,
    fetch_latest: LatestLookup | None = None,
    root: Path | None = None,
) -> dict[str, Any]:
    """Check every dependency of one package.json against its latest stable release.

    Params:
        path: manifest to check
        settings: sections, pinning rules and ignore list
        fetch_latest: optional lookup replacing the registry client
        root: when given, the reported path is relative to it

    Returns: project entry with ``path``, ``findings`` and ``errors`` lists.
    Registry failures are recorded under ``errors`` and do not stop the check;
    neither does a manifest that cannot be parsed, which becomes a single
    error entry.
    """
    lookup = fetch_latest or _registry_lookup(settings)
    findings: list[dict[str, Any]] = []
    errors: list[dict[str, Any]] = []

    project_dir = path.parent
    if root is not None:
        project_dir = project_dir.relative_to(root)

    try:
        dependencies = parse_package_json(path, settings.section_names)
    except ValueError as exc:
        logger.warning("Could not parse %s: %s", path, exc)
        errors.append(
            {
                "name": None,
                "required": None,
                "section": None,
                "latest": None,
                "error": f"Invalid manifest {path.name}: {exc}",
            }
        )
        dependencies = []

    for dependency in dependencies:
        if settings.is_ignored(dependency.name):
            logger.debug("Skipping ignored dependency %s", dependency.name)
            continue

        try:
            latest = lookup(dependency.name)
        except RegistryError as exc:
            logger.warning("Could not resolve latest version of %s: %s", dependency.name, exc)
            errors.append(Finding(dependency=dependency, error=str(exc)).to_dict())
            continue

        advisory = advise(
            dependency.name,
            latest,
            dependency.requirement,
            settings.must_be_pinned(dependency.section),
        )
        if advisory is None:
            logger.debug("%s %s is up to date (%s)", dependency.name, dependency.requirement, latest)
            continue

        logger.info(advisory.message)
        findings.append(Finding(dependency=dependency, latest=latest, advisory=advisory).to_dict())

    return {
        "path": str(project_dir),
        "findings": findings,
        "errors": errors,
    }


def check_repository(
    root: Path,
    settings: Settings | None = None,
    fetch_latest: LatestLookup | None = None,
) -> dict[str, Any]:
    """Check all package.json manifests under root and aggregate a report.

    Registry lookups are shared across manifests so each package is fetched
    at most once per run.
    """
    root = root.resolve()
    settings = settings or Settings()
    lookup = fetch_latest or _registry_lookup(settings)

    manifest_paths = discover_manifests(root)
    logger.info("Found %d manifest(s) under %s", len(manifest_paths), root)

    projects = [
        check_manifest(path, settings, fetch_latest=lookup, root=root) for path in manifest_paths
    ]
    return aggregate(projects)
