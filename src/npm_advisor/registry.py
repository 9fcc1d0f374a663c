"""npm registry lookups for the latest stable release of a package."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .parsers import semver

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
USER_AGENT = "npm-advisor"

logger = logging.getLogger(__name__)


class RegistryError(RuntimeError):
    """Raised when the registry cannot provide a stable version for a package."""


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str, timeout: float) -> Response:
    return requests.get(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=timeout,
    )


def package_url(name: str, registry_url: str = DEFAULT_REGISTRY_URL) -> str:
    """Return the packument URL; scoped names keep their "@" but encode "/"."""
    return f"{registry_url.rstrip('/')}/{quote(name, safe='@')}"


def select_stable(document: dict[str, Any]) -> str | None:
    """Pick the latest stable version from a registry packument.

    The "latest" dist-tag wins when it is a release; otherwise the highest
    non-prerelease version listed is used.
    """
    dist_tags = document.get("dist-tags") or {}
    latest = dist_tags.get("latest") if isinstance(dist_tags, dict) else None
    if isinstance(latest, str):
        parsed = semver.valid(latest)
        if parsed is not None and not semver.parse(parsed).prerelease:
            return parsed

    versions = document.get("versions") or {}
    candidates = []
    for key in versions:
        try:
            parsed_version = semver.parse(str(key))
        except ValueError:
            continue
        if not parsed_version.prerelease:
            candidates.append(parsed_version)

    if not candidates:
        return None
    return str(max(candidates))


def fetch_latest_stable(
    name: str,
    registry_url: str = DEFAULT_REGISTRY_URL,
    timeout: float = 30,
) -> str:
    """Return the latest stable version of ``name`` from the registry."""
    url = package_url(name, registry_url)
    logger.debug("Fetching %s", url)

    try:
        response = _http_get(url, timeout)
    except requests.RequestException as exc:
        raise RegistryError(f"Failed to fetch registry data for {name}: {exc}") from exc

    if response.status_code == 404:
        raise RegistryError(f"Package {name} was not found in the registry")
    if response.status_code != 200:
        raise RegistryError(
            f"Unexpected status code {response.status_code} fetching registry data for {name}"
        )

    try:
        document = response.json()
    except ValueError as exc:
        raise RegistryError(f"Invalid JSON in registry data for {name}") from exc

    if not isinstance(document, dict):
        raise RegistryError(f"Unexpected registry payload for {name}")

    stable = select_stable(document)
    if stable is None:
        raise RegistryError(f"No stable version published for {name}")

    logger.debug("Latest stable version of %s is %s", name, stable)
    return stable
