"""Compare a required dependency version against the latest stable release.

The advisor is a pure function: malformed input is reported through the
returned :class:`Advisory`, never raised.
"""

from __future__ import annotations

from collections.abc import Callable

from .models import Advisory
from .parsers import semver

_PART_GETTERS: dict[str, Callable[[str], int]] = {
    "major": semver.major,
    "minor": semver.minor,
    "patch": semver.patch,
}


def _unparsable_latest(name: str, stable_version: str) -> Advisory:
    return Advisory(
        part=None,
        message=f'Unparsable latest version for module "{name}": "{stable_version}"',
    )


def check_range(
    name: str,
    stable_version: str,
    required_range: str,
    must_be_pinned: bool = False,
) -> Advisory | None:
    """Check a range requirement; pinning is enforced before the range is evaluated."""
    if must_be_pinned:
        return Advisory(part=None, message=f'Version for module "{name}" is not pinned')

    if semver.valid(stable_version) is None:
        return _unparsable_latest(name, stable_version)

    if not semver.satisfies(stable_version, required_range):
        return Advisory(
            part=None,
            message=f'Latest version for module "{name}" is out of range "{required_range}"',
        )

    return None


def advise(
    name: str,
    stable_version: str,
    required_version: str,
    must_be_pinned: bool = False,
) -> Advisory | None:
    """Return an advisory for the dependency ``name``, or None when it is up to date.

    Params:
        name: dependency name, used only in messages
        stable_version: latest stable release, as reported by the registry
        required_version: version or range declared in the manifest
        must_be_pinned: when True, range requirements are reported as unpinned

    An exact requirement is compared part by part (major, minor, patch); the
    first part where the stable value exceeds the required one is reported. Range requirements go through :func:`check_range`. Anything
    else (git URLs, tags, file paths) yields an "unparsable" advisory.
    """
    if semver.valid(required_version) is None:
        if semver.valid_range(required_version) is not None:
            return check_range(name, stable_version, required_version, must_be_pinned)

        # Non-semver specifiers such as "git@github.com:..." cannot be evaluated.
        return Advisory(
            part=None,
            message=f'Unparsable semver string for module "{name}": "{required_version}"',
        )

    if semver.valid(stable_version) is None:
        return _unparsable_latest(name, stable_version)

    for part, getter in _PART_GETTERS.items():
        stable_value = getter(stable_version)
        required_value = getter(required_version)
        if stable_value > required_value:
            return Advisory(
                part=part,
                message=f'New {part} version available for module "{name}" ({stable_version})',
            )

    return None
