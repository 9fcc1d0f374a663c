"""npm-advisor core package.

This package compares the dependency requirements of package.json manifests
against the latest stable releases on the npm registry and reports outdated,
unpinned and unparsable requirements.
"""

from .advisor import advise, check_range
from .models import Advisory

__all__ = [
    "Advisory",
    "advise",
    "check_range",
]
