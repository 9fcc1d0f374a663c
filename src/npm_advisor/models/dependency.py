"""Dependency and finding models."""

from __future__ import annotations

from dataclasses import dataclass

from .advisory import Advisory


@dataclass(frozen=True)
class Dependency:
    """A dependency requirement declared in one section of a manifest."""

    name: str
    requirement: str
    section: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")
        if not self.section:
            raise ValueError("Dependency section must be non-empty")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "required": self.requirement,
            "section": self.section,
        }


@dataclass(frozen=True)
class Finding:
    """Outcome of checking one dependency against its latest stable release.

    Exactly one of ``advisory`` and ``error`` is set.
    """

    dependency: Dependency
    latest: str | None = None
    advisory: Advisory | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.advisory is None) == (self.error is None):
            raise ValueError("Finding must carry either an advisory or an error")

    def to_dict(self) -> dict[str, object]:
        data = self.dependency.to_dict()
        data["latest"] = self.latest
        if self.advisory is not None:
            data.update(self.advisory.to_dict())
        else:
            data["error"] = self.error
        return data
