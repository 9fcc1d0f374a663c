"""Advisory model returned by the version advisor."""

from __future__ import annotations

from dataclasses import dataclass

_VALID_PARTS = {"major", "minor", "patch"}


@dataclass(frozen=True)
class Advisory:
    """A single advisory about a dependency requirement.

    ``part`` names the outdated version component, or is None when the
    advisory is about the requirement itself (unparsable, unpinned or out of
    range).
    """

    part: str | None
    message: str

    def __post_init__(self) -> None:
        if self.part is not None and self.part not in _VALID_PARTS:
            raise ValueError(f"Invalid version part: {self.part}")
        if not self.message:
            raise ValueError("Advisory message must be non-empty")

    def to_dict(self) -> dict[str, object]:
        return {
            "part": self.part,
            "message": self.message,
        }
