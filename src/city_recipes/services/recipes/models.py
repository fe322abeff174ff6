"""Recipe domain model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Recipe:
    """A user-submitted recipe attached to one city."""

    id: int
    content: str
