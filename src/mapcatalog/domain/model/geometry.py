"""Geographic extents."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Extent in degrees."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_degrees(
        cls, west: float | str, south: float | str, east: float | str, north: float | str
    ) -> Rectangle:
        return cls(west=float(west), south=float(south), east=float(east), north=float(north))

    def as_list(self) -> list[float]:
        return [self.west, self.south, self.east, self.north]
