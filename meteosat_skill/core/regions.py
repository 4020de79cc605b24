"""Regions covered by the satellite imagery lists, in display order."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Region:
    """A named area with the provider's short region code."""

    name: str
    code: str


# Russia used to share NL with Olanda, which returned Dutch imagery under the
# Russian caption. Codes are unique per region.
REGIONS: tuple[Region, ...] = (
    Region("Italia", "IT"),
    Region("Alpi", "ALPS"),
    Region("Europa", "EU"),
    Region("Germania", "DE"),
    Region("Francia", "FR"),
    Region("Spagna", "SP"),
    Region("Gran Bretagna", "GB"),
    Region("Russia", "RU"),
    Region("Polonia", "PL"),
    Region("Grecia", "GR"),
    Region("Turchia", "TU"),
    Region("Balcani", "BA"),
    Region("Ungheria", "HU"),
    Region("Olanda", "NL"),
    Region("Scandinavia", "SCAN"),
)


__all__ = ["Region", "REGIONS"]
