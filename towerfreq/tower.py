from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CellTower:
    """A transmitter site identified by its cell id."""

    cell_id: str
    latitude: float
    longitude: float
