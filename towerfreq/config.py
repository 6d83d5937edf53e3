from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

DEFAULT_INTERFERENCE_RADIUS_KM = 0.5
DEFAULT_PALETTE: Tuple[int, ...] = (110, 111, 112, 113, 114, 115)


@dataclass(frozen=True)
class AllocationConfig:
    """Parameters for a single allocation call."""

    interference_radius_km: float = DEFAULT_INTERFERENCE_RADIUS_KM
    palette: Tuple[int, ...] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        # Accept any sequence for the palette but store it as a tuple.
        object.__setattr__(self, "palette", tuple(self.palette))

        radius = self.interference_radius_km
        if isinstance(radius, bool) or not isinstance(radius, (int, float)):
            raise ValueError("interference_radius_km must be a number")
        if not math.isfinite(radius) or radius <= 0:
            raise ValueError("interference_radius_km must be positive")

        if not self.palette:
            raise ValueError("palette must contain at least one channel")
        for channel in self.palette:
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise ValueError(f"palette channels must be integers, got {channel!r}")
            if channel <= 0:
                raise ValueError(f"palette channels must be positive, got {channel}")
        if len(set(self.palette)) != len(self.palette):
            raise ValueError("palette channels must be distinct")

    @property
    def interference_radius_m(self) -> float:
        return self.interference_radius_km * 1000.0
