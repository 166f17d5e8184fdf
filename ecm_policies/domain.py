"""
Domain policies for the ECM creator.

This module contains the configuration record describing the PhysiCell
voxel domain that the ECM table is rasterized onto.

UNIT CONVENTIONS
----------------
All lengths are in PhysiCell domain units (micrometers). The z coordinate is
a constant passthrough; the grid is two dimensional.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .base import coerce_float


DOMAIN_KEYS = ("x_min", "x_max", "dx", "y_min", "y_max", "dy")


@dataclass
class DomainConfig:
    """
    Policy describing the voxel domain.

    JSON Schema:
    {
        "x_min": float,
        "x_max": float,
        "dx": float,
        "y_min": float,
        "y_max": float,
        "dy": float,
        "z0": float (optional, default 0.0)
    }
    """
    x_min: float
    x_max: float
    dx: float
    y_min: float
    y_max: float
    dy: float
    z0: float = 0.0

    def __post_init__(self):
        for name in DOMAIN_KEYS + ("z0",):
            setattr(self, name, coerce_float(getattr(self, name), name))
        self.validate()

    def validate(self) -> None:
        """Raise ValueError if the bounds or spacings are unusable."""
        for axis in ("x", "y"):
            lo = getattr(self, f"{axis}_min")
            hi = getattr(self, f"{axis}_max")
            step = getattr(self, f"d{axis}")
            if step <= 0:
                raise ValueError(f"d{axis} ({step}) must be positive")
            if hi <= lo:
                raise ValueError(f"{axis}_max ({hi}) must be greater than {axis}_min ({lo})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x_min": self.x_min,
            "x_max": self.x_max,
            "dx": self.dx,
            "y_min": self.y_min,
            "y_max": self.y_max,
            "dy": self.dy,
            "z0": self.z0,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DomainConfig":
        missing = [k for k in DOMAIN_KEYS if k not in d]
        if missing:
            raise ValueError(
                f"Domain configuration is missing required keys {missing}. "
                f"Recognized keys: {list(DOMAIN_KEYS) + ['z0']}"
            )
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})
