"""
Base utilities for ECM creator policies.

This module provides shared helpers and the GenerationReport dataclass
returned by a generation run.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List
import json


def coerce_float(value: Any, name: str) -> float:
    """
    Coerce a configuration value to float.

    Values that cannot be converted raise ValueError naming the field.

    Parameters
    ----------
    value : Any
        Value to coerce
    name : str
        Field name used in the error message

    Returns
    -------
    float
        Coerced float value
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class GenerationReport:
    """
    Report returned by a generation run.

    Records the effective domain configuration, the layers composited
    and how many voxels each of them defined.
    """
    operation: str = "generate_ic_ecm"
    success: bool = True
    effective_policy: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def record_layer(self, layer_id: int, n_defined: int, n_overwritten: int) -> None:
        """Record the voxel counts contributed by one layer."""
        layers = self.metrics.setdefault("layers", [])
        layers.append({
            "layer_id": layer_id,
            "n_defined": n_defined,
            "n_overwritten": n_overwritten,
        })


__all__ = [
    "coerce_float",
    "GenerationReport",
]
