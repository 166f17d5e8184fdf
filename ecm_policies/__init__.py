"""
ECM Policies - Configuration records for the ECM creator.

This package provides the dataclasses used to configure a generation run.
All policies are JSON-serializable.

Usage:
    from ecm_policies import DomainConfig, OrientationPolicy, GenerationReport
"""

from .base import (
    GenerationReport,
    coerce_float,
)

from .domain import DomainConfig

from .orientation import OrientationPolicy

__all__ = [
    "GenerationReport",
    "coerce_float",
    "DomainConfig",
    "OrientationPolicy",
]
