"""
ECM Creator - PhysiCell extracellular matrix initial conditions.

This package rasterizes a layered XML description of ECM patches onto a
PhysiCell voxel grid. Each voxel receives an ECM density and a 2D fiber
orientation vector.

Main Entry Points:
    - generate_ic_ecm(): XML in, CSV out
    - compose_ic_ecm(): rasterize a parsed document in memory
    - create_ic_ecm_xml_template(): write an example XML description

Example:
    >>> from ecm_creator import create_ic_ecm_xml_template, generate_ic_ecm
    >>> create_ic_ecm_xml_template("config")
    >>> config = {"x_min": -400.0, "x_max": 400.0, "dx": 20.0,
    ...           "y_min": -400.0, "y_max": 400.0, "dy": 20.0}
    >>> generate_ic_ecm("config/ecm.xml", "config/ecm.csv", config)
"""

from .api import generate_ic_ecm, compose_ic_ecm
from .core import (
    EllipticalRegion,
    EllipseZone,
    VoxelGrid,
    ECMCreatorError,
    ECMSpecError,
    ECMCompositionError,
    OverlapViolationError,
    IncompleteCoverageError,
)
from .specs import (
    parse_ecm_file,
    parse_ecm_string,
    parse_rotation,
    create_ic_ecm_xml_template,
)

__version__ = "0.1.0"

__all__ = [
    "generate_ic_ecm",
    "compose_ic_ecm",
    "EllipticalRegion",
    "EllipseZone",
    "VoxelGrid",
    "ECMCreatorError",
    "ECMSpecError",
    "ECMCompositionError",
    "OverlapViolationError",
    "IncompleteCoverageError",
    "parse_ecm_file",
    "parse_ecm_string",
    "parse_rotation",
    "create_ic_ecm_xml_template",
]
