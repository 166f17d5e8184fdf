"""
Export utilities for ECM outputs.

The PhysiCell ECM table is written as CSV with columns
x, y, z, ecm_density, ecm_orientation_x, ecm_orientation_y.
"""

from pathlib import Path
from typing import Union
import json
import logging

from ecm_policies import GenerationReport

from ..core.grid import VoxelGrid

logger = logging.getLogger(__name__)


def save_ecm_csv(grid: VoxelGrid, path: Union[str, Path]) -> Path:
    """
    Write a composited grid to CSV.

    Parameters
    ----------
    grid : VoxelGrid
        Fully defined grid.
    path : str or Path
        Output file. Parent directories are created.

    Returns
    -------
    Path
        Path to the saved file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    grid.to_dataframe().to_csv(path, index=False)
    logger.info(f"Saved ECM table with {len(grid)} voxel(s) to {path}")
    return path


def write_report_json(report: GenerationReport, path: Union[str, Path]) -> Path:
    """Write a generation report as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)
    return path
