"""
High-level ECM generation.

Reads an ``ic_ecm`` XML document, rasterizes its layers onto the PhysiCell
voxel grid and writes the resulting ECM table. Nothing is written unless
compositing succeeds.

Example:
    >>> from ecm_creator.api import generate_ic_ecm
    >>> config = {"x_min": -400.0, "x_max": 400.0, "dx": 20.0,
    ...           "y_min": -400.0, "y_max": 400.0, "dy": 20.0}
    >>> report = generate_ic_ecm("config/ecm.xml", "config/ecm.csv", config)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import numpy as np

from ecm_policies import DomainConfig, GenerationReport, OrientationPolicy

from ..core.grid import VoxelGrid
from ..ops.compose import compose_document
from ..specs.parse import parse_ecm_file
from ..specs.patch_spec import ECMDocument
from .export import save_ecm_csv

logger = logging.getLogger(__name__)

ConfigLike = Union[DomainConfig, Dict[str, Any]]


def as_domain_config(config: ConfigLike) -> DomainConfig:
    if isinstance(config, DomainConfig):
        return config
    return DomainConfig.from_dict(config)


def compose_ic_ecm(
    document: ECMDocument,
    config: ConfigLike,
    policy: Optional[OrientationPolicy] = None,
    report: Optional[GenerationReport] = None,
) -> VoxelGrid:
    """
    Rasterize a parsed document onto the configured domain, in memory.

    Parameters
    ----------
    document : ECMDocument
        Parsed ECM description.
    config : DomainConfig or dict
        Domain bounds and spacing.
    policy : OrientationPolicy, optional
        Orientation settings, including the random seed.
    report : GenerationReport, optional
        Receives the effective domain, orientation settings and resolved
        document, plus per-layer metrics.

    Returns
    -------
    VoxelGrid
        Fully defined grid.
    """
    config = as_domain_config(config)
    if policy is None:
        policy = OrientationPolicy()
    rng = np.random.default_rng(policy.seed)

    domain_grid = VoxelGrid.build(config)
    if report is not None:
        report.effective_policy = {
            "domain": config.to_dict(),
            "orientation": policy.to_dict(),
            "document": document.to_dict(),
        }
        report.metrics["n_voxels"] = len(domain_grid)
        report.metrics["nx"] = domain_grid.nx
        report.metrics["ny"] = domain_grid.ny
        if not document.layers:
            report.add_warning("The document has no layers")

    return compose_document(document, domain_grid, rng=rng, policy=policy, report=report)


def generate_ic_ecm(
    path_to_ic_ecm_xml: Union[str, Path],
    path_to_ic_ecm_csv: Union[str, Path],
    config: ConfigLike,
    policy: Optional[OrientationPolicy] = None,
) -> GenerationReport:
    """
    Generate an initial condition ECM file from an XML file.

    Parameters
    ----------
    path_to_ic_ecm_xml : str or Path
        The XML file describing the ECM.
    path_to_ic_ecm_csv : str or Path
        The CSV file to create.
    config : DomainConfig or dict
        Keys x_min, x_max, dx, y_min, y_max, dy and optionally z0
        (default 0.0).
    policy : OrientationPolicy, optional
        Orientation settings.

    Returns
    -------
    GenerationReport
        Domain, layer and voxel metrics of the run.

    Raises
    ------
    ECMSpecError
        If the XML document is malformed.
    ECMCompositionError
        If patches overlap within a layer or voxels are left undefined.
    """
    report = GenerationReport()
    document = parse_ecm_file(path_to_ic_ecm_xml)
    grid = compose_ic_ecm(document, config, policy=policy, report=report)
    csv_path = save_ecm_csv(grid, path_to_ic_ecm_csv)
    report.metrics["output"] = str(csv_path)
    return report
