"""
Declarative ECM descriptions.

Parsed documents are made of layers, each holding patch collections of a
single patch kind. XML reading lives in ``parse``, example documents in
``template``.
"""

from .patch_spec import (
    OrientationMode,
    PatchKind,
    ECMSpec,
    EverywherePatch,
    EllipsePatch,
    EllipticalDiscPatch,
    EllipseWithShellPatch,
    Patch,
    PatchCollection,
    Layer,
    ECMDocument,
    ALLOWED_ORIENTATIONS,
)
from .rotation import parse_rotation, evaluate_expression
from .parse import parse_ecm_file, parse_ecm_string
from .template import create_ic_ecm_xml_template, template_string, TEMPLATE_VARIANTS

__all__ = [
    "OrientationMode",
    "PatchKind",
    "ECMSpec",
    "EverywherePatch",
    "EllipsePatch",
    "EllipticalDiscPatch",
    "EllipseWithShellPatch",
    "Patch",
    "PatchCollection",
    "Layer",
    "ECMDocument",
    "ALLOWED_ORIENTATIONS",
    "parse_rotation",
    "evaluate_expression",
    "parse_ecm_file",
    "parse_ecm_string",
    "create_ic_ecm_xml_template",
    "template_string",
    "TEMPLATE_VARIANTS",
]
