"""High-level API for ECM initial condition generation."""

from .generate import generate_ic_ecm, compose_ic_ecm
from .export import save_ecm_csv, write_report_json

__all__ = [
    "generate_ic_ecm",
    "compose_ic_ecm",
    "save_ecm_csv",
    "write_report_json",
]
