"""
Command-Line Interface

CLI for generating PhysiCell ECM initial condition tables and example XML
descriptions.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ecm_policies import DomainConfig, OrientationPolicy

from .api import generate_ic_ecm, write_report_json
from .core.errors import ECMCreatorError
from .specs.template import TEMPLATE_VARIANTS, create_ic_ecm_xml_template


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecm-creator",
        description="ECM Creator - build PhysiCell ECM initial conditions from XML",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate an ECM CSV from an XML description")
    gen_parser.add_argument("xml", type=str, help="Path to the ic_ecm XML file")
    gen_parser.add_argument("csv", type=str, help="Path of the CSV file to write")
    gen_parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="JSON file with x_min, x_max, dx, y_min, y_max, dy and optional z0",
    )
    for key in ("x_min", "x_max", "dx", "y_min", "y_max", "dy", "z0"):
        gen_parser.add_argument(
            f"--{key.replace('_', '-')}",
            dest=key,
            type=float,
            default=None,
            help=f"Domain {key} (overrides --config)",
        )
    gen_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for random fiber orientations",
    )
    gen_parser.add_argument(
        "--parallel-method",
        type=str,
        choices=["rotate_perpendicular", "solve_polynomial"],
        default="rotate_perpendicular",
        help="Method for parallel fiber orientation (default: rotate_perpendicular)",
    )
    gen_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a JSON generation report to this path",
    )

    # Template command
    tpl_parser = subparsers.add_parser("template", help="Write an example ecm.xml")
    tpl_parser.add_argument("folder", type=str, help="Folder to create ecm.xml in")
    tpl_parser.add_argument(
        "--variant",
        type=str,
        choices=list(TEMPLATE_VARIANTS),
        default="multilayer",
        help="Template variant (default: multilayer)",
    )

    for p in [gen_parser, tpl_parser]:
        p.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose output",
        )

    return parser


def load_domain_config(args: argparse.Namespace) -> DomainConfig:
    values = {}
    if args.config:
        with open(args.config, "r", encoding="utf-8") as f:
            values.update(json.load(f))
    for key in ("x_min", "x_max", "dx", "y_min", "y_max", "dy", "z0"):
        if getattr(args, key) is not None:
            values[key] = getattr(args, key)
    return DomainConfig.from_dict(values)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "template":
            path = create_ic_ecm_xml_template(args.folder, variant=args.variant)
            print(f"Template written to {path}")
            return 0

        config = load_domain_config(args)
        policy = OrientationPolicy(parallel_method=args.parallel_method, seed=args.seed)
        report = generate_ic_ecm(args.xml, args.csv, config, policy=policy)
        if args.report:
            write_report_json(report, args.report)
        print(f"ECM written to {args.csv} ({report.metrics['n_voxels']} voxels)")
        return 0
    except (ECMCreatorError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
