"""Command-line entry point for the controller scaffolder.

Usage::

    python -m src.cli add-controller --api-version app.example.com/v1alpha1 --kind AppService
    python -m src.cli add-controller --api-version app.example.com/v1alpha1 --kind AppService \\
        --custom-api-import k8s.io/api/apps/v1=appsv1
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.config import Config
from src.scaffolder import ControllerKind, Resource, ScaffoldGenerator
from src.scaffolder.errors import ScaffoldError
from src.utils import print_error, print_summary_table


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffold",
        description="Generate Go controller scaffolds for Kubernetes operators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffold add-controller --api-version app.example.com/v1alpha1 --kind AppService\n"
            "  scaffold add-controller --api-version app.example.com/v1alpha1 --kind AppService \\\n"
            "      --custom-api-import k8s.io/api/apps/v1=appsv1\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add-controller", help="Generate a controller for a resource")
    add.add_argument(
        "--api-version",
        required=True,
        help="Kubernetes API version of the resource, e.g. app.example.com/v1alpha1",
    )
    add.add_argument("--kind", required=True, help="Kind of the resource, e.g. AppService")
    add.add_argument(
        "--custom-api-import",
        default=None,
        help='Import path of a built-in or external API, optionally "path=identifier"',
    )
    add.add_argument(
        "--repo",
        default=None,
        help="Go module path of the project (default: $SCAFFOLD_REPO or the example repo)",
    )
    add.add_argument(
        "--project-dir", "-d",
        default=None,
        help="Project root the file is written under (default: current directory)",
    )
    add.add_argument(
        "--path",
        default=None,
        help="Explicit output path, relative to the project root",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``python -m src.cli``."""
    args = _build_parser().parse_args(argv)

    config = Config.from_env()
    if args.repo:
        config = config.model_copy(update={"repo": args.repo.strip().rstrip("/")})
    if args.project_dir:
        config = config.model_copy(
            update={"abs_project_path": Path(args.project_dir).expanduser().resolve()}
        )

    try:
        resource = Resource.new(args.api_version, args.kind)
        scaffold = ControllerKind(
            resource=resource,
            custom_import=args.custom_api_import,
            path=Path(args.path) if args.path else None,
        )
        written = asyncio.run(ScaffoldGenerator(config).execute(scaffold))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Kind": resource.kind,
            "API version": resource.api_version,
            "Files written": str(len(written)),
        },
        title="Controller scaffold",
    )


if __name__ == "__main__":
    main()
