"""dscc-gen command line interface.

Usage::

    dscc-gen viz --name my_viz --devBucket my-bucket/dev --prodBucket my-bucket/prod
    dscc-gen connector --name my_connector --auth_type OAUTH2
    python -m dscc_gen connector

Anything not supplied on the command line is asked for interactively.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from dscc_gen import __version__
from dscc_gen.config import AuthType, ProjectChoice, Settings
from dscc_gen.errors import DsccGenError
from dscc_gen.resolver import Prompter, with_missing
from dscc_gen.scaffolder import ProjectGenerator
from dscc_gen.utils import (
    console,
    print_error,
    print_header,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
)

# Parsed options that steer the run but are not part of the project record.
_RUN_OPTIONS = ("skip_install",)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_viz_parser(subparsers: Any) -> argparse.ArgumentParser:
    viz_parser = subparsers.add_parser(
        ProjectChoice.VIZ.value,
        help="Create a Community Visualization project.",
        description="Creates a project using a Community Viz template.",
    )
    viz_parser.add_argument(
        "--devBucket", "-d",
        dest="dev_bucket",
        help="The GCS bucket for development builds",
    )
    viz_parser.add_argument(
        "--prodBucket", "-p",
        dest="prod_bucket",
        help="The GCS bucket for production builds",
    )
    return viz_parser


def _add_connector_parser(subparsers: Any) -> argparse.ArgumentParser:
    connector_parser = subparsers.add_parser(
        ProjectChoice.CONNECTOR.value,
        help="Create a Community Connector project.",
        description="Creates a project using a Community Connector template.",
    )
    connector_parser.add_argument(
        "--script_id", "-s",
        dest="script_id",
        help="The id of the Apps Script project to clone",
    )
    connector_parser.add_argument(
        "--auth_type",
        dest="auth_type",
        choices=[auth.value for auth in AuthType],
        help="The authorization type for the connector",
    )
    return connector_parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dscc-gen",
        description="Tool for generating Data Studio Developer feature projects.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  dscc-gen viz -n my_viz -d my-bucket/dev -p my-bucket/prod\n"
            "  dscc-gen connector -n my_connector --auth_type KEY\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        title="Project Type",
        dest="project_choice",
        required=True,
    )
    for sub in (_add_viz_parser(subparsers), _add_connector_parser(subparsers)):
        sub.add_argument(
            "--name", "-n",
            dest="project_name",
            help="The name of the project you want to create",
        )
        sub.add_argument(
            "--alt-build-tool",
            dest="use_alternate_build_tool",
            action="store_true",
            help="Use yarn instead of npm as the build tool",
        )
        sub.add_argument(
            "--base-path",
            dest="base_path",
            type=Path,
            default=None,
            help="Directory to create the project in (default: current directory)",
        )
        sub.add_argument(
            "--skip-install",
            dest="skip_install",
            action="store_true",
            help="Do not install the generated project's dependencies",
        )

    return parser


def cli_args_from_namespace(namespace: argparse.Namespace) -> dict[str, Any]:
    """Return the partial project record carried by parsed arguments."""
    return {
        key: value
        for key, value in vars(namespace).items()
        if key not in _RUN_OPTIONS
    }


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(
    cli_args: dict[str, Any],
    settings: Settings,
    *,
    install: bool = True,
    prompter: Prompter | None = None,
) -> Path:
    """Resolve the configuration, then generate the project.

    Returns:
        Path to the generated project root.
    """
    choice = ProjectChoice(cli_args["project_choice"])
    print_header(f"New {choice.value} project")

    config = await with_missing(cli_args, settings, prompter)
    print_summary_table(
        {key: str(value) for key, value in config.to_dict().items()},
        title="Project configuration",
    )

    generator = ProjectGenerator(config)
    with console.status(f"Creating {config.project_name}..."):
        project_root = await generator.generate()

    if install:
        with console.status(f"Running {config.build_tool} install..."):
            await generator.install_dependencies(
                project_root, timeout=settings.install_timeout
            )
    else:
        print_warning(f"Skipped {config.build_tool} install.")

    print_success(f"Created {project_root}")
    print_panel("\n".join(generator.next_steps()), title="Next steps")
    return project_root


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``dscc-gen`` and ``python -m dscc_gen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Invalid DSCC_GEN_* environment settings: {exc}")
        sys.exit(2)

    try:
        asyncio.run(
            run(
                cli_args_from_namespace(args),
                settings,
                install=not args.skip_install,
            )
        )
    except DsccGenError as exc:
        print_error(f"Error: {exc.message}")
        console.print(f"[dim]{exc.code}[/dim]")
        sys.exit(1)
    except OSError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_warning("Aborted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
