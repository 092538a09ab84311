"""CLI entry point for laneboard."""

import argparse
from pathlib import Path

from . import __version__
from .bootstrap import resolve_database
from .cli.export import EXPORT_FORMATS
from .config import Settings
from .logging import setup_logging
from .services import ConfigService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="laneboard",
        description="Terminal kanban boards with swimlanes, lists and cards",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Directory containing laneboard.yml (default: current directory)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database file (overrides laneboard.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_mutually_exclusive_group()
    commands.add_argument(
        "--generate",
        action="store_true",
        help="Generate default laneboard.yml in the project root and exit",
    )
    commands.add_argument(
        "--show",
        type=int,
        metavar="BOARD_ID",
        default=None,
        help="Print a board as a tree and exit",
    )
    commands.add_argument(
        "--export",
        nargs=2,
        metavar=("BOARD_ID", "DEST"),
        default=None,
        help="Export a board to DEST and exit",
    )
    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="xlsx",
        help="Export format: one xlsx workbook, or markdown files under a directory (default: xlsx)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args; unset flags fall back to LANEBOARD_* env
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.db:
        settings_kwargs["database"] = args.db
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    database = resolve_database(settings, ConfigService(settings.project_root))
    setup_logging(settings.verbose, settings.log_file, database)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    if args.show is not None or args.export is not None:
        raise SystemExit(_run_command(settings, args))

    # Import here so CLI commands don't pay for loading textual
    from .app import run

    run(settings)


def _run_command(settings: Settings, args: argparse.Namespace) -> int:
    from .bootstrap import build_services
    from .cli.output import error
    from .repositories import StoreError

    try:
        services = build_services(settings)
    except StoreError as e:
        error(str(e))
        return 1

    try:
        if args.show is not None:
            from .cli.show import run_show

            return run_show(services.boards, args.show)

        from .cli.export import run_export

        board_id, dest = args.export
        try:
            parsed_id = int(board_id)
        except ValueError:
            error(f"Invalid board ID: {board_id}")
            return 1
        return run_export(services.export, parsed_id, Path(dest), args.format)
    finally:
        services.close()


if __name__ == "__main__":
    main()
