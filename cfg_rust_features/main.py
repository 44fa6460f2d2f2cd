"""
cfg-rust-features command line.

Probes the configured rustc for the named features. With --emit the cargo
instructions go to stdout, so a build script can simply run this and forward
its output; otherwise a report is printed.
"""

import argparse
import json
import sys

from rich.console import Console
from rich.table import Table

from . import __version__
from .core import (
    CfgRustFeatures,
    CfgRustFeaturesError,
    Emitter,
    UnsupportedFeatureError,
)
from .features import DEFINITION
from .styles import ICON_CHECK, ICON_CROSS, REPORT_THEME, TABLE_BOX
from .utils.config import LOG_LEVELS, Settings
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_TOOLCHAIN = 1
EXIT_UNSUPPORTED = 2


def _list_table() -> Table:
    table = Table(box=TABLE_BOX, header_style="header")
    table.add_column("Feature", no_wrap=True)
    table.add_column("Categories")
    table.add_column("Probe", style="muted")
    for descriptor in DEFINITION:
        probe = descriptor.probe
        table.add_row(
            descriptor.name,
            ", ".join(sorted(c.value for c in descriptor.categories)),
            f"{probe.kind.value}: {probe.argument}" if probe.argument else probe.kind.value,
        )
    return table


def _results_table(results: dict) -> Table:
    table = Table(box=TABLE_BOX, header_style="header")
    table.add_column("Feature", no_wrap=True)
    table.add_column("Enabled")
    table.add_column("Categories")
    for name, categories in results.items():
        if categories is None:
            table.add_row(name, f"[error]{ICON_CROSS}[/error]", "")
        else:
            table.add_row(
                name,
                f"[success]{ICON_CHECK}[/success]",
                ", ".join(sorted(c.value for c in categories)),
            )
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfg-rust-features",
        description="Probe rustc for compiler, language, and library features",
    )
    parser.add_argument(
        "features",
        nargs="*",
        metavar="FEATURE",
        help="Feature names to probe (see --list)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--emit",
        action="store_true",
        help="Write cargo build-script instructions to stdout",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the recognized features and exit",
    )
    parser.add_argument(
        "--rerun-if-changed",
        action="append",
        default=[],
        metavar="FILE",
        help="Also emit a rerun-if-changed instruction for FILE (repeatable)",
    )
    output.add_argument(
        "--json",
        action="store_true",
        help="Print probe results as JSON on stdout instead of a table",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="YAML settings file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        metavar="LEVEL",
        help="Override logging.level (DEBUG, INFO, WARNING, ERROR or CRITICAL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(argv: list[str] | None = None) -> int:
    """Entry point with CLI argument parsing. Returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rerun_if_changed and not args.emit:
        parser.error("--rerun-if-changed requires --emit")
    console = Console(stderr=True, theme=REPORT_THEME)

    try:
        settings = Settings.from_yaml(args.config)
    except ValueError as e:
        console.print(f"[error]{e}[/error]")
        return EXIT_TOOLCHAIN
    setup_logging(level=args.log_level, settings=settings)

    if args.list:
        console.print(_list_table())
        return 0

    emitter = Emitter(prefix=settings.emit.prefix, scope=settings.emit.scope)
    try:
        engine = CfgRustFeatures(emitter=emitter, settings=settings)
        if args.emit:
            for filename in args.rerun_if_changed:
                emitter.rerun_if_changed(filename)
            results = engine.emit_multiple(args.features)
        else:
            results = engine.probe_multiple(args.features)
    except UnsupportedFeatureError as e:
        console.print(f"[error]Unsupported feature {e.feature_name!r}[/error]")
        console.print(f"[muted]{e}[/muted]")
        return EXIT_UNSUPPORTED
    except CfgRustFeaturesError as e:
        logger.error("toolchain_setup_failed", error=str(e))
        console.print(f"[error]{e}[/error]")
        return EXIT_TOOLCHAIN

    if args.json:
        payload = {
            name: sorted(c.value for c in categories) if categories is not None else None
            for name, categories in results.items()
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
    elif not args.emit:
        snapshot = engine.context.snapshot
        console.print(
            f"[info]rustc {snapshot.version} ({snapshot.channel.value})[/info]"
        )
        console.print(_results_table(results))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
