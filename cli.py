# ============================================================================
# COMMAND LINE INTERFACE
# ============================================================================
# STATUS: Entry point - sen2prep console script
# PURPOSE: Check external tools and job parameter files from a shell
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: main, build_parser
# DEPENDENCIES: rich (terminal output)
# ============================================================================
"""
sen2prep command line.

    sen2prep check-tools [--force] [--no-aria2] [--no-abort] [--json]
    sen2prep check-params FILE [--mode string|error|warning] [--json]
    sen2prep show-config

Exit codes follow core.errors.get_exit_code: 0 success (also when only an
optional tool is missing), 2 invalid parameters, 3 missing tool, 4 GDAL too
old, 5 GDAL without JP2OpenJPEG, 6 bad configuration, 1 anything else.
"""

import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

import exceptions
from config import debug_config, get_config
from core import ErrorCode, create_error_response, error_code_for, get_exit_code
from core.models import ErrorReport, NormalizeMode, Verdict
from exceptions import BusinessLogicError, ConfigurationError
from services import ParameterNormalizer
from startup import EnvironmentPreparer
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.CLI, "cli")

console = Console()
err_console = Console(stderr=True)

_VERDICT_STYLE = {
    Verdict.PASS: "green",
    Verdict.DEGRADED: "yellow",
    Verdict.FAIL: "red",
}


def _print_json(data) -> None:
    console.print_json(json.dumps(data, default=str))


def check_tools(args: argparse.Namespace) -> int:
    preparer = EnvironmentPreparer(config=get_config())
    result = preparer.prepare(
        abort=not args.no_abort,
        force=args.force,
        with_aria2=not args.no_aria2
    )

    if args.json:
        _print_json(result.to_dict())
    else:
        table = Table(title="External tools")
        table.add_column("Check")
        table.add_column("Verdict")
        table.add_column("Details")
        for check in (result.gdal, result.downloaders):
            if check is None:
                continue
            style = _VERDICT_STYLE[check.verdict]
            details = check.error_message or ", ".join(
                f"{tool}: {status}" for tool, status in check.details.get("statuses", {}).items()
            )
            table.add_row(check.name, f"[{style}]{check.verdict.value}[/]", details)
        console.print(table)

    failed = result.get_failed_checks()
    if not failed:
        return 0
    return get_exit_code(_code_for_name(failed[0].error_type))


def _code_for_name(error_type: Optional[str]) -> ErrorCode:
    """ErrorCode for an exception class name recorded in a check result."""
    error_cls = getattr(exceptions, error_type or "", None)
    if isinstance(error_cls, type) and issubclass(error_cls, BaseException):
        return error_code_for(error_cls)
    return ErrorCode.UNEXPECTED_ERROR


def check_params(args: argparse.Namespace) -> int:
    log = LoggerFactory.create_with_context(ComponentType.CLI, "cli.check_params", param_file=args.file)
    normalizer = ParameterNormalizer(get_config().normalizer)
    result = normalizer.normalize(args.file, mode=args.mode, correct=True)

    if isinstance(result, ErrorReport):
        log.warning(f"{len(result)} parameter violation(s)")
        if args.json:
            _print_json(result.to_dict())
        else:
            for issue in result.issues:
                console.print(f"[red]{issue.kind.__name__}[/] {issue.message}")
        return get_exit_code(error_code_for(result.kinds[0]))

    if args.json:
        _print_json(result.to_parameters())
    else:
        console.print("[green]Parameters are valid.[/]")
        _print_json(result.to_parameters())
    return 0


def show_config(args: argparse.Namespace) -> int:
    _print_json(debug_config())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sen2prep",
        description="Prepare the environment of a Sentinel-2 download/processing job",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Find GDAL and the downloaders, store their paths
  sen2prep check-tools

  # Search for GDAL again, report instead of failing
  sen2prep check-tools --force --no-abort

  # Validate a parameter file, stop at the first problem
  sen2prep check-params params.json --mode error
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tools = subparsers.add_parser("check-tools", help="Resolve GDAL, python, wget and aria2c")
    tools.add_argument(
        "--force", action="store_true",
        help="Search for GDAL even if a path is already stored",
    )
    tools.add_argument(
        "--no-aria2", action="store_true",
        help="Do not request aria2c",
    )
    tools.add_argument(
        "--no-abort", action="store_true",
        help="Report failures instead of stopping at the first one",
    )
    tools.add_argument("--json", action="store_true", help="Print the result as JSON")
    tools.set_defaults(func=check_tools)

    params = subparsers.add_parser("check-params", help="Validate and correct a parameter file")
    params.add_argument("file", help="Path of the JSON parameter file")
    params.add_argument(
        "--mode", choices=[m.value for m in NormalizeMode], default=NormalizeMode.STRING.value,
        help="How violations are reported (default: string)",
    )
    params.add_argument("--json", action="store_true", help="Print the result as JSON")
    params.set_defaults(func=check_params)

    show = subparsers.add_parser("show-config", help="Print the effective configuration")
    show.set_defaults(func=show_config)

    return parser


@log_exceptions(logger=logger)
def _run(args: argparse.Namespace) -> int:
    return args.func(args)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return _run(args)
    except (BusinessLogicError, ConfigurationError) as e:
        code = error_code_for(e)
        if getattr(args, "json", False):
            _print_json(create_error_response(code, str(e), error_type=type(e).__name__))
        else:
            err_console.print(f"[red]{e}[/]")
        return get_exit_code(code)


if __name__ == "__main__":
    sys.exit(main())
