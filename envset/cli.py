"""
ABOUTME: Command-line interface for checking an environment against declared variables
ABOUTME: Handles argument parsing and main entry point functionality
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .exceptions import ConfigError, EnvErrors
from .report import as_dict, print_errors, print_usage
from .varset import VarSet

console = Console()

KINDS = (
    "string",
    "string_required",
    "int",
    "float",
    "bool",
    "duration",
    "string_list",
    "bind_addr",
    "dial_addr",
    "path",
)


def parse_var_spec(spec: str) -> Tuple[str, str, str]:
    """
    Split a ``NAME:KIND[:usage]`` argument.

    Returns:
        tuple[str, str, str]: Name, kind and usage (empty when omitted).

    Raises:
        argparse.ArgumentTypeError: If the name is empty or the kind is unknown.
    """
    parts = spec.split(":", 2)
    if len(parts) < 2 or not parts[0]:
        raise argparse.ArgumentTypeError(
            f"invalid variable {spec!r}, expected NAME:KIND[:usage]"
        )
    name, kind = parts[0], parts[1]
    if kind not in KINDS:
        raise argparse.ArgumentTypeError(
            f"unknown kind {kind!r} for {name}, choose from {', '.join(KINDS)}"
        )
    usage = parts[2] if len(parts) == 3 else ""
    return name, kind, usage


def cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and return command-line arguments for the environment checker.

    Returns:
        argparse.Namespace: Parsed arguments naming the variables to check, the prefix, and output options.
    """
    p = argparse.ArgumentParser(
        prog="envset",
        description="Check that the environment provides every declared variable",
    )
    p.add_argument(
        "variables",
        nargs="+",
        type=parse_var_spec,
        metavar="NAME:KIND[:usage]",
        help=f"Variable to check; KIND is one of {', '.join(KINDS)}",
    )
    p.add_argument(
        "--prefix",
        default="",
        help="Set name; variables are looked up as PREFIX_NAME",
    )
    p.add_argument(
        "--show-values",
        action="store_true",
        help="Include resolved values in the output",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format instead of rich console tables",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"envset {__version__}",
    )
    return p.parse_args(argv)


def build_varset(prefix: str, specs: List[Tuple[str, str, str]]) -> VarSet:
    """Declare each (name, kind, usage) in a new VarSet named prefix."""
    varset = VarSet(prefix)
    for name, kind, usage in specs:
        getattr(varset, kind)(name, usage)
    return varset


def main(argv: Optional[List[str]] = None) -> None:
    """
    Execute the envset command.

    Declares the requested variables, resolves them from the process environment and prints a report. Exits with status 1 if any variable is missing or invalid, or on a declaration error.
    """
    a = cli(argv)

    logging.basicConfig(
        level=getattr(logging, a.log_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    try:
        varset = build_varset(a.prefix, a.variables)
        errors: Optional[EnvErrors] = None
        try:
            varset.parse()
        except EnvErrors as e:
            errors = e

        if a.json:
            print(json.dumps(as_dict(varset, errors, a.show_values), indent=2))
        else:
            print_usage(varset, console, errors, a.show_values)
            if errors:
                print_errors(errors, console)
            else:
                console.print(f"✅ All {len(varset)} variables set")

        if errors:
            sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n❌ Interrupted by user")
        sys.exit(1)
    except ConfigError as exc:
        console.print(f"❌ Configuration error: {exc}", markup=False)
        logging.debug("Configuration error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
