"""
ABOUTME: Rich console rendering of variable sets and resolution errors
ABOUTME: Builds usage tables and error listings for operators checking an environment
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import checks
from .exceptions import EnvErrors, MissingVariableError
from .values import (
    BoolValue,
    CheckedValue,
    DurationValue,
    FloatValue,
    IntValue,
    StringListValue,
    StringValue,
    Value,
)
from .varset import VarSet

_KINDS = {
    StringValue: "string",
    IntValue: "int",
    FloatValue: "float",
    BoolValue: "bool",
    DurationValue: "duration",
    StringListValue: "list",
}

_CHECK_LABELS = {
    checks.is_non_empty: "required",
    checks.is_bind_addr: "bind address",
    checks.is_dial_addr: "dial address",
    checks.is_path: "path",
}


def kind(value: Value) -> str:
    """Return a short human-readable type label, e.g. ``string (bind address)``."""
    if isinstance(value, CheckedValue):
        label = _CHECK_LABELS.get(value.check, "checked")
        return f"{kind(value.wrapped)} ({label})"
    return _KINDS.get(type(value), type(value).__name__)


def _statuses(errors: Optional[EnvErrors]) -> Dict[str, str]:
    statuses: Dict[str, str] = {}
    for err in errors or ():
        name = getattr(err, "name", None)
        if name is None:
            continue
        statuses[name] = "missing" if isinstance(err, MissingVariableError) else "invalid"
    return statuses


def usage_table(
    varset: VarSet, errors: Optional[EnvErrors] = None, show_values: bool = False
) -> Table:
    """
    Build a table listing every variable in declaration order.

    Parameters:
        varset (VarSet): The set to describe.
        errors (EnvErrors, optional): Result of a failed parse(); used to mark
            each variable as ok, missing or invalid.
        show_values (bool): Include current values. Off by default because
            environment variables often carry credentials.

    Returns:
        Table: A rich table ready to print.
    """
    title = f"Environment for {varset.name}" if varset.name else "Environment"
    table = Table(title=title)
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Status")
    if show_values:
        table.add_column("Value")
    table.add_column("Usage")

    statuses = _statuses(errors)
    for var in varset:
        status = statuses.get(var.name, "ok")
        styled = {
            "ok": "[green]ok[/green]",
            "missing": "[yellow]missing[/yellow]",
            "invalid": "[red]invalid[/red]",
        }[status]
        row = [Text(var.name), kind(var.value), styled]
        if show_values:
            row.append(Text(var.value.render() if status == "ok" else ""))
        row.append(Text(var.usage))
        table.add_row(*row)
    return table


def print_usage(
    varset: VarSet,
    console: Console,
    errors: Optional[EnvErrors] = None,
    show_values: bool = False,
) -> None:
    """Print the usage table for varset."""
    console.print(usage_table(varset, errors, show_values))


def print_errors(errors: EnvErrors, console: Console) -> None:
    """Print the error headline followed by every individual error."""
    console.print(f"❌ {errors}", style="bold red", markup=False)
    for err in errors:
        console.print(f"  • {err}", markup=False)


def as_dict(
    varset: VarSet, errors: Optional[EnvErrors] = None, show_values: bool = False
) -> Dict[str, Any]:
    """Return a JSON-serializable summary of varset and the outcome of parse()."""
    statuses = _statuses(errors)
    variables: List[Dict[str, Any]] = []
    for var in varset:
        status = statuses.get(var.name, "ok")
        entry = {
            "name": var.name,
            "type": kind(var.value),
            "status": status,
            "usage": var.usage,
        }
        if show_values and status == "ok":
            entry["value"] = var.value.render()
        variables.append(entry)
    return {
        "name": varset.name,
        "prefix": varset.prefix,
        "ok": not errors,
        "errors": [str(e) for e in errors or ()],
        "variables": variables,
    }
