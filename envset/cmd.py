"""
ABOUTME: Process-wide default variable set named after the running program
ABOUTME: Module-level functions mirror VarSet methods and operate on the default set
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from .lookup import Lookup
from .values import (
    BoolValue,
    DurationValue,
    FloatValue,
    IntValue,
    StringListValue,
    StringValue,
    Value,
)
from .varset import Var, VarSet

_cmd_var: Optional[VarSet] = None


def cmd_name() -> str:
    """
    Return the base name of the running program, e.g. ``my-service``.

    Replace envset.cmd.cmd_name (before the default set is first used, or
    followed by reset()) to control the default prefix. Rebinding the
    re-exported envset.cmd_name has no effect.
    """
    if not sys.argv or not sys.argv[0]:
        return ""
    return Path(sys.argv[0]).stem


def cmd_var() -> VarSet:
    """Return the default variable set, creating it on first use."""
    global _cmd_var
    if _cmd_var is None:
        _cmd_var = VarSet(cmd_name())
    return _cmd_var


def reset(name: Optional[str] = None) -> VarSet:
    """
    Discard the default variable set and build a new one.

    Parameters:
        name (str, optional): Name for the new set. Defaults to cmd_name().

    Returns:
        VarSet: The new default set.
    """
    global _cmd_var
    _cmd_var = VarSet(cmd_name() if name is None else name)
    return _cmd_var


def declare(value: Value, name: str, usage: str) -> Var:
    return cmd_var().declare(value, name, usage)


def string(name: str, usage: str) -> StringValue:
    return cmd_var().string(name, usage)


def string_required(name: str, usage: str) -> StringValue:
    return cmd_var().string_required(name, usage)


def int(name: str, usage: str) -> IntValue:
    return cmd_var().int(name, usage)


def float(name: str, usage: str) -> FloatValue:
    return cmd_var().float(name, usage)


def bool(name: str, usage: str) -> BoolValue:
    return cmd_var().bool(name, usage)


def duration(name: str, usage: str) -> DurationValue:
    return cmd_var().duration(name, usage)


def string_list(name: str, usage: str) -> StringListValue:
    return cmd_var().string_list(name, usage)


def bind_addr(name: str, usage: str) -> StringValue:
    return cmd_var().bind_addr(name, usage)


def dial_addr(name: str, usage: str) -> StringValue:
    return cmd_var().dial_addr(name, usage)


def path(name: str, usage: str) -> StringValue:
    return cmd_var().path(name, usage)


def visit(fn: Callable[[Var], None]) -> None:
    cmd_var().visit(fn)


def parse(source: Union[Lookup, Mapping[str, str], None] = None) -> None:
    """Resolve the default set, from the process environment unless source is given."""
    cmd_var().parse(source)
