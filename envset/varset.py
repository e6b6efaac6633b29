"""
ABOUTME: Registry of typed, namespaced environment variables and their resolution
ABOUTME: Declares variables through typed factories and resolves them all in one pass
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Union

from . import checks
from .exceptions import (
    DuplicateVariableError,
    EnvErrors,
    MissingVariableError,
    SetVariableError,
)
from .lookup import Lookup, as_lookup
from .values import (
    BoolValue,
    Check,
    CheckedValue,
    DurationValue,
    FloatValue,
    IntValue,
    StringListValue,
    StringValue,
    Value,
)

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9_]")


def make_prefix(name: str) -> str:
    """Derive a variable prefix from a set name: ``my-service`` becomes ``MY_SERVICE``."""
    return _SEPARATOR_RE.sub("_", name.upper())


@dataclass
class Var:
    """A declared variable: its fully-qualified name, help text and value."""

    name: str
    usage: str
    value: Value


class VarSet:
    """
    An ordered set of variables sharing a namespace prefix.

    Variables are resolved, listed and reported in the order they were
    declared. The set has no locking; declare everything before calling
    parse() or visit() and do not share it across threads while doing so.
    """

    def __init__(self, name: str = ""):
        """
        Initialize an empty set.

        Parameters:
            name (str): Display name of the set. When non-empty every variable
                gets ``make_prefix(name) + "_"`` prepended to its name.
        """
        self._name = name
        self._prefix = make_prefix(name)
        self._vars: List[Var] = []
        self._index: Dict[str, Var] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def prefix(self) -> str:
        return self._prefix

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[Var]:
        return iter(list(self._vars))

    def __repr__(self) -> str:
        return f"VarSet({self._name!r}, {len(self._vars)} vars)"

    def qualify(self, name: str) -> str:
        """Return the lookup key for a variable declared as name."""
        if self._prefix:
            return f"{self._prefix}_{name}"
        return name

    def declare(self, value: Value, name: str, usage: str) -> Var:
        """
        Register value under the fully-qualified form of name.

        Raises:
            DuplicateVariableError: If the qualified name is already declared.
        """
        full_name = self.qualify(name)
        if full_name in self._index:
            raise DuplicateVariableError(full_name)
        var = Var(name=full_name, usage=usage, value=value)
        self._vars.append(var)
        self._index[full_name] = var
        return var

    def lookup(self, name: str) -> Optional[Var]:
        """Return the variable with the given fully-qualified name, if declared."""
        return self._index.get(name)

    def visit(self, fn: Callable[[Var], None]) -> None:
        """Call fn for each variable in declaration order."""
        for var in self._vars:
            fn(var)

    def _checked(self, check: Check, cell: Value, name: str, usage: str) -> Value:
        self.declare(CheckedValue(check, cell), name, usage)
        return cell

    def string(self, name: str, usage: str) -> StringValue:
        """Declare a string variable; an empty value is allowed."""
        cell = StringValue()
        self.declare(cell, name, usage)
        return cell

    def string_required(self, name: str, usage: str) -> StringValue:
        """Declare a string variable that must not be empty."""
        return self._checked(checks.is_non_empty, StringValue(), name, usage)

    def int(self, name: str, usage: str) -> IntValue:
        """Declare a 64-bit integer variable."""
        cell = IntValue()
        self.declare(cell, name, usage)
        return cell

    def float(self, name: str, usage: str) -> FloatValue:
        """Declare a floating point variable."""
        cell = FloatValue()
        self.declare(cell, name, usage)
        return cell

    def bool(self, name: str, usage: str) -> BoolValue:
        """Declare a boolean variable."""
        cell = BoolValue()
        self.declare(cell, name, usage)
        return cell

    def duration(self, name: str, usage: str) -> DurationValue:
        """Declare a duration variable, e.g. ``1h30m``."""
        cell = DurationValue()
        self.declare(cell, name, usage)
        return cell

    def string_list(self, name: str, usage: str) -> StringListValue:
        """Declare a comma-separated list variable."""
        cell = StringListValue()
        self.declare(cell, name, usage)
        return cell

    def bind_addr(self, name: str, usage: str) -> StringValue:
        """Declare a string variable validated as a listen address (host:port)."""
        return self._checked(checks.is_bind_addr, StringValue(), name, usage)

    def dial_addr(self, name: str, usage: str) -> StringValue:
        """Declare a string variable validated as a connect address (host:port)."""
        return self._checked(checks.is_dial_addr, StringValue(), name, usage)

    def path(self, name: str, usage: str) -> StringValue:
        """Declare a string variable validated as a local path."""
        return self._checked(checks.is_path, StringValue(), name, usage)

    def parse(self, source: Union[Lookup, Mapping[str, str], None] = None) -> None:
        """
        Resolve every declared variable from source.

        Each variable is looked up and parsed exactly once, in declaration
        order. A missing or invalid variable does not stop the pass; all
        failures are collected and raised together at the end. A value that
        raises a plain ValueError is reported the same way as InvalidValueError.

        Parameters:
            source: A Lookup, a mapping, or None for the process environment.

        Raises:
            EnvErrors: If any variable was missing or rejected its value.
        """
        lookup = as_lookup(source)
        errors: List[Exception] = []

        for var in self._vars:
            text = lookup.get(var.name)
            if text is None:
                logging.debug(f"Env {var.name} not set")
                errors.append(MissingVariableError(var.name))
                continue

            try:
                var.value.parse(text)
            except ValueError as e:
                logging.debug(f"Env {var.name} rejected: {e}")
                err = SetVariableError(var.name, e)
                err.__cause__ = e
                errors.append(err)
            else:
                logging.debug(f"Env {var.name} set")

        if errors:
            env_errors = EnvErrors(errors)
            logging.warning(f"Environment has {len(errors)} problem(s): {env_errors}")
            raise env_errors
