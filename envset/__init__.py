"""
ABOUTME: Typed environment variable configuration with aggregated error reporting
ABOUTME: Provides value types, validation checks, variable sets and a process-wide default set
"""

from .cmd import (
    bind_addr,
    bool,
    cmd_name,
    cmd_var,
    declare,
    dial_addr,
    duration,
    float,
    int,
    parse,
    path,
    reset,
    string,
    string_list,
    string_required,
    visit,
)
from .exceptions import (
    ConfigError,
    DuplicateVariableError,
    EnvErrors,
    InvalidValueError,
    MissingVariableError,
    SetVariableError,
)
from .lookup import Lookup, MappingLookup, OSLookup
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
from .varset import Var, VarSet

__version__ = "0.1.0"

# int, float and bool are reachable as envset.int etc. but left out of
# __all__ so a star import does not shadow the builtins.
__all__ = [
    "VarSet",
    "Var",
    "Value",
    "StringValue",
    "IntValue",
    "FloatValue",
    "BoolValue",
    "DurationValue",
    "StringListValue",
    "CheckedValue",
    "Lookup",
    "OSLookup",
    "MappingLookup",
    "ConfigError",
    "InvalidValueError",
    "DuplicateVariableError",
    "MissingVariableError",
    "SetVariableError",
    "EnvErrors",
    "cmd_name",
    "cmd_var",
    "reset",
    "declare",
    "string",
    "string_required",
    "duration",
    "string_list",
    "bind_addr",
    "dial_addr",
    "path",
    "visit",
    "parse",
]
