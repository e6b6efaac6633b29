"""
ABOUTME: Custom exception classes for environment variable configuration
ABOUTME: Provides per-variable error types and the aggregate raised by a resolution pass
"""

from typing import Iterator, Optional, Sequence


class ConfigError(Exception):
    """Configuration validation error."""

    pass


class InvalidValueError(ConfigError, ValueError):
    """Text could not be parsed into, or failed validation for, a value."""

    pass


class DuplicateVariableError(ConfigError):
    """A variable with the same fully-qualified name is already declared."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"variable {name} already declared")


class MissingVariableError(ConfigError):
    """The lookup source has no entry for a declared variable."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing environment variable {name}")


class SetVariableError(ConfigError):
    """A declared variable was found but its value was rejected."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"could not set env {name}: {cause}")


class EnvErrors(ConfigError):
    """
    Every error recorded during one resolution pass, in encounter order.

    The message is a headline: the first error followed by a count of the
    rest, e.g. ``missing environment variable APP_PORT (and 2 other errors)``.
    ``None`` entries are tolerated and ignored when counting and rendering.
    """

    def __init__(self, errors: Sequence[Optional[Exception]]):
        self.errors = list(errors)
        super().__init__(self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return (e for e in self.errors if e is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __str__(self) -> str:
        present = list(self)
        n = len(present)
        if n == 0:
            return "(0 errors)"
        msg = str(present[0])
        if n == 1:
            return msg
        if n == 2:
            return f"{msg} (and 1 other error)"
        return f"{msg} (and {n - 1} other errors)"
