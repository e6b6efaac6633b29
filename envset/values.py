"""
ABOUTME: Value types that store a variable's state and parse it from text
ABOUTME: Provides string, int, float, bool, duration and list values plus a validating wrapper
"""

import json
import math
import re
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, List, Optional

from .exceptions import InvalidValueError

INT64_MAX = (1 << 63) - 1
INT64_MIN = -(1 << 63)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _syntax_error(text: str) -> InvalidValueError:
    return InvalidValueError(f"parsing {_quote(text)}: invalid syntax")


def _range_error(text: str) -> InvalidValueError:
    return InvalidValueError(f"parsing {_quote(text)}: value out of range")


class Value(ABC):
    """
    A variable's storage cell.

    The current state lives in ``.value``. Factories hand this object back to
    the caller, so after a resolution pass the caller reads ``handle.value``
    directly rather than going through the registry.
    """

    value: Any

    @abstractmethod
    def render(self) -> str:
        """Return the textual representation of the current state."""
        pass

    @abstractmethod
    def parse(self, text: str) -> None:
        """
        Overwrite the current state from text.

        Raises:
            InvalidValueError: If text is not a valid representation.
        """
        pass

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class StringValue(Value):
    """Plain text; parsing never fails."""

    def __init__(self, value: str = ""):
        self.value = value

    def render(self) -> str:
        return self.value

    def parse(self, text: str) -> None:
        self.value = text


class IntValue(Value):
    """Signed 64-bit decimal integer."""

    def __init__(self, value: int = 0):
        self.value = value

    def render(self) -> str:
        return str(self.value)

    def parse(self, text: str) -> None:
        # State is overwritten before an error is raised: 0 for bad syntax,
        # the nearest bound for out-of-range input.
        if not _INT_RE.fullmatch(text):
            self.value = 0
            raise _syntax_error(text)
        # int64 has at most 19 digits; longer input is out of range without
        # converting it.
        digits = text.lstrip("+-").lstrip("0") or "0"
        if len(digits) > 19:
            self.value = INT64_MIN if text.startswith("-") else INT64_MAX
            raise _range_error(text)
        n = -int(digits) if text.startswith("-") else int(digits)
        if n > INT64_MAX or n < INT64_MIN:
            self.value = INT64_MAX if n > 0 else INT64_MIN
            raise _range_error(text)
        self.value = n


class FloatValue(Value):
    """Decimal or exponent-notation floating point number."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def render(self) -> str:
        return repr(self.value)

    def parse(self, text: str) -> None:
        if not _FLOAT_RE.fullmatch(text):
            self.value = 0.0
            raise _syntax_error(text)
        x = float(text)
        self.value = x
        if math.isinf(x) and "inf" not in text.lower():
            raise _range_error(text)


class BoolValue(Value):
    """Boolean accepting 1/0, t/f and true/false spellings."""

    def __init__(self, value: bool = False):
        self.value = value

    def render(self) -> str:
        return "true" if self.value else "false"

    def parse(self, text: str) -> None:
        if text in _TRUE:
            self.value = True
        elif text in _FALSE:
            self.value = False
        else:
            self.value = False
            raise _syntax_error(text)


_NS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a compound duration such as ``1h30m``, ``1.5s`` or ``-250ms``.

    Valid units are ns, us (or µs), ms, s, m and h. The result is truncated to
    microsecond precision.

    Raises:
        InvalidValueError: If text is not a valid duration.
    """
    s = text
    neg = False
    if s and s[0] in "+-":
        neg = s[0] == "-"
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise InvalidValueError(f"time: invalid duration {_quote(text)}")

    total = 0
    pos = 0
    while pos < len(s):
        m = _COMPONENT_RE.match(s, pos)
        whole, frac, unit = m.group(1), m.group(2), m.group(3)
        if not whole and not frac:
            raise InvalidValueError(f"time: invalid duration {_quote(text)}")
        if not unit:
            raise InvalidValueError(f"time: missing unit in duration {_quote(text)}")
        scale = _NS_PER_UNIT.get(unit)
        if scale is None:
            raise InvalidValueError(
                f"time: unknown unit {_quote(unit)} in duration {_quote(text)}"
            )
        whole = whole.lstrip("0") or "0"
        if len(whole) > 19:
            raise InvalidValueError(f"time: invalid duration {_quote(text)}")
        total += int(whole) * scale
        # Digits past the 18th are below nanosecond precision for every unit.
        frac = (frac or "")[:18]
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = m.end()

    limit = 1 << 63 if neg else (1 << 63) - 1
    if total > limit:
        raise InvalidValueError(f"time: invalid duration {_quote(text)}")
    micros = total // 1_000
    return timedelta(microseconds=-micros if neg else micros)


def _fraction(n: int, unit: int) -> str:
    whole, rest = divmod(n, unit)
    digits = str(rest).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(d: timedelta) -> str:
    """Render d in the compound form accepted by parse_duration, e.g. ``1h30m0s``."""
    usec = d // timedelta(microseconds=1)
    if usec == 0:
        return "0s"
    sign = "-" if usec < 0 else ""
    usec = abs(usec)
    if usec < 1_000:
        return f"{sign}{usec}µs"
    if usec < 1_000_000:
        return f"{sign}{_fraction(usec, 1_000)}ms"
    secs, rest = divmod(usec, 1_000_000)
    hours, secs = divmod(secs, 3600)
    minutes, secs = divmod(secs, 60)
    out = _fraction(secs * 1_000_000 + rest, 1_000_000) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{out}"
    if minutes:
        return f"{sign}{minutes}m{out}"
    return sign + out


class DurationValue(Value):
    """Signed time span stored as a ``datetime.timedelta``."""

    def __init__(self, value: Optional[timedelta] = None):
        self.value = value if value is not None else timedelta(0)

    def render(self) -> str:
        return format_duration(self.value)

    def parse(self, text: str) -> None:
        try:
            self.value = parse_duration(text)
        except InvalidValueError:
            self.value = timedelta(0)
            raise


class StringListValue(Value):
    """Comma-separated list of strings; blank items are dropped."""

    def __init__(self, value: Optional[List[str]] = None):
        self.value = list(value) if value is not None else []

    def render(self) -> str:
        return ",".join(self.value)

    def parse(self, text: str) -> None:
        self.value = [item.strip() for item in text.split(",") if item.strip()]


Check = Callable[[str], None]


class CheckedValue(Value):
    """
    Wraps another value with a check run on the raw text before parsing.

    A failing check leaves the wrapped value untouched. A passing check hands
    the text to the wrapped value, whose own outcome is the result.
    """

    def __init__(self, check: Check, wrapped: Value):
        self.check = check
        self.wrapped = wrapped

    @property
    def value(self) -> Any:
        return self.wrapped.value

    def render(self) -> str:
        return self.wrapped.render()

    def parse(self, text: str) -> None:
        self.check(text)
        self.wrapped.parse(text)

    def __repr__(self) -> str:
        return f"CheckedValue({getattr(self.check, '__name__', self.check)}, {self.wrapped!r})"
