"""
ABOUTME: Key-value lookup sources that variables are resolved from
ABOUTME: Adapts the process environment or any in-memory mapping to a single get() contract
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Optional, Union


class Lookup(ABC):
    """Source of raw variable text, keyed by fully-qualified variable name."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Retrieve the text stored under key.

        Returns:
            Optional[str]: The text, or None when the key is absent. An empty
            string is a present value.
        """
        pass


class OSLookup(Lookup):
    """Lookup against the host process's environment."""

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(key)


class MappingLookup(Lookup):
    """Lookup against an in-memory mapping, e.g. a dict built in a test."""

    def __init__(self, mapping: Mapping[str, str]):
        self.mapping = mapping

    def get(self, key: str) -> Optional[str]:
        return self.mapping.get(key)


def as_lookup(source: Union[Lookup, Mapping[str, str], None]) -> Lookup:
    """Coerce source into a Lookup; None means the process environment."""
    if source is None:
        return OSLookup()
    if isinstance(source, Lookup):
        return source
    if isinstance(source, Mapping):
        return MappingLookup(source)
    raise TypeError(f"unsupported lookup source: {type(source).__name__}")
