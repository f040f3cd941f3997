"""Registration and parsing of command-line options."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence


class CommandLine:
    """Maps option names to callbacks that receive the option's value."""

    def __init__(self) -> None:
        self._options: dict[str, Callable[[str], None]] = {}

    def register_option(self, key: str, callback: Callable[[str], None]) -> None:
        """Register a callback; an option already registered keeps its first callback."""
        self._options.setdefault(key, callback)

    def parse(self, args: Sequence[str]) -> None:
        """Parse ``args`` (program name first), calling callbacks with each option's value.

        Unknown options are reported on stderr and skipped. A known option
        with no value after it raises ValueError.
        """
        remaining = iter(args[1:])
        for arg in remaining:
            callback = self._options.get(arg)
            if callback is None:
                print(f'Option "{arg}" inconnue', file=sys.stderr)
                continue
            value = next(remaining, None)
            if value is None:
                raise ValueError(f"option {arg!r} expects a value")
            callback(value)