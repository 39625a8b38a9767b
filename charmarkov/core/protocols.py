# charmarkov/core/protocols.py
"""
Protocol interfaces for the collaborators LanguageModel depends on.

The model only needs a way to pull characters one at a time and a source of
uniform floats; anything with the right methods will do (the test suite
passes scripted fakes for both).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CharSource(Protocol):
    """A finite stream of characters read front to back."""

    def is_empty(self) -> bool:
        """True once no characters remain."""
        ...

    def read_char(self) -> str:
        """
        Return the next character. Calling it on an empty source raises
        EOFError.
        """
        ...


@runtime_checkable
class RandomSource(Protocol):
    """Uniform random floats, as provided by random.Random."""

    def random(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        ...
