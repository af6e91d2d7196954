"""Constraint directive parsers (shorthand and verbose notations)."""

from typing import Any, Mapping, Optional

from ..reporting import Reporter, error
from ..schema import ConstraintDirective
from .base import ConstraintParser
from .shorthand import ShorthandConstraintParser
from .verbose import VerboseConstraintParser


def make_directive(lhs: Any, rhs: Any, reporter: Reporter) -> Optional[ConstraintDirective]:
    """
    Wrap one raw constraint entry, choosing the parser from the payload shape.

    A string rhs is shorthand, a mapping is verbose. Any other shape is
    reported and contributes nothing.
    """
    if not isinstance(lhs, str):
        error(reporter, f"Constraint source in unrecognized format: key {lhs!r}")
        return None
    if isinstance(rhs, str):
        return ConstraintDirective(lhs, rhs, ShorthandConstraintParser(reporter))
    if isinstance(rhs, Mapping):
        return ConstraintDirective(lhs, rhs, VerboseConstraintParser(reporter))

    error(reporter, f"Constraint source in unrecognized format: {lhs!r}: {rhs!r}")
    return None


__all__ = [
    "ConstraintParser",
    "ShorthandConstraintParser",
    "VerboseConstraintParser",
    "make_directive",
]
