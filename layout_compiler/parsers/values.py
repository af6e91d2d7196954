"""Value parsing shared by the constraint parsers."""

import math
from typing import Any, List, Optional, Tuple

from ..constants import (ATTRIBUTE_KEYS, ATTRIBUTE_SEPARATORS, COMPOUND_ATTRIBUTE_KEYS,
                         MAX_PRIORITY, MIN_PRIORITY, VIEW_ATTRIBUTE_SEPARATOR)
from ..reporting import Reporter, warning
from ..schema import LayoutAttribute


class ValueParser:
    """Utility class for turning raw directive fragments into typed values."""

    @staticmethod
    def number(value: Any, field: str, reporter: Reporter) -> Optional[float]:
        """
        Parse a finite number from an int, float or numeric string.

        Args:
            value: Raw value
            field: Field name used in the warning message
            reporter: Diagnostics sink

        Returns:
            Parsed float, or None (with a warning) if the value is not numeric
        """
        if isinstance(value, bool):
            parsed = None
        elif isinstance(value, (int, float)):
            parsed = float(value)
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                parsed = None
        else:
            parsed = None

        if parsed is None or not math.isfinite(parsed):
            warning(reporter, f"Invalid value for {field}: {value!r}")
            return None
        return parsed

    @staticmethod
    def priority(value: Any, reporter: Reporter) -> Optional[float]:
        """Parse a priority, rejecting values outside 0-1000."""
        parsed = ValueParser.number(value, "priority", reporter)
        if parsed is None:
            return None
        if not MIN_PRIORITY <= parsed <= MAX_PRIORITY:
            warning(reporter, f"Priority {parsed:g} out of range "
                              f"({MIN_PRIORITY:g}-{MAX_PRIORITY:g})")
            return None
        return parsed

    @staticmethod
    def attributes(lhs: Any) -> Optional[List[LayoutAttribute]]:
        """
        Parse the left-hand side attribute list.

        Unknown names are dropped; compound aliases ("edges") expand to
        all their members.
        """
        if not isinstance(lhs, str):
            return None

        attrs: List[LayoutAttribute] = []
        for name in _split(lhs, ATTRIBUTE_SEPARATORS):
            if name in ATTRIBUTE_KEYS:
                attrs.append(ATTRIBUTE_KEYS[name])
            elif name in COMPOUND_ATTRIBUTE_KEYS:
                attrs.extend(COMPOUND_ATTRIBUTE_KEYS[name])
        return attrs

    @staticmethod
    def view_reference(reference: Any) -> Optional[Tuple[str, Optional[str]]]:
        """Split "view.attr" into (view, attr); attr is None when absent."""
        if not isinstance(reference, str) or not reference:
            return None
        name, sep, attr = reference.partition(VIEW_ATTRIBUTE_SEPARATOR)
        if not name:
            return None
        return name, (attr if sep else None)


def _split(text: str, separators: str) -> List[str]:
    for sep in separators[1:]:
        text = text.replace(sep, separators[0])
    return [part for part in text.split(separators[0]) if part]
