"""
Shorthand constraint parser.

Directives are (lhs, rhs) string pairs:

    "top left right bottom": "@super <12"
    "width": ">50 p750 #min-width"
    "top": "@header.bottom +8 hc"
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from ..constants import (CONSTANT_MODIFIERS, MOD_HORIZONTAL_SIZE_CLASS, MOD_IDENTIFIER,
                         MOD_PRIORITY, MOD_TARGET_VIEW, MOD_VERTICAL_SIZE_CLASS,
                         MULTIPLIER_MODIFIERS, RELATION_KEYS, ATTRIBUTE_KEYS, SIZE_CLASS_KEYS)
from ..reporting import Reporter, warning
from ..schema import (LayoutAttribute, Relation, SignedConstant, SignedMultiplier,
                      SizeClass)
from .values import ValueParser

# A token starts at whitespace or at a symbolic modifier; identifiers run to the next space
_TOKEN_PATTERN = re.compile(r"""
      \#\S*
    | [<>=]=
    | [@+\-<>*/][^\s@+\-<>*/\#]*
    | [^\s@+\-<>*/\#]+
""", re.VERBOSE)

_RELATION_TOKEN = "relation"

# A view reference running straight into "-word": a hyphenated name, not a constant
_SPLIT_REFERENCE_PATTERN = re.compile(r"@([^\s@+\-<>*/\#]+)(-[A-Za-z_][^\s@+<>*/\#]*)")


class ShorthandConstraintParser:
    """Parses packed modifier tokens from the right-hand side of a directive."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def with_reporter(self, reporter: Reporter) -> "ShorthandConstraintParser":
        return ShorthandConstraintParser(reporter)

    def _parse_source(self, source: Any) -> Optional[Tuple[str, str]]:
        if (not isinstance(source, tuple) or len(source) != 2 or
                not all(isinstance(part, str) for part in source)):
            return None
        return source

    def _arguments(self, rhs: str) -> List[Tuple[str, str]]:
        """Split the rhs into (modifier, value) pairs, in order of appearance."""
        arguments = []
        for token in _TOKEN_PATTERN.findall(rhs):
            if token in RELATION_KEYS:
                arguments.append((_RELATION_TOKEN, token))
            else:
                arguments.append((token[0], token[1:]))
        return arguments

    def _value_for(self, mod: str, source: Any) -> Optional[str]:
        """Value of the first argument with the given modifier."""
        parsed = self._parse_source(source)
        if parsed is None:
            return None
        for arg_mod, value in self._arguments(parsed[1]):
            if arg_mod == mod:
                return value
        return None

    def _value_for_any(self, mods: Dict[str, Any], source: Any) -> Optional[Tuple[str, str]]:
        """First value found when several modifiers are candidates, tried in order."""
        for mod in mods:
            value = self._value_for(mod, source)
            if value is not None:
                return mod, value
        return None

    def left_attributes(self, source: Any) -> Optional[List[LayoutAttribute]]:
        parsed = self._parse_source(source)
        if parsed is None:
            return None
        return ValueParser.attributes(parsed[0])

    def right_attribute(self, source: Any) -> Optional[LayoutAttribute]:
        reference = ValueParser.view_reference(self._value_for(MOD_TARGET_VIEW, source))
        if reference is None or reference[1] is None:
            return None
        return ATTRIBUTE_KEYS.get(reference[1])

    def comparable_view_reference(self, source: Any) -> Optional[str]:
        reference = ValueParser.view_reference(self._value_for(MOD_TARGET_VIEW, source))
        if reference is None:
            return None
        split = _SPLIT_REFERENCE_PATTERN.search(source[1])
        if split is not None:
            warning(self.reporter, f"View reference '@{split.group(1)}' is followed by "
                                   f"'{split.group(2)}'; view names cannot contain modifier "
                                   f"characters (@ + - < > * /)")
        return reference[0]

    def relation(self, source: Any) -> Optional[Relation]:
        token = self._value_for(_RELATION_TOKEN, source)
        if token is None:
            return None
        return RELATION_KEYS.get(token)

    def constant(self, source: Any) -> Optional[SignedConstant]:
        found = self._value_for_any(CONSTANT_MODIFIERS, source)
        if found is None:
            return None

        mod, raw = found
        value = ValueParser.number(raw, "constant", self.reporter)
        if value is None:
            return None
        return SignedConstant(value, CONSTANT_MODIFIERS[mod])

    def multiplier(self, source: Any) -> Optional[SignedMultiplier]:
        found = self._value_for_any(MULTIPLIER_MODIFIERS, source)
        if found is None:
            return None

        mod, raw = found
        value = ValueParser.number(raw, "multiplier", self.reporter)
        if value is None:
            return None
        try:
            return SignedMultiplier(value, MULTIPLIER_MODIFIERS[mod])
        except ValueError as e:
            warning(self.reporter, f"Invalid value for multiplier: {e}")
            return None

    def priority(self, source: Any) -> Optional[float]:
        raw = self._value_for(MOD_PRIORITY, source)
        if raw is None:
            return None
        return ValueParser.priority(raw, self.reporter)

    def identifier(self, source: Any) -> Optional[str]:
        value = self._value_for(MOD_IDENTIFIER, source)
        return value or None

    def horizontal_size_class(self, source: Any) -> Optional[SizeClass]:
        value = self._value_for(MOD_HORIZONTAL_SIZE_CLASS, source)
        if value is None:
            return None
        return SIZE_CLASS_KEYS.get(value)

    def vertical_size_class(self, source: Any) -> Optional[SizeClass]:
        value = self._value_for(MOD_VERTICAL_SIZE_CLASS, source)
        if value is None:
            return None
        return SIZE_CLASS_KEYS.get(value)
