"""
Verbose constraint parser.

Directives are (lhs, fields) pairs where fields is a mapping:

    "top": {
        "to": "header.bottom",
        "relation": ">=",
        "constant": {"value": 8, "sign": "inset"},
        "multiplier": {"value": 2, "sign": "divide"},
        "priority": 750,
        "identifier": "below-header",
        "horizontalSizeClass": "compact"
    }

A bare number is accepted for constant and multiplier; a negative constant
number means sign `negative`.
"""

from typing import Any, List, Mapping, Optional, Tuple

from ..constants import ATTRIBUTE_KEYS, RELATION_KEYS, SIZE_CLASS_KEYS
from ..reporting import Reporter, warning
from ..schema import (ConstantSign, LayoutAttribute, MultiplierSign, Relation,
                      SignedConstant, SignedMultiplier, SizeClass)
from .values import ValueParser

KEY_TO = "to"
KEY_ATTRIBUTE = "attribute"
KEY_RELATION = "relation"
KEY_CONSTANT = "constant"
KEY_MULTIPLIER = "multiplier"
KEY_PRIORITY = "priority"
KEY_IDENTIFIER = "identifier"
KEY_HORIZONTAL_SIZE_CLASS = "horizontalSizeClass"
KEY_VERTICAL_SIZE_CLASS = "verticalSizeClass"
KEY_VALUE = "value"
KEY_SIGN = "sign"


class VerboseConstraintParser:
    """Reads constraint fields from named keys instead of modifier characters."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def with_reporter(self, reporter: Reporter) -> "VerboseConstraintParser":
        return VerboseConstraintParser(reporter)

    def _parse_source(self, source: Any) -> Optional[Tuple[str, Mapping]]:
        if (not isinstance(source, tuple) or len(source) != 2 or
                not isinstance(source[0], str) or not isinstance(source[1], Mapping)):
            return None
        return source

    def _field(self, key: str, source: Any) -> Any:
        parsed = self._parse_source(source)
        if parsed is None:
            return None
        return parsed[1].get(key)

    def _signed_value(self, key: str, source: Any) -> Optional[Tuple[float, Optional[str]]]:
        """(magnitude, sign name) from a bare number or a {"value", "sign"} mapping."""
        raw = self._field(key, source)
        if raw is None:
            return None
        if isinstance(raw, Mapping):
            if KEY_VALUE not in raw:
                return None
            value = ValueParser.number(raw[KEY_VALUE], key, self.reporter)
            if value is None:
                return None
            sign = raw.get(KEY_SIGN)
            return value, (sign if isinstance(sign, str) else None)
        value = ValueParser.number(raw, key, self.reporter)
        if value is None:
            return None
        return value, None

    def left_attributes(self, source: Any) -> Optional[List[LayoutAttribute]]:
        parsed = self._parse_source(source)
        if parsed is None:
            return None
        return ValueParser.attributes(parsed[0])

    def right_attribute(self, source: Any) -> Optional[LayoutAttribute]:
        attribute = self._field(KEY_ATTRIBUTE, source)
        if attribute is None:
            reference = ValueParser.view_reference(self._field(KEY_TO, source))
            if reference is None:
                return None
            attribute = reference[1]
        if not isinstance(attribute, str):
            return None
        return ATTRIBUTE_KEYS.get(attribute)

    def comparable_view_reference(self, source: Any) -> Optional[str]:
        reference = ValueParser.view_reference(self._field(KEY_TO, source))
        if reference is None:
            return None
        return reference[0]

    def relation(self, source: Any) -> Optional[Relation]:
        relation = self._field(KEY_RELATION, source)
        if not isinstance(relation, str):
            return None
        return RELATION_KEYS.get(relation)

    def constant(self, source: Any) -> Optional[SignedConstant]:
        found = self._signed_value(KEY_CONSTANT, source)
        if found is None:
            return None

        value, sign_name = found
        if sign_name is None:
            if value < 0:
                return SignedConstant(-value, ConstantSign.NEGATIVE)
            return SignedConstant(value, ConstantSign.POSITIVE)
        try:
            return SignedConstant(value, ConstantSign(sign_name))
        except ValueError:
            return None

    def multiplier(self, source: Any) -> Optional[SignedMultiplier]:
        found = self._signed_value(KEY_MULTIPLIER, source)
        if found is None:
            return None

        value, sign_name = found
        try:
            sign = MultiplierSign(sign_name) if sign_name is not None else MultiplierSign.MULTIPLY
        except ValueError:
            return None
        try:
            return SignedMultiplier(value, sign)
        except ValueError as e:
            warning(self.reporter, f"Invalid value for multiplier: {e}")
            return None

    def priority(self, source: Any) -> Optional[float]:
        raw = self._field(KEY_PRIORITY, source)
        if raw is None:
            return None
        return ValueParser.priority(raw, self.reporter)

    def identifier(self, source: Any) -> Optional[str]:
        value = self._field(KEY_IDENTIFIER, source)
        if not isinstance(value, str) or not value:
            return None
        return value

    def horizontal_size_class(self, source: Any) -> Optional[SizeClass]:
        return self._size_class(KEY_HORIZONTAL_SIZE_CLASS, source)

    def vertical_size_class(self, source: Any) -> Optional[SizeClass]:
        return self._size_class(KEY_VERTICAL_SIZE_CLASS, source)

    def _size_class(self, key: str, source: Any) -> Optional[SizeClass]:
        value = self._field(key, source)
        if not isinstance(value, str):
            return None
        return SIZE_CLASS_KEYS.get(value)
