"""Interface shared by the shorthand and verbose constraint parsers."""

from typing import Any, List, Optional, Protocol, runtime_checkable

from ..schema import (LayoutAttribute, Relation, SignedConstant, SignedMultiplier,
                      SizeClass)


@runtime_checkable
class ConstraintParser(Protocol):
    """
    Interprets the raw payload of a constraint directive.

    Every accessor takes the raw `(lhs, rhs)` source and returns None when the
    field is absent or malformed. Numeric values that fail to parse are
    reported as warnings to the parser's diagnostics sink; `with_reporter`
    redirects them, so a resolution pass can collect its own diagnostics.
    """

    def left_attributes(self, source: Any) -> Optional[List[LayoutAttribute]]: ...

    def right_attribute(self, source: Any) -> Optional[LayoutAttribute]: ...

    def relation(self, source: Any) -> Optional[Relation]: ...

    def constant(self, source: Any) -> Optional[SignedConstant]: ...

    def multiplier(self, source: Any) -> Optional[SignedMultiplier]: ...

    def priority(self, source: Any) -> Optional[float]: ...

    def comparable_view_reference(self, source: Any) -> Optional[str]: ...

    def identifier(self, source: Any) -> Optional[str]: ...

    def horizontal_size_class(self, source: Any) -> Optional[SizeClass]: ...

    def vertical_size_class(self, source: Any) -> Optional[SizeClass]: ...

    def with_reporter(self, reporter: Any) -> "ConstraintParser":
        """Same parser, reporting to another diagnostics sink."""
        ...
