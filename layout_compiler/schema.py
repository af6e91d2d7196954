"""Data structures for constraint directives and resolved constraint specifications."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .hierarchy import View
    from .parsers.base import ConstraintParser


class LayoutAttribute(Enum):
    """Geometric edge, dimension or center of a view."""
    NONE = "none"
    LEADING = "leading"
    TRAILING = "trailing"
    TOP = "top"
    BOTTOM = "bottom"
    WIDTH = "width"
    HEIGHT = "height"
    CENTER_X = "centerX"
    CENTER_Y = "centerY"
    FIRST_BASELINE = "firstBaseline"
    LAST_BASELINE = "lastBaseline"
    LEADING_MARGIN = "leadingMargin"
    TRAILING_MARGIN = "trailingMargin"
    TOP_MARGIN = "topMargin"
    BOTTOM_MARGIN = "bottomMargin"
    CENTER_X_WITHIN_MARGINS = "centerXWithinMargins"
    CENTER_Y_WITHIN_MARGINS = "centerYWithinMargins"


class Relation(Enum):
    EQUAL = "equal"
    GREATER_OR_EQUAL = "greaterOrEqual"
    LESS_OR_EQUAL = "lessOrEqual"


class ConstantSign(Enum):
    """
    Sign qualifier of a constant.

    `inset` and `offset` are directional: whether they flip the magnitude
    depends on the attribute being constrained.
    """
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INSET = "inset"
    OFFSET = "offset"


class MultiplierSign(Enum):
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class SizeClass(Enum):
    UNSPECIFIED = "unspecified"
    COMPACT = "compact"
    REGULAR = "regular"


@dataclass(frozen=True)
class SignedConstant:
    """Constant magnitude plus its sign qualifier."""
    value: float
    sign: ConstantSign = ConstantSign.POSITIVE

    def to_dict(self) -> dict:
        return {"value": self.value, "sign": self.sign.value}


@dataclass(frozen=True)
class SignedMultiplier:
    """Multiplier magnitude plus multiply/divide sign."""
    value: float
    sign: MultiplierSign = MultiplierSign.MULTIPLY

    def __post_init__(self):
        if self.sign == MultiplierSign.DIVIDE and self.value == 0:
            raise ValueError("Cannot divide by a zero multiplier")

    def to_dict(self) -> dict:
        return {"value": self.value, "sign": self.sign.value}


@dataclass(frozen=True)
class SizeClassCondition:
    """Horizontal/vertical size classes a constraint is gated on."""
    horizontal: SizeClass = SizeClass.UNSPECIFIED
    vertical: SizeClass = SizeClass.UNSPECIFIED

    def matches(self, environment: "SizeClassCondition") -> bool:
        """True if this condition admits the given environment (unspecified is a wildcard)."""
        return (_size_class_matches(self.horizontal, environment.horizontal) and
                _size_class_matches(self.vertical, environment.vertical))

    def to_dict(self) -> dict:
        return {"horizontal": self.horizontal.value, "vertical": self.vertical.value}


def _size_class_matches(required: SizeClass, current: SizeClass) -> bool:
    if required == SizeClass.UNSPECIFIED or current == SizeClass.UNSPECIFIED:
        return True
    return required == current


@dataclass(frozen=True)
class ConstraintDirective:
    """
    One raw entry of a constraints block.

    The payload is parser specific: `rhs` is a string for shorthand
    directives and a field mapping for verbose ones.
    """
    lhs: str
    rhs: Any
    parser: "ConstraintParser" = field(compare=False, repr=False)

    @property
    def source(self) -> tuple:
        return (self.lhs, self.rhs)


@dataclass
class ResolvedConstraintSpec:
    """Fully resolved constraint, ready for the emitter. All sign handling is already applied."""
    target: "View"
    left_attribute: LayoutAttribute
    relation: Relation
    comparable_view: Optional["View"]
    right_attribute: Optional[LayoutAttribute]
    constant: float
    multiplier: float
    priority: Optional[float] = None
    identifier: Optional[str] = None
    size_classes: SizeClassCondition = field(default_factory=SizeClassCondition)

    @property
    def effective_right_attribute(self) -> LayoutAttribute:
        """Right attribute as the emitter uses it: mirrors the left attribute when absent."""
        if self.right_attribute is None:
            return self.left_attribute
        return self.right_attribute

    def to_dict(self) -> dict:
        result = {
            "target": self.target.name,
            "left_attribute": self.left_attribute.value,
            "relation": self.relation.value,
            "comparable_view": self.comparable_view.name if self.comparable_view is not None else None,
            "right_attribute": self.effective_right_attribute.value,
            "constant": self.constant,
            "multiplier": self.multiplier,
            "size_classes": self.size_classes.to_dict(),
        }
        if self.priority is not None:
            result["priority"] = self.priority
        if self.identifier is not None:
            result["identifier"] = self.identifier
        return result


@dataclass(frozen=True)
class Diagnostic:
    """Structured warning or error raised while parsing or resolving a layout."""
    level: str  # "warning" or "error"
    message: str
    identifier: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"level": self.level, "message": self.message}
        if self.identifier is not None:
            result["identifier"] = self.identifier
        return result


@dataclass
class Layout:
    """Result of compiling one layout description."""
    constraints: List[ResolvedConstraintSpec] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def for_view(self, name: str) -> List[ResolvedConstraintSpec]:
        return [c for c in self.constraints if c.target.name == name]

    def to_dict(self) -> dict:
        return {
            "constraints": [c.to_dict() for c in self.constraints],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
