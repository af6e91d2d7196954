"""
Constraint resolution context: attribute-aware sign normalization.

Core idea: a directive's raw constant and multiplier carry a sign qualifier
whose effect depends on the attribute being constrained. The context is
built per left attribute and computes the final numeric values.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import (INDEPENDENT_ATTRIBUTES, PERSPECTIVE_INSET_ATTRIBUTES,
                        PERSPECTIVE_OFFSET_ATTRIBUTES)
from .hierarchy import View
from .schema import (ConstantSign, LayoutAttribute, MultiplierSign, Relation,
                     SignedConstant, SignedMultiplier)


@dataclass(frozen=True)
class ConstraintContext:
    """
    Resolves one (target, left attribute) pair. Pure, no I/O.

    Rules:
        - Width/height without an explicit comparable view are constrained
          against a constant: right attribute none, no comparable view.
        - Any other attribute without a comparable view compares to the
          target's parent.
        - inset flips the constant for trailing/bottom-like attributes,
          offset for leading/top-like ones, negative always.
        - divide replaces the multiplier with its reciprocal.
    """
    target: View
    left_attribute: LayoutAttribute
    relation: Relation
    raw_comparable_view: Optional[View]
    raw_right_attribute: Optional[LayoutAttribute]
    raw_constant: SignedConstant
    raw_multiplier: SignedMultiplier
    independent_ignores_explicit_view: bool = False

    @property
    def is_independent(self) -> bool:
        return self.left_attribute in INDEPENDENT_ATTRIBUTES

    @property
    def _forces_constant_size(self) -> bool:
        if not self.is_independent:
            return False
        return self.raw_comparable_view is None or self.independent_ignores_explicit_view

    @property
    def right_attribute(self) -> Optional[LayoutAttribute]:
        if self._forces_constant_size:
            return LayoutAttribute.NONE
        return self.raw_right_attribute

    @property
    def comparable_view(self) -> Optional[View]:
        if self._forces_constant_size:
            return None
        if self.raw_comparable_view is None and self.right_attribute != LayoutAttribute.NONE:
            return self.target.parent
        return self.raw_comparable_view

    @property
    def constant(self) -> float:
        sign = self.raw_constant.sign
        value = self.raw_constant.value

        if ((sign == ConstantSign.INSET and self.left_attribute in PERSPECTIVE_INSET_ATTRIBUTES) or
                (sign == ConstantSign.OFFSET and self.left_attribute in PERSPECTIVE_OFFSET_ATTRIBUTES) or
                sign == ConstantSign.NEGATIVE):
            value = -value

        return value

    @property
    def multiplier(self) -> float:
        value = self.raw_multiplier.value
        if self.raw_multiplier.sign == MultiplierSign.DIVIDE:
            value = 1 / value
        return value
