"""Constants for constraint parsing: modifier characters, attribute keys and perspective sets."""

from typing import Dict, FrozenSet, List

from .schema import ConstantSign, LayoutAttribute, MultiplierSign, Relation, SizeClass

# Reference to the target's parent view
PARENT_REFERENCE: str = "super"

# Left-hand side attribute separators (e.g. "top left", "top:left", "top,left")
ATTRIBUTE_SEPARATORS: str = " :,"

# Separates a view reference from its right side attribute ("@header.bottom")
VIEW_ATTRIBUTE_SEPARATOR: str = "."

# Shorthand modifier characters (right-hand side)
MOD_TARGET_VIEW: str = "@"
MOD_POSITIVE_CONST: str = "+"
MOD_NEGATIVE_CONST: str = "-"
MOD_INSET_CONST: str = "<"
MOD_OFFSET_CONST: str = ">"
MOD_MULTIPLIER: str = "*"
MOD_DIVIDER: str = "/"
MOD_PRIORITY: str = "p"
MOD_IDENTIFIER: str = "#"
MOD_HORIZONTAL_SIZE_CLASS: str = "h"
MOD_VERTICAL_SIZE_CLASS: str = "v"

# Characters that start a new token even without whitespace ("@super<20*2")
SYMBOLIC_MODIFIERS: str = "@+-<>*/"

# Constant and multiplier modifiers, in the order they are tried
CONSTANT_MODIFIERS: Dict[str, ConstantSign] = {
    MOD_POSITIVE_CONST: ConstantSign.POSITIVE,
    MOD_NEGATIVE_CONST: ConstantSign.NEGATIVE,
    MOD_INSET_CONST: ConstantSign.INSET,
    MOD_OFFSET_CONST: ConstantSign.OFFSET,
}

MULTIPLIER_MODIFIERS: Dict[str, MultiplierSign] = {
    MOD_MULTIPLIER: MultiplierSign.MULTIPLY,
    MOD_DIVIDER: MultiplierSign.DIVIDE,
}

# Relation tokens (shorthand) and names (verbose)
RELATION_KEYS: Dict[str, Relation] = {
    "==": Relation.EQUAL,
    ">=": Relation.GREATER_OR_EQUAL,
    "<=": Relation.LESS_OR_EQUAL,
    "equal": Relation.EQUAL,
    "gte": Relation.GREATER_OR_EQUAL,
    "lte": Relation.LESS_OR_EQUAL,
}

SIZE_CLASS_KEYS: Dict[str, SizeClass] = {
    "c": SizeClass.COMPACT,
    "compact": SizeClass.COMPACT,
    "r": SizeClass.REGULAR,
    "regular": SizeClass.REGULAR,
    "any": SizeClass.UNSPECIFIED,
}

ATTRIBUTE_KEYS: Dict[str, LayoutAttribute] = {
    "leading": LayoutAttribute.LEADING,
    "left": LayoutAttribute.LEADING,
    "trailing": LayoutAttribute.TRAILING,
    "right": LayoutAttribute.TRAILING,
    "top": LayoutAttribute.TOP,
    "bottom": LayoutAttribute.BOTTOM,
    "width": LayoutAttribute.WIDTH,
    "height": LayoutAttribute.HEIGHT,
    "centerX": LayoutAttribute.CENTER_X,
    "centerY": LayoutAttribute.CENTER_Y,
    "firstBaseline": LayoutAttribute.FIRST_BASELINE,
    "lastBaseline": LayoutAttribute.LAST_BASELINE,
    "leadingMargin": LayoutAttribute.LEADING_MARGIN,
    "leftMargin": LayoutAttribute.LEADING_MARGIN,
    "trailingMargin": LayoutAttribute.TRAILING_MARGIN,
    "rightMargin": LayoutAttribute.TRAILING_MARGIN,
    "topMargin": LayoutAttribute.TOP_MARGIN,
    "bottomMargin": LayoutAttribute.BOTTOM_MARGIN,
    "centerXWithinMargins": LayoutAttribute.CENTER_X_WITHIN_MARGINS,
    "centerYWithinMargins": LayoutAttribute.CENTER_Y_WITHIN_MARGINS,
}

COMPOUND_ATTRIBUTE_KEYS: Dict[str, List[LayoutAttribute]] = {
    "edges": [LayoutAttribute.LEADING, LayoutAttribute.TOP,
              LayoutAttribute.TRAILING, LayoutAttribute.BOTTOM],
    "center": [LayoutAttribute.CENTER_X, LayoutAttribute.CENTER_Y],
    "size": [LayoutAttribute.WIDTH, LayoutAttribute.HEIGHT],
    "margins": [LayoutAttribute.LEADING_MARGIN, LayoutAttribute.TOP_MARGIN,
                LayoutAttribute.TRAILING_MARGIN, LayoutAttribute.BOTTOM_MARGIN],
}

# Size attributes: constrained against a constant unless a view is given
INDEPENDENT_ATTRIBUTES: FrozenSet[LayoutAttribute] = frozenset({
    LayoutAttribute.WIDTH, LayoutAttribute.HEIGHT,
})

# An `inset` constant is negated for these attributes
PERSPECTIVE_INSET_ATTRIBUTES: FrozenSet[LayoutAttribute] = frozenset({
    LayoutAttribute.TRAILING, LayoutAttribute.BOTTOM,
    LayoutAttribute.WIDTH, LayoutAttribute.HEIGHT,
    LayoutAttribute.TRAILING_MARGIN,
})

# An `offset` constant is negated for these attributes
PERSPECTIVE_OFFSET_ATTRIBUTES: FrozenSet[LayoutAttribute] = frozenset({
    LayoutAttribute.LEADING, LayoutAttribute.TOP,
    LayoutAttribute.WIDTH, LayoutAttribute.HEIGHT,
})

# Priority bounds
MIN_PRIORITY: float = 0.0
MAX_PRIORITY: float = 1000.0

# View description keys
KEY_CONSTRAINTS: str = "constraints"
KEY_PROPERTIES: str = "properties"
KEY_SUBVIEWS: str = "views"
KEY_Z_INDEX: str = "z-index"
KEY_TEMPLATE: str = "template"

# View id modifiers ("!avatar:UIImageView")
MOD_NEW_ELEMENT: str = "!"
MOD_SUPERCLASS: str = ":"
