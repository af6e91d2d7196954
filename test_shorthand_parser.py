"""Tests for the shorthand directive parser.

Tests cover:
- Left-hand attribute lists, aliases and compound keys
- Each right-hand modifier class
- First-token-wins for duplicated modifiers
- Tolerance to malformed sources and unparseable numbers
"""

import pytest

from layout_compiler import (CollectingReporter, ConstantSign, LayoutAttribute, MultiplierSign,
                             Relation, ShorthandConstraintParser, SignedConstant,
                             SignedMultiplier, SizeClass)


@pytest.fixture
def parser(reporter):
    return ShorthandConstraintParser(reporter)


class TestLeftAttributes:

    @pytest.mark.parametrize("lhs", ["top left right bottom", "top:left:right:bottom",
                                     "top,left,right,bottom"])
    def test_separators(self, parser, lhs):
        assert parser.left_attributes((lhs, "")) == [
            LayoutAttribute.TOP, LayoutAttribute.LEADING,
            LayoutAttribute.TRAILING, LayoutAttribute.BOTTOM,
        ]

    def test_edges_alias_expands_to_four_members(self, parser):
        assert parser.left_attributes(("edges", "@super")) == [
            LayoutAttribute.LEADING, LayoutAttribute.TOP,
            LayoutAttribute.TRAILING, LayoutAttribute.BOTTOM,
        ]

    def test_unknown_attributes_dropped(self, parser, reporter):
        assert parser.left_attributes(("top banana width", "")) == [
            LayoutAttribute.TOP, LayoutAttribute.WIDTH,
        ]
        assert reporter.diagnostics == []

    def test_margin_aliases(self, parser):
        assert parser.left_attributes(("rightMargin leadingMargin", "")) == [
            LayoutAttribute.TRAILING_MARGIN, LayoutAttribute.LEADING_MARGIN,
        ]


class TestRightHandSide:

    def test_view_reference_and_attribute(self, parser):
        source = ("top", "@header.bottom +8")
        assert parser.comparable_view_reference(source) == "header"
        assert parser.right_attribute(source) == LayoutAttribute.BOTTOM

    def test_reference_without_attribute(self, parser):
        source = ("top", "@super")
        assert parser.comparable_view_reference(source) == "super"
        assert parser.right_attribute(source) is None

    def test_unknown_right_attribute(self, parser):
        assert parser.right_attribute(("top", "@header.diagonal")) is None

    def test_tokens_without_whitespace(self, parser):
        source = ("trailing", "@super<20*2")
        assert parser.comparable_view_reference(source) == "super"
        assert parser.constant(source) == SignedConstant(20.0, ConstantSign.INSET)
        assert parser.multiplier(source) == SignedMultiplier(2.0, MultiplierSign.MULTIPLY)

    @pytest.mark.parametrize("token, sign", [
        ("+12", ConstantSign.POSITIVE),
        ("-12", ConstantSign.NEGATIVE),
        ("<12", ConstantSign.INSET),
        (">12", ConstantSign.OFFSET),
    ])
    def test_constant_signs(self, parser, token, sign):
        assert parser.constant(("top", f"@super {token}")) == SignedConstant(12.0, sign)

    @pytest.mark.parametrize("token, relation", [
        ("==", Relation.EQUAL),
        (">=", Relation.GREATER_OR_EQUAL),
        ("<=", Relation.LESS_OR_EQUAL),
    ])
    def test_relations(self, parser, token, relation):
        source = ("width", f"{token} +40")
        assert parser.relation(source) == relation
        assert parser.constant(source) == SignedConstant(40.0, ConstantSign.POSITIVE)

    def test_relation_absent(self, parser):
        assert parser.relation(("width", "+40")) is None

    def test_divide_multiplier(self, parser):
        assert parser.multiplier(("height", "/2")) == SignedMultiplier(2.0, MultiplierSign.DIVIDE)

    def test_priority_identifier_size_classes(self, parser):
        source = ("width", ">50 p750 #min-width hc vregular")
        assert parser.priority(source) == 750.0
        assert parser.identifier(source) == "min-width"
        assert parser.horizontal_size_class(source) == SizeClass.COMPACT
        assert parser.vertical_size_class(source) == SizeClass.REGULAR

    def test_absent_fields_are_none(self, parser):
        source = ("top", "@super")
        assert parser.constant(source) is None
        assert parser.multiplier(source) is None
        assert parser.priority(source) is None
        assert parser.identifier(source) is None
        assert parser.horizontal_size_class(source) is None
        assert parser.vertical_size_class(source) is None

    def test_first_token_of_a_modifier_wins(self, parser):
        source = ("top", "@header @footer *2 *3 #first #second")
        assert parser.comparable_view_reference(source) == "header"
        assert parser.multiplier(source).value == 2.0
        assert parser.identifier(source) == "first"


class TestMalformedInput:

    @pytest.mark.parametrize("source", [None, "top", ("top",), ("top", 12), ({}, "@super")])
    def test_malformed_source_yields_no_values(self, parser, source):
        assert parser.left_attributes(source) is None
        assert parser.relation(source) is None
        assert parser.constant(source) is None
        assert parser.comparable_view_reference(source) is None

    def test_invalid_constant_warns(self, parser, reporter):
        source = ("top", "@super <abc p750")
        assert parser.constant(source) is None
        assert parser.priority(source) == 750.0
        assert len(reporter.warnings) == 1
        assert "constant" in reporter.warnings[0].message

    def test_divide_by_zero_warns(self, parser, reporter):
        assert parser.multiplier(("width", "/0")) is None
        assert len(reporter.warnings) == 1

    def test_priority_out_of_range_warns(self, parser, reporter):
        assert parser.priority(("width", "p1500")) is None
        assert len(reporter.warnings) == 1

    def test_unknown_size_class_is_none(self, parser, reporter):
        assert parser.horizontal_size_class(("width", "hx")) is None
        assert reporter.diagnostics == []

    def test_hyphenated_view_name_warns(self, parser, reporter):
        assert parser.comparable_view_reference(("top", "@avatar-image.bottom +4")) == "avatar"
        assert len(reporter.warnings) == 1
        assert "'@avatar'" in reporter.warnings[0].message

    @pytest.mark.parametrize("rhs", ["@super-8", "@super -8", "@header.bottom-4 #top-gap"])
    def test_reference_followed_by_negative_constant(self, parser, reporter, rhs):
        parser.comparable_view_reference(("top", rhs))
        assert reporter.diagnostics == []


class TestReporterBinding:

    def test_with_reporter_redirects_warnings(self, parser, reporter):
        other = CollectingReporter()
        rebound = parser.with_reporter(other)

        assert rebound.constant(("top", "<abc")) is None
        assert len(other.warnings) == 1
        assert reporter.diagnostics == []
