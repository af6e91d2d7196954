"""Constraint model: read-only facade over a parsed directive."""

import logging
from functools import cached_property
from typing import Any, List, Optional, Tuple

from .config import CompilerConfig
from .constraints import ConstraintContext
from .emitter import ConstraintEmitter
from .hierarchy import View, ViewIndex
from .reporting import LoggingReporter, Reporter, error
from .schema import (ConstantSign, ConstraintDirective, LayoutAttribute, MultiplierSign,
                     Relation, ResolvedConstraintSpec, SignedConstant, SignedMultiplier,
                     SizeClass, SizeClassCondition)

logger = logging.getLogger(__name__)

_ANCESTRY_MESSAGE = "Some views do not share a view ancestry and so this constraint cannot be made."


class ConstraintModel:
    """
    Canonical constraint, parser agnostic.

    Each property is read from the directive's parser once, with defaults
    substituted for absent fields: relation equal, constant 0, multiplier 1,
    size classes unspecified.

    When a reporter is given, parse warnings go to it instead of the sink the
    directive was ingested with.
    """

    def __init__(self, directive: ConstraintDirective, reporter: Optional[Reporter] = None):
        self.directive = directive
        self.reporter = reporter
        self.parser = directive.parser if reporter is None else directive.parser.with_reporter(reporter)

    def _read(self, accessor: str) -> Any:
        return getattr(self.parser, accessor)(self.directive.source)

    @cached_property
    def left_attributes(self) -> List[LayoutAttribute]:
        return self._read("left_attributes") or []

    @cached_property
    def right_attribute(self) -> Optional[LayoutAttribute]:
        return self._read("right_attribute")

    @cached_property
    def relation(self) -> Relation:
        return self._read("relation") or Relation.EQUAL

    @cached_property
    def constant(self) -> SignedConstant:
        return self._read("constant") or SignedConstant(0.0, ConstantSign.POSITIVE)

    @cached_property
    def multiplier(self) -> SignedMultiplier:
        return self._read("multiplier") or SignedMultiplier(1.0, MultiplierSign.MULTIPLY)

    @cached_property
    def priority(self) -> Optional[float]:
        return self._read("priority")

    @cached_property
    def comparable_view_reference(self) -> Optional[str]:
        return self._read("comparable_view_reference")

    @cached_property
    def identifier(self) -> Optional[str]:
        return self._read("identifier")

    @cached_property
    def horizontal_size_class(self) -> SizeClass:
        return self._read("horizontal_size_class") or SizeClass.UNSPECIFIED

    @cached_property
    def vertical_size_class(self) -> SizeClass:
        return self._read("vertical_size_class") or SizeClass.UNSPECIFIED

    @property
    def size_classes(self) -> SizeClassCondition:
        return SizeClassCondition(self.horizontal_size_class, self.vertical_size_class)

    def _describe(self) -> str:
        if self.identifier is not None:
            return f"Constraint: {self.identifier}"
        return "Use constraint identifiers to determine which constraint is causing the problem."

    def resolve_comparable_view(
        self,
        target: View,
        view_index: ViewIndex,
        environment: Any = None,
        parent_reference: str = "super",
    ) -> Tuple[bool, Optional[View]]:
        """
        Resolve the comparable view reference.

        Order: parent reference -> view index -> environment. No reference
        resolves to None and leaves defaulting to the context.

        Returns:
            (resolved, view); resolved is False when a reference was given
            but nothing matched it
        """
        reference = self.comparable_view_reference
        if reference is None:
            return True, None
        if reference == parent_reference:
            return target.parent is not None, target.parent

        view = view_index.lookup(reference)
        if view is None and environment is not None:
            candidate = environment.get(reference)
            if isinstance(candidate, View):
                view = candidate
        return view is not None, view

    def establish_constraints(
        self,
        view: View,
        view_index: ViewIndex,
        emitter: ConstraintEmitter,
        environment: Any = None,
        reporter: Optional[Reporter] = None,
        config: Optional[CompilerConfig] = None,
    ) -> List[ResolvedConstraintSpec]:
        """
        Resolve one spec per left attribute and hand each to the emitter.

        Unresolvable references and views outside the target's hierarchy are
        reported and skipped; the remaining attributes still resolve.

        Args:
            view: Target view
            view_index: Lookup for symbolic view names
            emitter: Receives each resolved spec
            environment: Optional mapping consulted when the index has no match
            reporter: Diagnostics sink (the model's own, else logging)
            config: Compiler configuration

        Returns:
            The emitted specs
        """
        reporter = reporter or self.reporter or LoggingReporter()
        config = config or CompilerConfig()

        resolved, comparable = self.resolve_comparable_view(
            view, view_index, environment, config.parent_reference)
        if not resolved:
            error(reporter, f"Unable to resolve view reference "
                            f"'{self.comparable_view_reference}' for '{view.name}'. "
                            f"{self._describe()}", self.identifier)
            return []

        specs = []
        for attr in self.left_attributes:
            context = ConstraintContext(
                target=view,
                left_attribute=attr,
                relation=self.relation,
                raw_comparable_view=comparable,
                raw_right_attribute=self.right_attribute,
                raw_constant=self.constant,
                raw_multiplier=self.multiplier,
                independent_ignores_explicit_view=config.independent_ignores_explicit_view,
            )

            # Views in separate hierarchies cannot be related by the solver
            if not view.shares_ancestry(context.comparable_view or view):
                error(reporter, f"{_ANCESTRY_MESSAGE} {self._describe()}", self.identifier)
                continue

            spec = ResolvedConstraintSpec(
                target=view,
                left_attribute=attr,
                relation=context.relation,
                comparable_view=context.comparable_view,
                right_attribute=context.right_attribute,
                constant=context.constant,
                multiplier=context.multiplier,
                priority=self.priority,
                identifier=self.identifier,
                size_classes=self.size_classes,
            )
            emitter.emit(spec)
            specs.append(spec)

        return specs
