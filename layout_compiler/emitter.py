"""Emitters: hand resolved constraint specs to the host layout system."""

import logging
from dataclasses import dataclass, field
from typing import List, Protocol

from .schema import ResolvedConstraintSpec, SizeClassCondition

logger = logging.getLogger(__name__)


class ConstraintEmitter(Protocol):
    def emit(self, spec: ResolvedConstraintSpec) -> None: ...


@dataclass
class ActivatedConstraint:
    """A constraint handed to the host, with its activation state."""
    spec: ResolvedConstraintSpec
    active: bool


@dataclass
class RecordingEmitter:
    """
    In-memory emitter.

    Records every spec, activates it when its size-class condition admits the
    environment, and attaches it to the target's applied constraints.
    """
    environment: SizeClassCondition = field(default_factory=SizeClassCondition)
    emitted: List[ActivatedConstraint] = field(default_factory=list)

    def emit(self, spec: ResolvedConstraintSpec) -> None:
        constraint = ActivatedConstraint(spec, spec.size_classes.matches(self.environment))
        spec.target.applied_constraints.append(constraint)
        self.emitted.append(constraint)
        logger.debug(f"Emitted {spec.target.name}.{spec.left_attribute.value} "
                     f"(active={constraint.active})")

    @property
    def active(self) -> List[ResolvedConstraintSpec]:
        return [c.spec for c in self.emitted if c.active]

    def update_environment(self, environment: SizeClassCondition) -> None:
        """Re-evaluate size-class gating for every recorded constraint."""
        self.environment = environment
        for constraint in self.emitted:
            constraint.active = constraint.spec.size_classes.matches(environment)


class NullEmitter:
    """Discards every spec."""

    def emit(self, spec: ResolvedConstraintSpec) -> None:
        pass
