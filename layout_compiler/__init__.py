"""
Layout Compiler Module

Translates declarative layout descriptions into resolved geometric
constraint specifications for a constraint-solving layout engine.

Design:
    Directive (shorthand or verbose) → ConstraintModel → ConstraintContext → Emitter

Components:
    - schema: Data structures (attributes, signed values, resolved specs)
    - constants: Modifier characters, attribute keys, perspective sets
    - parsers: Shorthand and verbose directive parsers
    - constraints: Attribute-aware sign and multiplier resolution
    - model: Constraint model and constraint establishment
    - hierarchy: Views and the view index
    - emitter: Hand-off of resolved specs to the host
    - validator: Layout description ingestion
    - compiler: Main compilation pipeline
"""

from .schema import (
    LayoutAttribute,
    Relation,
    ConstantSign,
    MultiplierSign,
    SizeClass,
    SignedConstant,
    SignedMultiplier,
    SizeClassCondition,
    ConstraintDirective,
    ResolvedConstraintSpec,
    Diagnostic,
    Layout,
)
from .config import CompilerConfig, load_config
from .reporting import LoggingReporter, CollectingReporter
from .parsers import ShorthandConstraintParser, VerboseConstraintParser, make_directive
from .constraints import ConstraintContext
from .model import ConstraintModel
from .hierarchy import View, ViewIndex
from .emitter import ActivatedConstraint, RecordingEmitter, NullEmitter
from .validator import (
    parse_layout,
    parse_constraints,
    LayoutDocument,
    ViewDescription,
    LayoutValidationError,
)
from .compiler import LayoutCompiler, ResolutionError, compile_layout

__all__ = [
    # Schema
    "LayoutAttribute",
    "Relation",
    "ConstantSign",
    "MultiplierSign",
    "SizeClass",
    "SignedConstant",
    "SignedMultiplier",
    "SizeClassCondition",
    "ConstraintDirective",
    "ResolvedConstraintSpec",
    "Diagnostic",
    "Layout",
    # Configuration and diagnostics
    "CompilerConfig",
    "load_config",
    "LoggingReporter",
    "CollectingReporter",
    # Parsing
    "ShorthandConstraintParser",
    "VerboseConstraintParser",
    "make_directive",
    "parse_layout",
    "parse_constraints",
    "LayoutDocument",
    "ViewDescription",
    "LayoutValidationError",
    # Resolution
    "ConstraintContext",
    "ConstraintModel",
    "View",
    "ViewIndex",
    "ActivatedConstraint",
    "RecordingEmitter",
    "NullEmitter",
    # Compilation
    "LayoutCompiler",
    "ResolutionError",
    "compile_layout",
]
