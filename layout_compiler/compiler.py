"""
Layout compiler: view descriptions -> view hierarchy -> resolved constraints.

Core algorithm:
1. Walk the description depth-first, creating new views and looking up
   existing ones, so the whole hierarchy exists before any constraint
2. For each view: template constraints, then its own, each resolved
   per left attribute and handed to the emitter
3. Every failure is reported and scoped to its directive or subtree
"""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from .config import CompilerConfig
from .emitter import ConstraintEmitter, RecordingEmitter
from .hierarchy import View, ViewIndex
from .model import ConstraintModel
from .reporting import CollectingReporter, LoggingReporter, Reporter, error, warning
from .schema import ConstraintDirective, Layout
from .validator import LayoutDocument, ViewDescription, parse_layout

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """Raised when a layout cannot be compiled against the given root view."""
    pass


class LayoutCompiler:
    """
    Compiles a parsed layout document against a root view.

    Usage:
        compiler = LayoutCompiler(config=CompilerConfig())
        layout = compiler.compile(document, View("root"))
    """

    def __init__(
        self,
        config: Optional[CompilerConfig] = None,
        reporter: Optional[Reporter] = None,
        emitter: Optional[ConstraintEmitter] = None,
        environment: Any = None,
    ):
        """
        Args:
            config: Compiler configuration
            reporter: Diagnostics sink; diagnostics are also kept on the Layout
            emitter: Receives resolved specs (RecordingEmitter by default)
            environment: Mapping of extra named views (e.g. layout guides)
        """
        self.config = config or CompilerConfig()
        self.reporter = reporter or LoggingReporter()
        self.emitter = emitter if emitter is not None else RecordingEmitter(self.config.environment)
        self.environment = environment

    def compile(self, document: LayoutDocument, root_view: View,
                view_index: Optional[ViewIndex] = None) -> Layout:
        """Build the hierarchy described by the document and establish its constraints."""
        if root_view is None:
            raise ResolutionError("A root view is required")

        reporter = CollectingReporter(forward=self.reporter)
        view_index = view_index if view_index is not None else ViewIndex()
        view_index.register(root_view.name, root_view)

        built = self._build_hierarchy(document.root, root_view, view_index, reporter)

        layout = Layout()
        for description, view in built:
            directives = self._template_constraints(
                description.templates, document.templates, reporter, set())
            directives.extend(description.constraints)
            for directive in directives:
                model = ConstraintModel(directive, reporter)
                layout.constraints.extend(model.establish_constraints(
                    view, view_index, self.emitter,
                    environment=self.environment,
                    reporter=reporter,
                    config=self.config,
                ))

        layout.diagnostics = reporter.diagnostics
        logger.info(f"Compiled {len(built)} views: {len(layout.constraints)} constraints, "
                    f"{len(reporter.errors)} errors")
        return layout

    def _build_hierarchy(self, root: ViewDescription, root_view: View, view_index: ViewIndex,
                         reporter: Reporter) -> List[Tuple[ViewDescription, View]]:
        """Create or look up every described view; skipped subtrees are reported."""
        views: Dict[int, View] = {}
        built = []

        for parent, description in root.walk():
            if parent is None:
                view = root_view
            elif id(parent) not in views:
                # Parent was skipped, so is this subtree
                continue
            else:
                view = self._materialize(description, views[id(parent)], view_index, reporter)
                if view is None:
                    continue

            view.z_index = description.z_index
            view.properties.update(description.properties)
            views[id(description)] = view
            built.append((description, view))

        return built

    def _materialize(self, description: ViewDescription, parent: View, view_index: ViewIndex,
                     reporter: Reporter) -> Optional[View]:
        if description.is_new:
            if description.name in view_index:
                warning(reporter, f"View '{description.name}' is declared more than once; "
                                  f"references resolve to the last declaration")
            view = View(description.name, parent=parent, superclass=description.superclass)
            view_index.register(description.name, view)
            return view

        view = view_index.lookup(description.name)
        if view is None:
            error(reporter, f"View '{description.name}' does not exist; mark it with "
                            f"'!' to create it. Skipping its subtree.")
            return None
        if view.parent is not parent:
            if view.is_ancestor_of(parent):
                error(reporter, f"View '{description.name}' cannot be placed inside "
                                f"'{parent.name}', which it contains. Skipping its subtree.")
                return None
            parent.add_subview(view)
        return view

    def _template_constraints(self, names: List[str], templates: Dict[str, ViewDescription],
                              reporter: Reporter, seen: Set[str]) -> List[ConstraintDirective]:
        """Constraints of the named templates, including templates they include."""
        directives: List[ConstraintDirective] = []
        for name in names:
            if name in seen:
                error(reporter, f"Template '{name}' includes itself")
                continue
            template = templates.get(name)
            if template is None:
                error(reporter, f"Unknown template '{name}'")
                continue
            directives.extend(self._template_constraints(
                template.templates, templates, reporter, seen | {name}))
            directives.extend(template.constraints)
        return directives


def compile_layout(source: Any, root_view: Optional[View] = None,
                   config: Optional[CompilerConfig] = None,
                   reporter: Optional[Reporter] = None,
                   emitter: Optional[ConstraintEmitter] = None,
                   environment: Any = None) -> Layout:
    """
    Parse a layout source (mapping, JSON or YAML text) and compile it.

    The returned Layout carries parse-time and resolution diagnostics alike.
    """
    collector = CollectingReporter(forward=reporter or LoggingReporter())
    document = parse_layout(source, collector)
    compiler = LayoutCompiler(config=config, reporter=collector, emitter=emitter,
                              environment=environment)
    layout = compiler.compile(document, root_view or View("root"))
    layout.diagnostics = list(collector.diagnostics)
    return layout
