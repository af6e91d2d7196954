"""Diagnostics sinks threaded through a layout pass."""

import logging
from typing import Callable, List, Optional

from .schema import Diagnostic

logger = logging.getLogger(__name__)

# A reporter is any callable accepting a Diagnostic
Reporter = Callable[[Diagnostic], None]


def warning(reporter: Reporter, message: str, identifier: Optional[str] = None) -> None:
    reporter(Diagnostic("warning", message, identifier))


def error(reporter: Reporter, message: str, identifier: Optional[str] = None) -> None:
    reporter(Diagnostic("error", message, identifier))


class LoggingReporter:
    """Forward diagnostics to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def __call__(self, diagnostic: Diagnostic) -> None:
        if diagnostic.level == "error":
            self.log.error(diagnostic.message)
        else:
            self.log.warning(diagnostic.message)


class CollectingReporter:
    """
    Keep every diagnostic in memory, optionally forwarding to another reporter.

    Usage:
        reporter = CollectingReporter()
        model.establish_constraints(view, index, emitter, reporter=reporter)
        assert not reporter.errors
    """

    def __init__(self, forward: Optional[Reporter] = None):
        self.diagnostics: List[Diagnostic] = []
        self.forward = forward

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward is not None:
            self.forward(diagnostic)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    def clear(self) -> None:
        self.diagnostics = []
