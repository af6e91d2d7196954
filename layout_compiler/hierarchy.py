"""Minimal host-agnostic view hierarchy and the view index queried during resolution."""

from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .emitter import ActivatedConstraint


class View:
    """A named node in a view hierarchy."""

    def __init__(self, name: str, parent: Optional["View"] = None, superclass: Optional[str] = None):
        self.name = name
        self.superclass = superclass
        self.parent: Optional[View] = None
        self.subviews: List[View] = []
        self.z_index = 0
        self.properties: Dict[str, str] = {}
        self.applied_constraints: List["ActivatedConstraint"] = []
        if parent is not None:
            parent.add_subview(self)

    def add_subview(self, view: "View") -> None:
        """
        Attach `view` as the last subview, detaching it from its current parent.

        Raises:
            ValueError: If `view` is this view or one of its ancestors
        """
        if view.is_ancestor_of(self):
            raise ValueError(f"Cannot add {view.name!r} under {self.name!r}: "
                             f"it would become its own ancestor")
        if view.parent is not None:
            view.remove_from_parent()
        view.parent = self
        self.subviews.append(view)

    def remove_from_parent(self) -> None:
        if self.parent is not None:
            self.parent.subviews.remove(self)
            self.parent = None

    def ancestors(self) -> Iterator["View"]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def is_ancestor_of(self, other: "View") -> bool:
        """True if this view is `other` or lies on its path to the root."""
        return self is other or any(node is self for node in other.ancestors())

    @property
    def root(self) -> "View":
        node = self
        for node in self.ancestors():
            pass
        return node

    def shares_ancestry(self, other: "View") -> bool:
        """True if both views belong to the same hierarchy."""
        return self.root is other.root

    def __repr__(self) -> str:
        return f"View({self.name!r})"


class ViewIndex:
    """
    Lookup from symbolic view names to views of one hierarchy.

    Only mutate between layout passes; lookups during a pass assume a stable index.
    """

    def __init__(self, root: Optional[View] = None):
        self._views: Dict[str, View] = {}
        if root is not None:
            self.register(root.name, root)

    def lookup(self, name: str) -> Optional[View]:
        return self._views.get(name)

    def register(self, name: str, view: View) -> None:
        self._views[name] = view

    def __contains__(self, name: str) -> bool:
        return name in self._views

    def __len__(self) -> int:
        return len(self._views)
