"""Layout description ingestion: view entries, constraints blocks and templates."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .constants import (KEY_CONSTRAINTS, KEY_PROPERTIES, KEY_SUBVIEWS, KEY_TEMPLATE,
                        KEY_Z_INDEX, MOD_NEW_ELEMENT, MOD_SUPERCLASS)
from .parsers import make_directive
from .reporting import Reporter, error, warning
from .schema import ConstraintDirective

ROOT_VIEW_NAME = "root"
KEY_ROOT = "root"
KEY_TEMPLATES = "templates"
KEY_NAME = "name"


class LayoutValidationError(Exception):
    """Raised when a layout document cannot be read at all."""
    pass


@dataclass
class ViewDescription:
    """One view entry of a layout description."""
    name: str
    is_new: bool = False
    superclass: Optional[str] = None
    constraints: List[ConstraintDirective] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    z_index: int = 0
    subviews: List["ViewDescription"] = field(default_factory=list)
    templates: List[str] = field(default_factory=list)

    def walk(self):
        """Yield (parent, description) pairs depth-first, starting with (None, self)."""
        stack: List[Tuple[Optional[ViewDescription], ViewDescription]] = [(None, self)]
        while stack:
            parent, node = stack.pop()
            yield parent, node
            stack.extend((node, child) for child in reversed(node.subviews))


@dataclass
class LayoutDocument:
    """Parsed layout file: the root view plus named template fragments."""
    root: ViewDescription
    templates: Dict[str, ViewDescription] = field(default_factory=dict)
    name: Optional[str] = None


def parse_view_id(raw_id: str) -> Tuple[str, bool, Optional[str]]:
    """
    Split a raw view id into (name, is_new, superclass).

    "!avatar:ImageView" -> ("avatar", True, "ImageView"). The superclass is
    only honoured for new elements.
    """
    is_new = raw_id.startswith(MOD_NEW_ELEMENT)
    view_id = raw_id[len(MOD_NEW_ELEMENT):] if is_new else raw_id
    name, sep, superclass = view_id.partition(MOD_SUPERCLASS)
    if not is_new or not sep or not superclass:
        superclass = None
    return name, is_new, superclass


def parse_constraints(block: Any, reporter: Reporter) -> List[ConstraintDirective]:
    """
    Parse a constraints block into directives.

    Each value may be a shorthand string, a verbose mapping, or a list
    mixing both.
    """
    if block is None:
        return []
    if not isinstance(block, Mapping):
        error(reporter, f"Constraints block must be a mapping, got {type(block).__name__}")
        return []

    directives = []
    for lhs, rhs in block.items():
        arguments = rhs if isinstance(rhs, list) else [rhs]
        for argument in arguments:
            directive = make_directive(lhs, argument, reporter)
            if directive is not None:
                directives.append(directive)
    return directives


def parse_properties(block: Any, reporter: Reporter) -> Dict[str, str]:
    """Non-geometric properties; only string values are kept."""
    if block is None:
        return {}
    if not isinstance(block, Mapping):
        error(reporter, f"Properties block must be a mapping, got {type(block).__name__}")
        return {}
    return {str(k): v for k, v in block.items() if isinstance(v, str)}


def parse_z_index(value: Any, reporter: Reporter) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    warning(reporter, f"Invalid value for z-index: {value!r}")
    return 0


def parse_templates(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str) and item]
    return []


def parse_view(raw_id: str, data: Any, reporter: Reporter) -> Optional[ViewDescription]:
    """Parse one view entry and, recursively, its subviews."""
    if not isinstance(data, Mapping):
        error(reporter, f"View '{raw_id}' must be a mapping, got {type(data).__name__}")
        return None

    name, is_new, superclass = parse_view_id(raw_id)
    if not name:
        error(reporter, f"View id '{raw_id}' has no name")
        return None

    subviews = []
    subview_data = data.get(KEY_SUBVIEWS)
    if isinstance(subview_data, Mapping):
        for sub_id, sub_data in subview_data.items():
            subview = parse_view(str(sub_id), sub_data, reporter)
            if subview is not None:
                subviews.append(subview)
    elif subview_data is not None:
        error(reporter, f"Subviews of '{name}' must be a mapping")

    return ViewDescription(
        name=name,
        is_new=is_new,
        superclass=superclass,
        constraints=parse_constraints(data.get(KEY_CONSTRAINTS), reporter),
        properties=parse_properties(data.get(KEY_PROPERTIES), reporter),
        z_index=parse_z_index(data.get(KEY_Z_INDEX), reporter),
        subviews=subviews,
        templates=parse_templates(data.get(KEY_TEMPLATE)),
    )


def load_source(source: Any) -> dict:
    """
    Read a layout document from a mapping, JSON text or YAML text.

    Raises:
        LayoutValidationError: If the text is not a mapping in either format
    """
    if isinstance(source, Mapping):
        return dict(source)
    if not isinstance(source, str):
        raise LayoutValidationError(f"Unsupported layout source type: {type(source).__name__}")

    try:
        data = json.loads(source)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise LayoutValidationError(f"Invalid layout: {e}") from e

    if not isinstance(data, dict):
        raise LayoutValidationError("Layout must be a mapping")
    return data


def parse_layout(source: Any, reporter: Reporter) -> LayoutDocument:
    """
    Parse a layout document.

    The document is either a root view mapping, or a mapping with a "root"
    view, an optional "name" and optional named "templates".

    Raises:
        LayoutValidationError: If the document or its root view is unreadable
    """
    data = load_source(source)

    if KEY_ROOT in data:
        root_data = data[KEY_ROOT]
        template_data = data.get(KEY_TEMPLATES) or {}
    else:
        root_data = data
        template_data = {}

    root = parse_view(ROOT_VIEW_NAME, root_data, reporter)
    if root is None:
        raise LayoutValidationError("Root view must be a mapping")

    templates = {}
    if isinstance(template_data, Mapping):
        for name, fragment in template_data.items():
            template = parse_view(str(name), fragment, reporter)
            if template is not None:
                templates[template.name] = template
    else:
        error(reporter, "Templates must be a mapping of name to view fragment")

    name = data.get(KEY_NAME)
    return LayoutDocument(root=root, templates=templates,
                          name=name if isinstance(name, str) else None)
