"""Configuration for layout compilation."""

import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .constants import PARENT_REFERENCE, SIZE_CLASS_KEYS
from .schema import SizeClass, SizeClassCondition

logger = logging.getLogger(__name__)


@dataclass
class CompilerConfig:
    """
    Layout compiler configuration.

    Parameters:
        parent_reference: View reference that resolves to the target's parent
        independent_ignores_explicit_view: Force width/height constraints to a
            constant (right attribute none) even when a comparable view is given
        horizontal_size_class: Size class of the environment, used for gating
        vertical_size_class: Size class of the environment, used for gating
        log_level: Level passed to logging.basicConfig by the CLI
    """
    parent_reference: str = PARENT_REFERENCE
    independent_ignores_explicit_view: bool = False
    horizontal_size_class: str = "any"
    vertical_size_class: str = "any"
    log_level: str = "WARNING"

    def __post_init__(self):
        for name in ("horizontal_size_class", "vertical_size_class"):
            value = getattr(self, name)
            if value not in SIZE_CLASS_KEYS:
                logger.warning(f"Unknown {name} '{value}', using 'any' "
                               f"(expected one of: {', '.join(SIZE_CLASS_KEYS)})")
                setattr(self, name, "any")

    @property
    def environment(self) -> SizeClassCondition:
        return SizeClassCondition(
            horizontal=SIZE_CLASS_KEYS.get(self.horizontal_size_class, SizeClass.UNSPECIFIED),
            vertical=SIZE_CLASS_KEYS.get(self.vertical_size_class, SizeClass.UNSPECIFIED),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> CompilerConfig:
    """
    Load a CompilerConfig from a YAML file.

    Unknown keys are ignored with a warning; missing keys keep their defaults.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(CompilerConfig)}
    for key in data:
        if key not in known:
            logger.warning(f"Ignoring unknown config key '{key}'")

    return CompilerConfig(**{k: v for k, v in data.items() if k in known})
