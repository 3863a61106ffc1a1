"""Cross-file validators and selection utilities."""

from __future__ import annotations

from typing import List, Sequence, Set

from .base import CrossFileValidator
from .style_markup import (
    SelectorDefinitions,
    SelectorUsage,
    StyleMarkupValidator,
    is_generated_class_name,
)

_BUILTIN_NAMES = ("style-markup",)


def discover_validators(
    enabled: Sequence[str] | None = None,
    *,
    ignore_patterns: Sequence[str] = (),
) -> List[CrossFileValidator]:
    """Return instantiated validators, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}
        unknown = enabled_set - set(_BUILTIN_NAMES)
        if unknown:
            missing = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown validators requested: {missing}")

    validators: List[CrossFileValidator] = []
    if enabled_set is None or "style-markup" in enabled_set:
        validators.append(StyleMarkupValidator(ignore_patterns=ignore_patterns))
    return validators


__all__ = [
    "CrossFileValidator",
    "SelectorDefinitions",
    "SelectorUsage",
    "StyleMarkupValidator",
    "discover_validators",
    "is_generated_class_name",
]
