"""Single-file analyzer implementations and selection utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence, Set, Tuple

from .base import LanguageAnalyzer, file_extension
from .markup import MarkupAnalyzer
from .script import ScriptAnalyzer
from .stylesheet import StylesheetAnalyzer

# Checked in order; the first analyzer claiming an extension wins.
_BUILTIN_FACTORIES: Tuple[Tuple[str, Callable[[], LanguageAnalyzer]], ...] = (
    ("script", ScriptAnalyzer),
    ("markup", MarkupAnalyzer),
    ("stylesheet", StylesheetAnalyzer),
)


def discover_analyzers(enabled: Sequence[str] | None = None) -> List[LanguageAnalyzer]:
    """Return instantiated analyzers, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}
        unknown = enabled_set - {name for name, _ in _BUILTIN_FACTORIES}
        if unknown:
            missing = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown analyzers requested: {missing}")

    analyzers: List[LanguageAnalyzer] = []
    for name, factory in _BUILTIN_FACTORIES:
        if enabled_set is not None and name not in enabled_set:
            continue
        analyzers.append(factory())
    return analyzers


def supported_extensions() -> Set[str]:
    """Return every extension handled by a built-in analyzer."""
    extensions: Set[str] = set()
    for _, factory in _BUILTIN_FACTORIES:
        extensions.update(getattr(factory, "supported_extensions", ()))
    return extensions


__all__ = [
    "LanguageAnalyzer",
    "MarkupAnalyzer",
    "ScriptAnalyzer",
    "StylesheetAnalyzer",
    "discover_analyzers",
    "file_extension",
    "supported_extensions",
]
