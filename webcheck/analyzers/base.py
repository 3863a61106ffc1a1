"""Base classes for single-file analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from ..models import FileInput, Issue


def file_extension(path: str) -> str:
    """Return the lowercased extension after the last dot, including the dot."""
    index = path.rfind(".")
    if index == -1:
        return ""
    return path[index:].lower()


class LanguageAnalyzer(ABC):
    """Contract for analyzers that check one file of a given language."""

    name: str = ""
    supported_extensions: Tuple[str, ...] = ()

    def supports(self, path: str) -> bool:
        """Return True when this analyzer handles files with the given path."""
        return file_extension(path) in self.supported_extensions

    @abstractmethod
    def analyze(self, file: FileInput) -> List[Issue]:
        """Return the structural issues found in ``file``."""
