"""Helper utilities for constructing temporary source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from webcheck.file_scanner import FileScanner
from webcheck.models import FileInput


class FileTreeBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "site"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self, **kwargs) -> List[FileInput]:
        """Return fresh file inputs for the project contents."""
        return FileScanner(**kwargs).scan(self.root)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["FileTreeBuilder"]
