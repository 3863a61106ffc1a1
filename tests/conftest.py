from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.file_tree import FileTreeBuilder


@pytest.fixture
def file_tree(tmp_path: Path) -> FileTreeBuilder:
    """Provide a reusable file tree builder rooted at the pytest tmp_path."""
    return FileTreeBuilder(tmp_path)
