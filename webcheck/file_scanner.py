"""Collects analyzable files from disk into in-memory inputs."""

from __future__ import annotations

import os
import re
from fnmatch import translate
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Pattern, Set

from .analyzers import supported_extensions
from .logging import get_logger
from .models import FileInput

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

logger = get_logger("file_scanner")


class _Exclusion(NamedTuple):
    regex: Pattern[str]
    directory_only: bool
    reinclude: bool


class FileScanner:
    """Walks a directory and reads every file an analyzer can handle.

    ``exclude_paths`` use ``.gitignore`` syntax and are applied after the
    patterns of the root ``.gitignore``. A pattern containing a slash (or
    starting with one) matches the path from the scan root; any other
    pattern matches a file or directory name at any depth. Excluded
    directories are not descended into, so ``!pattern`` can only bring back
    entries whose parent directory is still walked.
    """

    def __init__(
        self,
        exclude_paths: Iterable[str] = (),
        extensions: Iterable[str] | None = None,
    ) -> None:
        self._exclude_paths = list(exclude_paths)
        self._extensions: Set[str] = (
            {ext.lower() for ext in extensions} if extensions is not None else supported_extensions()
        )

    def scan(self, root: str | Path) -> List[FileInput]:
        """Return file inputs with POSIX paths relative to ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if root_path.is_file():
            single = self._read(root_path, root_path.name)
            return [single] if single is not None else []

        exclusions = self._compile(self._gitignore_lines(root_path) + self._exclude_paths)

        files: List[FileInput] = []
        for path in self._iter_files(root_path, exclusions):
            if path.suffix.lower() not in self._extensions:
                continue
            loaded = self._read(path, path.relative_to(root_path).as_posix())
            if loaded is not None:
                files.append(loaded)
        logger.debug("Collected %d file(s) under %s", len(files), root_path)
        return files

    @staticmethod
    def _gitignore_lines(root: Path) -> List[str]:
        gitignore = root / ".gitignore"
        if not gitignore.is_file():
            return []
        return gitignore.read_text(encoding="utf-8").splitlines()

    @staticmethod
    def _compile(patterns: Iterable[str]) -> List[_Exclusion]:
        exclusions: List[_Exclusion] = []
        for raw in patterns:
            pattern = raw.strip()
            if not pattern or pattern.startswith("#"):
                continue
            reinclude = pattern.startswith("!")
            pattern = pattern.lstrip("!")
            directory_only = pattern.endswith("/")
            core = pattern.strip("/")
            if not core:
                continue
            if "/" in pattern.rstrip("/"):
                regex = re.compile(translate(core))
            else:
                regex = re.compile(r"(?:.*/)?" + translate(core))
            exclusions.append(_Exclusion(regex, directory_only, reinclude))
        return exclusions

    @staticmethod
    def _is_excluded(rel_path: str, is_dir: bool, exclusions: List[_Exclusion]) -> bool:
        # The last matching pattern decides, as in .gitignore.
        excluded = False
        for exclusion in exclusions:
            if exclusion.directory_only and not is_dir:
                continue
            if exclusion.regex.match(rel_path):
                excluded = not exclusion.reinclude
        return excluded

    @staticmethod
    def _read(path: Path, rel_path: str) -> FileInput | None:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", rel_path, exc)
            return None
        return FileInput(path=rel_path, content=content)

    def _iter_files(self, root: Path, exclusions: List[_Exclusion]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            prefix = "" if current_dir == root else current_dir.relative_to(root).as_posix() + "/"

            dirnames[:] = [
                name
                for name in sorted(dirnames)
                if name not in _EXCLUDED_DIRS
                and not self._is_excluded(prefix + name, True, exclusions)
            ]
            for filename in sorted(filenames):
                if not self._is_excluded(prefix + filename, False, exclusions):
                    yield current_dir / filename


__all__ = ["FileScanner"]
