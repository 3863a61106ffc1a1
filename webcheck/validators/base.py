"""Core validation contracts for checks spanning several files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import FileInput, Issue


class CrossFileValidator(ABC):
    """Contract for validators that correlate facts across a whole batch."""

    name: str = ""

    @abstractmethod
    def validate(self, files: Sequence[FileInput]) -> List[Issue]:
        """Run validation over every file in the batch and return any issues."""
