"""Domain Port(s) for Problem Instance I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import ProblemInstance


class ProblemRepository(Protocol):
    """Port for obtaining problem instances from external sources.

    Implementations live in infrastructure (e.g., text file adapter).
    """

    def load_instance(self, file_path: Path | str) -> ProblemInstance:
        """Load and validate an island with its transmitters and receivers."""
        ...
