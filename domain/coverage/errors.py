"""Coverage Bounded Context - Error Hierarchy.

Custom exceptions for loading problem instances and solving coverage.
"""

from __future__ import annotations


class CoverageError(Exception):
    """Base error for coverage operations."""


class InvalidInstanceError(CoverageError):
    """Problem instance is malformed or violates its invariants.

    Covers wrong field counts, non-integer values, id sequencing
    violations, missing towers and out-of-bounds coordinates.
    """


class SolverConsistencyError(CoverageError):
    """Solver state violated an internal invariant.

    Raised when receivers remain uncovered but no transmitter can be
    increased to reach any of them. Unrecoverable.

    Attributes:
        pending_ids: Receiver ids still uncovered when the solve aborted
    """

    def __init__(self, pending_ids: tuple[int, ...]) -> None:
        self.pending_ids = pending_ids
        super().__init__(
            f"No candidate transmitter for {len(pending_ids)} uncovered "
            f"receiver(s): {list(pending_ids)}"
        )
