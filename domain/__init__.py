"""Tower Planner Domain Layer.

This package contains the core business logic organized by bounded contexts:
- coverage: Transmitter reach, receiver coverage, power planning
"""

from domain import coverage

__all__ = ["coverage"]
