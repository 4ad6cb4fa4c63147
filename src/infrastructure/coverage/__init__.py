"""Infrastructure adapters for the coverage bounded context.

This module provides the infrastructure layer implementations for coverage
operations: loading problem instances from text files and rendering
solutions for output.
"""

from .report import format_solution
from .text_adapter import TextInstanceAdapter

__all__ = ["TextInstanceAdapter", "format_solution"]
