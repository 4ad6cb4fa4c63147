"""Text rendering of a coverage Solution.

Output layout:
    <receivers_with_initial_signal>/<total_receivers>
    <transmitter_id> <new_power>      (one line per increased transmitter)
"""

from __future__ import annotations

from domain.coverage.value_objects import Solution


def format_solution(solution: Solution) -> list[str]:
    """Render a solution as output lines, increases ascending by id."""
    lines = [f"{solution.receivers_with_initial_signal}/{solution.total_receivers}"]
    lines.extend(
        f"{increase.transmitter_id} {increase.new_power}"
        for increase in solution.power_increases
    )
    return lines
