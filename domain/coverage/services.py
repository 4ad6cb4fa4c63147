"""Coverage Bounded Context - Domain Services.

Pure domain logic for planning transmitter power.
NO I/O operations - instance loading is implemented by infrastructure
adapters under `src/infrastructure/coverage/` via domain ports.

Algorithm:
1) Build the distance index once: receivers already in range of some
   transmitter at initial power are counted and dropped; every other
   receiver keeps its distance to every transmitter.
2) Greedy step, repeated until no receiver is pending: find the smallest
   power increase that brings any pending receiver into range, give it to
   the transmitter that covers the most receivers at that increase, and
   drop the receivers it now covers.
3) Report every transmitter whose power changed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from domain.coverage.errors import SolverConsistencyError
from domain.coverage.value_objects import (
    DistanceRecord,
    GreedyStepResult,
    PowerIncrease,
    ProblemInstance,
    Receiver,
    Solution,
    Transmitter,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)


class TieBreak(str, Enum):
    """Policy for choosing among transmitters that cover equally many receivers.

    LOWEST_ID: smallest transmitter id wins.
    FIRST_SEEN: the transmitter met first while scanning pending receivers
        in id order (and each receiver's records in transmitter order) wins.
    """

    LOWEST_ID = "lowest-id"
    FIRST_SEEN = "first-seen"


class _Located(Protocol):
    x: int
    y: int


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
def chebyshev_distance(a: _Located, b: _Located) -> int:
    """Chebyshev distance between two towers.

    A diagonal move costs the same as an axis move, so the distance is the
    larger of the x and y separations.
    """
    return max(abs(a.x - b.x), abs(a.y - b.y))


def _coordinates(towers: Sequence[_Located]) -> NDArray[np.int64]:
    return np.array([(t.x, t.y) for t in towers], dtype=np.int64).reshape(-1, 2)


def distance_matrix(
    receivers: Sequence[Receiver], transmitters: Sequence[Transmitter]
) -> NDArray[np.int64]:
    """Chebyshev distances as a (receivers x transmitters) int64 array."""
    rx = _coordinates(receivers)
    tx = _coordinates(transmitters)
    return np.abs(rx[:, None, :] - tx[None, :, :]).max(axis=2, initial=0)


# ---------------------------------------------------------------------------
# Working State
# ---------------------------------------------------------------------------
class DistanceIndex:
    """Pending receivers and their distances to every transmitter.

    Row i holds the receiver `receiver_ids[i]`, column j the transmitter
    `transmitter_ids[j]`. Rows are kept in ascending receiver id order and
    removed as receivers become covered; columns never change.
    """

    def __init__(
        self,
        receiver_ids: NDArray[np.int64],
        transmitter_ids: NDArray[np.int64],
        distances: NDArray[np.int64],
    ) -> None:
        receiver_ids = np.asarray(receiver_ids, dtype=np.int64)
        transmitter_ids = np.asarray(transmitter_ids, dtype=np.int64)
        distances = np.asarray(distances, dtype=np.int64)
        expected_shape = (receiver_ids.shape[0], transmitter_ids.shape[0])
        if distances.shape != expected_shape:
            raise ValueError(
                f"Distances shape {distances.shape} does not match "
                f"{expected_shape} (receivers x transmitters)"
            )
        self._receiver_ids = receiver_ids
        self._transmitter_ids = transmitter_ids
        self._distances = distances

    def __len__(self) -> int:
        return int(self._receiver_ids.shape[0])

    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def receiver_ids(self) -> tuple[int, ...]:
        return tuple(int(r) for r in self._receiver_ids)

    @property
    def transmitter_ids(self) -> tuple[int, ...]:
        return tuple(int(t) for t in self._transmitter_ids)

    def records(self, receiver_id: int) -> tuple[DistanceRecord, ...]:
        """Distance records of a pending receiver, in transmitter id order.

        Raises:
            KeyError: If the receiver is not pending
        """
        rows = np.flatnonzero(self._receiver_ids == receiver_id)
        if rows.size == 0:
            raise KeyError(receiver_id)
        row = self._distances[rows[0]]
        return tuple(
            DistanceRecord(transmitter_id=int(t), distance=int(d))
            for t, d in zip(self._transmitter_ids, row)
        )

    def discard(self, receiver_ids: Iterable[int]) -> None:
        """Remove covered receivers; unknown ids are ignored."""
        ids = np.fromiter(receiver_ids, dtype=np.int64)
        keep = ~np.isin(self._receiver_ids, ids)
        self._receiver_ids = self._receiver_ids[keep]
        self._distances = self._distances[keep]

    def required_increases(self, power: "PowerState") -> NDArray[np.int64]:
        """Power each transmitter still needs to reach each pending receiver."""
        return self._distances - power.levels_for(self._transmitter_ids)[None, :]


class PowerState:
    """Current power of every transmitter during one solve.

    Seeded from the initial powers; levels only ever increase.
    """

    def __init__(self, transmitters: Sequence[Transmitter]) -> None:
        self._ids = np.array([t.id for t in transmitters], dtype=np.int64)
        self._initial = np.array(
            [t.initial_power for t in transmitters], dtype=np.int64
        )
        self._levels = self._initial.copy()
        # Transmitter ids are dense from 1, so id - 1 is the position
        if not np.array_equal(self._ids, np.arange(1, len(transmitters) + 1)):
            raise ValueError("Transmitter ids must be 1..n in order")

    def power_of(self, transmitter_id: int) -> int:
        return int(self._levels[transmitter_id - 1])

    def initial_power_of(self, transmitter_id: int) -> int:
        return int(self._initial[transmitter_id - 1])

    def levels_for(self, transmitter_ids: NDArray[np.int64]) -> NDArray[np.int64]:
        """Current levels aligned with the given transmitter ids."""
        return self._levels[np.asarray(transmitter_ids, dtype=np.int64) - 1]

    def increase(self, transmitter_id: int, amount: int) -> int:
        """Raise a transmitter's power and return its new level.

        Raises:
            ValueError: If amount is not positive
        """
        if amount <= 0:
            raise ValueError(f"Power increase must be positive, got {amount}")
        self._levels[transmitter_id - 1] += amount
        return self.power_of(transmitter_id)

    def increased(self) -> tuple[PowerIncrease, ...]:
        """Transmitters whose power differs from initial, ascending by id."""
        changed = np.flatnonzero(self._levels != self._initial)
        return tuple(
            PowerIncrease(
                transmitter_id=int(self._ids[i]), new_power=int(self._levels[i])
            )
            for i in changed
        )

    def snapshot(self) -> dict[int, int]:
        """Mapping transmitter_id -> current power."""
        return {int(t): int(p) for t, p in zip(self._ids, self._levels)}


# ---------------------------------------------------------------------------
# Distance Index Construction
# ---------------------------------------------------------------------------
def build_distance_index(
    transmitters: Sequence[Transmitter], receivers: Sequence[Receiver]
) -> tuple[DistanceIndex, int]:
    """Initial coverage pass.

    A receiver within range of any transmitter at initial power is counted
    as having an initial signal and dropped. Each remaining receiver keeps
    one record per transmitter, in transmitter id order.

    Args:
        transmitters: Transmitters ordered by id
        receivers: Receivers ordered by id

    Returns:
        Tuple of (distance index of uncovered receivers, initially covered count)
    """
    distances = distance_matrix(receivers, transmitters)
    powers = np.array([t.initial_power for t in transmitters], dtype=np.int64)

    covered = (distances <= powers[None, :]).any(axis=1)
    pending = ~covered
    receiver_ids = np.array([r.id for r in receivers], dtype=np.int64)
    transmitter_ids = np.array([t.id for t in transmitters], dtype=np.int64)

    index = DistanceIndex(
        receiver_ids=receiver_ids[pending],
        transmitter_ids=transmitter_ids,
        distances=distances[pending],
    )
    initial_covered = int(covered.sum())
    logger.debug(
        "Distance index built: %d/%d receivers covered initially, %d pending",
        initial_covered,
        len(receivers),
        len(index),
    )
    return index, initial_covered


# ---------------------------------------------------------------------------
# Greedy Step
# ---------------------------------------------------------------------------
def sweep_covered_receivers(index: DistanceIndex, power: PowerState) -> tuple[int, ...]:
    """Drop pending receivers that current power already reaches.

    Returns:
        Ids of the receivers removed, ascending
    """
    if index.is_empty():
        return ()
    reached = (index.required_increases(power) <= 0).any(axis=1)
    if not reached.any():
        return ()
    pending = index.receiver_ids
    swept = tuple(r for r, hit in zip(pending, reached) if hit)
    index.discard(swept)
    logger.debug("Receivers already in range, removed: %s", list(swept))
    return swept


def _choose_column(
    hits: NDArray[np.bool_], transmitter_ids: NDArray[np.int64], tie_break: TieBreak
) -> int:
    counts = hits.sum(axis=0)
    best = counts.max(initial=0)
    if best == 0:
        return -1
    candidates = np.flatnonzero(counts == best)
    if tie_break is TieBreak.FIRST_SEEN:
        # First hit in row-major order: earliest receiver, then transmitter order
        first_rows = hits[:, candidates].argmax(axis=0)
        return int(candidates[np.lexsort((candidates, first_rows))[0]])
    return int(candidates[np.argmin(transmitter_ids[candidates])])


def greedy_step(
    index: DistanceIndex,
    power: PowerState,
    tie_break: TieBreak = TieBreak.LOWEST_ID,
) -> GreedyStepResult | None:
    """Apply the single cheapest power increase that covers the most receivers.

    The increase is the minimum, over every pending receiver and every
    transmitter, of distance minus current power. Among transmitters for
    which that minimum is reached, the one bringing the most receivers into
    range is raised; ties are settled by `tie_break`. Every receiver it now
    reaches leaves the index.

    Receivers that current power already reaches are removed first without
    any increase. If that empties the index, nothing is raised and None is
    returned.

    Args:
        index: Pending receivers (mutated: covered receivers are removed)
        power: Transmitter power levels (mutated: one level increases)
        tie_break: Policy among transmitters covering equally many receivers

    Returns:
        GreedyStepResult describing the increase, or None if only already
        covered receivers remained

    Raises:
        ValueError: If the index is empty on entry
        SolverConsistencyError: If receivers remain but no transmitter can
            reach any of them
    """
    if index.is_empty():
        raise ValueError("greedy_step requires at least one uncovered receiver")

    swept = sweep_covered_receivers(index, power)
    if index.is_empty():
        return None

    pending = np.array(index.receiver_ids, dtype=np.int64)
    transmitter_ids = np.array(index.transmitter_ids, dtype=np.int64)
    required = index.required_increases(power)
    if required.size == 0:
        raise SolverConsistencyError(index.receiver_ids)

    smallest = int(required.min())
    hits = required == smallest
    column = _choose_column(hits, transmitter_ids, tie_break)
    if column < 0:
        raise SolverConsistencyError(index.receiver_ids)

    transmitter_id = int(transmitter_ids[column])
    new_power = power.increase(transmitter_id, smallest)
    covered = tuple(int(r) for r in pending[hits[:, column]])
    index.discard(covered)

    logger.debug(
        "Transmitter %d: +%d -> power %d, covers receivers %s (%d pending)",
        transmitter_id,
        smallest,
        new_power,
        list(covered),
        len(index),
    )
    return GreedyStepResult(
        transmitter_id=transmitter_id,
        increase=smallest,
        new_power=new_power,
        covered_receiver_ids=covered,
        swept_receiver_ids=swept,
    )


# ---------------------------------------------------------------------------
# Solution Assembly
# ---------------------------------------------------------------------------
def assemble_solution(
    instance: ProblemInstance,
    power: PowerState,
    receivers_with_initial_signal: int,
    steps: Sequence[GreedyStepResult] = (),
) -> Solution:
    """Build the report from the final power state."""
    return Solution(
        total_receivers=len(instance.receivers),
        receivers_with_initial_signal=receivers_with_initial_signal,
        power_increases=power.increased(),
        steps=tuple(steps),
    )


# ---------------------------------------------------------------------------
# Main Service: solve
# ---------------------------------------------------------------------------
def solve(
    instance: ProblemInstance, tie_break: TieBreak = TieBreak.LOWEST_ID
) -> Solution:
    """Compute the power increases that give every receiver a signal.

    Args:
        instance: Validated island with transmitters and receivers
        tie_break: Policy among transmitters covering equally many receivers

    Returns:
        Solution with the initial coverage count and every increased
        transmitter's new power, ascending by transmitter id

    Raises:
        SolverConsistencyError: If the greedy loop cannot make progress

    Example:
        >>> instance = ProblemInstance(
        ...     island=Island(width=10, height=10),
        ...     transmitters=(
        ...         Transmitter(id=1, x=2, y=5, initial_power=1),
        ...         Transmitter(id=2, x=0, y=6, initial_power=3),
        ...         Transmitter(id=3, x=1, y=2, initial_power=2),
        ...         Transmitter(id=4, x=3, y=5, initial_power=3),
        ...     ),
        ...     receivers=(
        ...         Receiver(id=1, x=0, y=1),
        ...         Receiver(id=2, x=8, y=8),
        ...         Receiver(id=3, x=6, y=5),
        ...     ),
        ... )
        >>> solution = solve(instance)
        >>> solution.increases
        {4: 5}
    """
    index, initial_covered = build_distance_index(
        instance.transmitters, instance.receivers
    )
    power = PowerState(instance.transmitters)

    steps: list[GreedyStepResult] = []
    while not index.is_empty():
        step = greedy_step(index, power, tie_break)
        if step is not None:
            steps.append(step)

    solution = assemble_solution(instance, power, initial_covered, steps)
    logger.info(
        "Solved: %d/%d receivers covered initially, %d transmitter(s) increased "
        "in %d step(s)",
        solution.receivers_with_initial_signal,
        solution.total_receivers,
        len(solution.power_increases),
        len(steps),
    )
    return solution
