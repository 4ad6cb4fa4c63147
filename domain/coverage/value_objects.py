"""Coverage Bounded Context - Value Objects.

Immutable data structures describing the island, its towers and the
computed power plan. All validation occurs at construction time via
Pydantic, so an instance that exists is an instance that is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Largest coordinate, dimension or power accepted in an instance (32-bit int)
MAX_VALUE = 2**31 - 1


class Island(BaseModel):
    """Rectangular grid the towers stand on (Value Object).

    Valid coordinates are 0 <= x < width and 0 <= y < height.
    """

    width: int = Field(gt=0, le=MAX_VALUE)
    height: int = Field(gt=0, le=MAX_VALUE)

    model_config = ConfigDict(frozen=True)

    def contains(self, x: int, y: int) -> bool:
        """Check if (x, y) lies on the island."""
        return 0 <= x < self.width and 0 <= y < self.height


class Transmitter(BaseModel):
    """Transmitting tower with its initial power (Value Object).

    The power it ends up with after solving lives in the solver's power
    state, never on this object.
    """

    id: int = Field(ge=1, le=MAX_VALUE)
    x: int = Field(ge=0, le=MAX_VALUE)
    y: int = Field(ge=0, le=MAX_VALUE)
    initial_power: int = Field(ge=0, le=MAX_VALUE)

    model_config = ConfigDict(frozen=True)


class Receiver(BaseModel):
    """Receiving tower (Value Object)."""

    id: int = Field(ge=1, le=MAX_VALUE)
    x: int = Field(ge=0, le=MAX_VALUE)
    y: int = Field(ge=0, le=MAX_VALUE)

    model_config = ConfigDict(frozen=True)


class ProblemInstance(BaseModel):
    """Validated island with its transmitters and receivers (Value Object).

    Invariants:
        PI-1: at least one transmitter and one receiver
        PI-2: transmitter ids are 1..n in order
        PI-3: receiver ids are 1..m in order
        PI-4: every tower lies on the island
    """

    island: Island
    transmitters: tuple[Transmitter, ...]
    receivers: tuple[Receiver, ...]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_instance(self) -> "ProblemInstance":
        # PI-1
        if not self.transmitters:
            raise ValueError("No transmitting towers")
        if not self.receivers:
            raise ValueError("No receiving towers")

        # PI-2, PI-3
        for expected, tx in enumerate(self.transmitters, start=1):
            if tx.id != expected:
                raise ValueError(
                    f"Transmitting tower id {tx.id} is out of sequence "
                    f"(expected {expected})"
                )
        for expected, rx in enumerate(self.receivers, start=1):
            if rx.id != expected:
                raise ValueError(
                    f"Receiving tower id {rx.id} is out of sequence "
                    f"(expected {expected})"
                )

        # PI-4
        for tx in self.transmitters:
            if not self.island.contains(tx.x, tx.y):
                raise ValueError(
                    f"Transmitting tower {tx.id} has invalid coordinates"
                )
        for rx in self.receivers:
            if not self.island.contains(rx.x, rx.y):
                raise ValueError(f"Receiving tower {rx.id} has invalid coordinates")

        return self

    def transmitter(self, transmitter_id: int) -> Transmitter:
        """Return the transmitter with the given id (ids are dense from 1)."""
        return self.transmitters[transmitter_id - 1]

    def receiver(self, receiver_id: int) -> Receiver:
        """Return the receiver with the given id (ids are dense from 1)."""
        return self.receivers[receiver_id - 1]


class DistanceRecord(BaseModel):
    """Distance from an uncovered receiver to one transmitter (Value Object)."""

    transmitter_id: int = Field(ge=1)
    distance: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class PowerIncrease(BaseModel):
    """New power of a single transmitter (Value Object)."""

    transmitter_id: int = Field(ge=1)
    new_power: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class GreedyStepResult(BaseModel):
    """Outcome of one greedy power increase (Value Object).

    Fields:
        transmitter_id: Transmitter whose power was raised
        increase: Amount added to its power (always > 0)
        new_power: Its power after the increase
        covered_receiver_ids: Receivers brought into range by this increase
        swept_receiver_ids: Receivers found already in range before
            choosing, removed without any increase
    """

    transmitter_id: int = Field(ge=1)
    increase: int = Field(gt=0)
    new_power: int = Field(gt=0)
    covered_receiver_ids: tuple[int, ...]
    swept_receiver_ids: tuple[int, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_step(self) -> "GreedyStepResult":
        if not self.covered_receiver_ids:
            raise ValueError("A greedy step must cover at least one receiver")
        return self


class Solution(BaseModel):
    """Report of the computed power plan (Value Object).

    Invariants:
        SO-1: 0 <= receivers_with_initial_signal <= total_receivers
        SO-2: power_increases strictly ordered by transmitter_id
    """

    total_receivers: int = Field(gt=0)
    receivers_with_initial_signal: int = Field(ge=0)
    power_increases: tuple[PowerIncrease, ...]
    steps: tuple[GreedyStepResult, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_solution(self) -> "Solution":
        # SO-1
        if self.receivers_with_initial_signal > self.total_receivers:
            raise ValueError(
                f"receivers_with_initial_signal={self.receivers_with_initial_signal} "
                f"exceeds total_receivers={self.total_receivers}"
            )

        # SO-2
        ids = [p.transmitter_id for p in self.power_increases]
        for i in range(1, len(ids)):
            if ids[i] <= ids[i - 1]:
                raise ValueError("Power increases must be ordered by transmitter id")

        return self

    @property
    def increases(self) -> dict[int, int]:
        """Mapping transmitter_id -> new_power, ascending by id."""
        return {p.transmitter_id: p.new_power for p in self.power_increases}
