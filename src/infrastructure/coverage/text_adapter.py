"""Text file adapter for ProblemRepository.

Implements loading of problem instances from the whitespace-separated
text format and returns a validated ProblemInstance Value Object.

Format:
    W H                  island dimensions
    id x y power         transmitters, while ids continue 1, 2, 3, ...
    id x y               receivers, from the first line that breaks the
                         transmitter sequence, ids 1, 2, 3, ...

Lifecycle:
1) Check the file exists and fits the optional size budget
2) Read the text (file name only in errors and logs)
3) Parse rows of integers, skipping blank lines
4) Validate dimensions, then transmitters, then receivers
5) Return ProblemInstance (construction re-checks all invariants)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from domain.coverage.errors import InvalidInstanceError
from domain.coverage.value_objects import Island, ProblemInstance, Receiver, Transmitter

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _build(model: type[_ModelT], context: str, **fields: Any) -> _ModelT:
    """Construct a value object, translating validation failures."""
    try:
        return model(**fields)
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise InvalidInstanceError(f"{context}: {details}") from e


def _rows(text: str) -> Iterator[list[int]]:
    """Yield each non-blank line as a list of integers."""
    for lineno, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        try:
            yield [int(f) for f in fields]
        except ValueError as e:
            raise InvalidInstanceError(
                f"Line {lineno}: expected integers, got {line.strip()!r}"
            ) from e


class TextInstanceAdapter:
    """Infrastructure adapter for loading problem instances from text files.

    Parameters
    ----------
    max_bytes: int | None
        Optional size budget for the input file. Files larger than this are
        rejected with InvalidInstanceError before being read.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self.max_bytes = max_bytes

    def load_instance(self, file_path: Path | str) -> ProblemInstance:
        """Load and validate a problem instance from a text file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        try:
            st = path.stat()
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise InvalidInstanceError(
                    f"File size {st.st_size}B exceeds budget {self.max_bytes}B"
                )
        except OSError as e:
            # Log only filename, errno and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to stat %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            text = path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise PermissionError(path.name) from e
        except UnicodeDecodeError as e:
            raise InvalidInstanceError(f"{path.name} is not a text file") from e

        instance = self.parse_instance(text)
        logger.debug(
            "Instance %s: %dx%d island, %d transmitters, %d receivers",
            path.name,
            instance.island.width,
            instance.island.height,
            len(instance.transmitters),
            len(instance.receivers),
        )
        return instance

    def parse_instance(self, text: str) -> ProblemInstance:
        """Parse and validate a problem instance from its text form.

        Raises:
            InvalidInstanceError: On any structural or value violation
        """
        rows = _rows(text)

        # Dimensions of island
        dimensions = next(rows, None)
        if dimensions is None or len(dimensions) != 2:
            raise InvalidInstanceError(
                "Invalid dimensions for island: must be 2 integers"
            )
        island = _build(
            Island,
            "Invalid dimensions for island",
            width=dimensions[0],
            height=dimensions[1],
        )

        # Transmitters: an id out of sequence starts the receivers
        row = next(rows, None)
        if row is None:
            raise InvalidInstanceError("No transmitting towers")
        if row[0] != 1:
            raise InvalidInstanceError("First transmitting tower must have id of 1")

        transmitters: list[Transmitter] = []
        while row is not None and row[0] == len(transmitters) + 1:
            if len(row) != 4:
                raise InvalidInstanceError(
                    f"Transmitting tower {row[0]} must have 4 parameters"
                )
            if not island.contains(row[1], row[2]):
                raise InvalidInstanceError(
                    f"Transmitting tower {row[0]} has invalid coordinates"
                )
            transmitters.append(
                _build(
                    Transmitter,
                    f"Transmitting tower {row[0]}",
                    id=row[0],
                    x=row[1],
                    y=row[2],
                    initial_power=row[3],
                )
            )
            row = next(rows, None)

        # Receivers
        if row is None:
            raise InvalidInstanceError("No receiving towers")
        if row[0] != 1:
            raise InvalidInstanceError(
                f"First receiving tower {row[0]} must have id of 1"
            )

        receivers: list[Receiver] = []
        while row is not None:
            if row[0] != len(receivers) + 1:
                raise InvalidInstanceError(
                    f"Receiving tower id {row[0]} is out of sequence"
                )
            if len(row) != 3:
                raise InvalidInstanceError(
                    f"Receiving tower {row[0]} must have 3 parameters"
                )
            if not island.contains(row[1], row[2]):
                raise InvalidInstanceError(
                    f"Receiving tower {row[0]} has invalid coordinates"
                )
            receivers.append(
                _build(
                    Receiver, f"Receiving tower {row[0]}", id=row[0], x=row[1], y=row[2]
                )
            )
            row = next(rows, None)

        return _build(
            ProblemInstance,
            "Invalid problem instance",
            island=island,
            transmitters=tuple(transmitters),
            receivers=tuple(receivers),
        )
