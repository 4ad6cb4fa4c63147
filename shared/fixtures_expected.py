"""Single source of truth for expected instance file fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/infrastructure/test_fixtures_sanity.py (existence verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY these lists.
"""

from __future__ import annotations

# Instances that parse and solve
VALID_FIXTURES: list[str] = sorted(
    [
        "already_covered.txt",  # One transmitter already reaching its receiver
        "example.txt",  # Worked example: 2/3 covered, transmitter 4 -> 5
        "more_receivers.txt",  # Equal increase, one transmitter reaches more
        "multiple_increases.txt",  # Two transmitters need more power
        "smallest_increase.txt",  # One transmitter needs a smaller increase
    ]
)

# Instances the text adapter must reject
INVALID_FIXTURES: list[str] = sorted(
    [
        "first_receiver_id_not_1.txt",
        "invalid_dimensions.txt",
        "no_receivers.txt",
        "no_towers.txt",
        "non_integer_field.txt",
        "receiver_coordinates_wrong.txt",
        "receiver_id_out_of_sequence.txt",
        "receiver_wrong_parameters.txt",
        "transmitter_coordinates_wrong.txt",
        "transmitter_id_not_1.txt",
        "transmitter_wrong_parameters.txt",
    ]
)

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(VALID_FIXTURES + INVALID_FIXTURES)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
