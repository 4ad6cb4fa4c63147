#!/usr/bin/env python3
"""Generate text instance fixtures for the coverage tests.

This script writes every instance file used by the adapter and CLI tests:
the solvable scenarios and one file per input rejection rule.

Usage:
    python scripts/gen_fixtures.py

Output:
    tests/fixtures/*.txt

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


def write_instance(name: str, lines: list[str]) -> None:
    """Write one instance file, newline-terminated."""
    path = FIXTURES_DIR / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"  Created: {path.name} ({len(lines)} lines)")


# =============================================================================
# Solvable Instances
# =============================================================================
def gen_valid() -> None:
    """Scenarios with known solutions (asserted in tests/coverage)."""
    # 2/3 covered initially; transmitter 4 -> 5
    write_instance(
        "example.txt",
        [
            "10 10",
            "1 2 5 1",
            "2 0 6 3",
            "3 1 2 2",
            "4 3 5 3",
            "1 0 1",
            "2 8 8",
            "3 6 5",
        ],
    )
    # Transmitter 2 needs +1, transmitter 1 needs +2; 2 -> 3
    write_instance(
        "smallest_increase.txt",
        ["10 10", "1 1 6 1", "2 7 6 2", "1 4 8", "2 4 4"],
    )
    # Both need +1; transmitter 2 then reaches both receivers; 2 -> 2
    write_instance(
        "more_receivers.txt",
        ["6 6", "1 1 4 1", "2 3 4 1", "1 2 2", "2 4 2"],
    )
    # 2 -> 2, then 3 -> 3
    write_instance(
        "multiple_increases.txt",
        ["10 10", "1 1 4 1", "2 3 4 1", "3 6 3 1", "1 2 2", "2 4 2", "3 9 0"],
    )
    # Nothing to increase
    write_instance("already_covered.txt", ["5 5", "1 2 2 1", "1 3 3"])


# =============================================================================
# Rejected Instances
# =============================================================================
def gen_invalid() -> None:
    """One file per input rejection rule."""
    write_instance(
        "invalid_dimensions.txt",
        ["10 10 11", "1 1 4 1", "2 3 4 1", "1 2 2", "2 4 2"],
    )
    write_instance("no_towers.txt", ["10 10"])
    write_instance(
        "transmitter_id_not_1.txt",
        ["10 10", "2 1 4 1", "3 3 4 1", "1 2 2", "2 4 2"],
    )
    write_instance(
        "transmitter_wrong_parameters.txt",
        ["10 10", "1 1 4", "2 3 4 1", "1 2 2", "2 4 2"],
    )
    write_instance(
        "transmitter_coordinates_wrong.txt",
        ["10 10", "1 1 10 1", "2 3 4 1", "1 2 2", "2 4 2"],
    )
    write_instance("no_receivers.txt", ["10 10", "1 1 4 1", "2 3 4 1"])
    write_instance(
        "first_receiver_id_not_1.txt",
        ["10 10", "1 1 4 1", "2 3 4 1", "2 2 2", "3 4 2"],
    )
    write_instance(
        "receiver_coordinates_wrong.txt",
        ["10 10", "1 1 4 1", "2 3 4 1", "1 2 2", "2 10 2"],
    )
    write_instance(
        "receiver_wrong_parameters.txt",
        ["10 10", "1 1 4 1", "2 3 4 1", "1 2 2 6", "2 4 2"],
    )
    write_instance(
        "receiver_id_out_of_sequence.txt",
        ["10 10", "1 1 4 1", "2 3 4 1", "1 2 2", "2 4 2", "4 4 2"],
    )
    write_instance(
        "non_integer_field.txt",
        ["10 ten", "1 1 4 1", "1 2 2"],
    )


# =============================================================================
# Main
# =============================================================================
def main() -> int:
    """Generate all fixtures.

    Returns:
        0 on success, 1 on failure
    """
    print("=" * 60)
    print("Generating Instance Fixtures")
    print("=" * 60)

    try:
        ensure_dir()
    except OSError as e:
        print(f"ERROR: Cannot create fixtures directory: {e}")
        return 1
    print()

    print("Solvable instances")
    gen_valid()

    print("\nRejected instances")
    gen_invalid()

    # Verify generated fixtures match expected list exactly
    found_set = {f.name for f in FIXTURES_DIR.iterdir() if f.suffix == ".txt"}
    expected_set = set(EXPECTED_FIXTURES)

    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        missing = expected_set - found_set
        extra = found_set - expected_set
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
