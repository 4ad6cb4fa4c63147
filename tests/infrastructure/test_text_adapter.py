"""Tests for the text instance adapter.

Parsing tests use in-memory text via `parse_instance`; file handling tests
write to `tmp_path`. Rejection messages mirror the rules listed in the
module docstring of text_adapter.
"""

from __future__ import annotations

import logging

import pytest

from domain.coverage.errors import InvalidInstanceError
from domain.coverage.value_objects import Island, Receiver, Transmitter
from infrastructure.coverage.text_adapter import TextInstanceAdapter

EXAMPLE = "10 10\n1 2 5 1\n2 0 6 3\n3 1 2 2\n4 3 5 3\n1 0 1\n2 8 8\n3 6 5"


# ===========================================================================
# Parsing: Happy Path
# ===========================================================================
def test_parse_example():
    instance = TextInstanceAdapter().parse_instance(EXAMPLE)

    assert instance.island == Island(width=10, height=10)
    assert len(instance.transmitters) == 4
    assert len(instance.receivers) == 3
    assert instance.transmitters[0] == Transmitter(id=1, x=2, y=5, initial_power=1)
    assert instance.receivers[-1] == Receiver(id=3, x=6, y=5)


def test_parse_ignores_blank_lines_and_extra_whitespace():
    text = "\n  6 6  \n1 1 4 1\n\n2   3 4 1\n1 2 2\n2 4 2\n\n"

    instance = TextInstanceAdapter().parse_instance(text)

    assert [t.id for t in instance.transmitters] == [1, 2]
    assert [r.id for r in instance.receivers] == [1, 2]


def test_parse_single_transmitter_single_receiver():
    instance = TextInstanceAdapter().parse_instance("5 5\n1 2 2 1\n1 3 3\n")

    assert instance.transmitters == (Transmitter(id=1, x=2, y=2, initial_power=1),)
    assert instance.receivers == (Receiver(id=1, x=3, y=3),)


def test_parse_edge_coordinates():
    instance = TextInstanceAdapter().parse_instance("3 2\n1 2 1 0\n1 0 0\n")

    assert instance.transmitters[0].x == 2
    assert instance.transmitters[0].y == 1


# ===========================================================================
# Parsing: Rejections
# ===========================================================================
@pytest.mark.parametrize(
    "text,message",
    [
        pytest.param(
            "10 10 11\n1 1 4 1\n2 3 4 1\n1 2 2\n2 4 2\n",
            "Invalid dimensions for island: must be 2 integers",
            id="three-dimensions",
        ),
        pytest.param("", "Invalid dimensions", id="empty"),
        pytest.param("0 10\n1 1 4 1\n1 2 2\n", "Invalid dimensions", id="zero-width"),
        pytest.param("10 10", "No transmitting towers", id="no-towers"),
        pytest.param(
            "10 10\n2 1 4 1\n3 3 4 1\n1 2 2\n2 4 2\n",
            "First transmitting tower must have id of 1",
            id="transmitter-id-not-1",
        ),
        pytest.param(
            "10 10\n1 1 4\n2 3 4 1\n1 2 2\n2 4 2\n",
            "Transmitting tower 1 must have 4 parameters",
            id="transmitter-wrong-parameters",
        ),
        pytest.param(
            "10 10\n1 1 10 1\n2 3 4 1\n1 2 2\n2 4 2\n",
            "Transmitting tower 1 has invalid coordinates",
            id="transmitter-coordinates",
        ),
        pytest.param(
            "10 10\n1 -1 4 1\n1 2 2\n",
            "Transmitting tower 1 has invalid coordinates",
            id="transmitter-negative-coordinate",
        ),
        pytest.param(
            "10 10\n1 1 4 -2\n1 2 2\n",
            "Transmitting tower 1",
            id="transmitter-negative-power",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n", "No receiving towers", id="no-receivers"
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n2 2 2\n3 4 2\n",
            "First receiving tower 2 must have id of 1",
            id="receiver-id-not-1",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n1 2 2\n2 10 2\n",
            "Receiving tower 2 has invalid coordinates",
            id="receiver-coordinates",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n1 2 2 6\n2 4 2\n",
            "Receiving tower 1 must have 3 parameters",
            id="receiver-wrong-parameters",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n1 2 2\n2 4 2\n4 4 2\n",
            "Receiving tower id 4 is out of sequence",
            id="receiver-out-of-sequence",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n2 3 4 1\n1 2 2\n2 4 2\n3 4 2 7\n",
            "Receiving tower 3 must have 3 parameters",
            id="receiver-extra-field-later",
        ),
        pytest.param(
            f"{2**64} 10\n1 1 4 1\n1 2 2\n",
            "Invalid dimensions for island",
            id="oversized-dimension",
        ),
        pytest.param(
            f"10 10\n1 1 4 {2**31}\n1 2 2\n",
            "Transmitting tower 1: Input should be less than or equal to",
            id="oversized-power",
        ),
        pytest.param(
            "10 ten\n1 1 4 1\n1 2 2\n",
            "Line 1: expected integers",
            id="non-integer-dimension",
        ),
        pytest.param(
            "10 10\n1 1 4 1\n1 2.5 2\n",
            "Line 3: expected integers",
            id="non-integer-coordinate",
        ),
    ],
)
def test_parse_rejects(text, message):
    with pytest.raises(InvalidInstanceError, match=message):
        TextInstanceAdapter().parse_instance(text)


def test_transmitter_line_continuing_sequence_with_receiver_shape_is_rejected():
    # "3 4 2" continues the transmitter ids, so it is read as a transmitter
    text = "10 10\n1 1 4 1\n2 3 4 1\n3 4 2\n1 2 2\n"

    with pytest.raises(InvalidInstanceError, match="Transmitting tower 3 must have 4"):
        TextInstanceAdapter().parse_instance(text)


def test_validation_error_is_chained():
    with pytest.raises(InvalidInstanceError) as exc_info:
        TextInstanceAdapter().parse_instance("0 10\n1 1 4 1\n1 2 2\n")

    assert exc_info.value.__cause__ is not None


# ===========================================================================
# File Loading
# ===========================================================================
def test_load_instance_from_file(tmp_path, caplog):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    with caplog.at_level(logging.DEBUG, logger="infrastructure.coverage.text_adapter"):
        instance = TextInstanceAdapter().load_instance(p)

    assert len(instance.receivers) == 3
    # Log only filename, never the full path
    assert any("input.txt" in r.getMessage() for r in caplog.records)
    assert all(str(tmp_path) not in r.getMessage() for r in caplog.records)


def test_load_instance_accepts_str_path(tmp_path):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    instance = TextInstanceAdapter().load_instance(str(p))

    assert len(instance.transmitters) == 4


def test_file_not_found_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TextInstanceAdapter().load_instance(tmp_path / "missing.txt")


def test_size_budget_exceeded_raises(tmp_path):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    with pytest.raises(InvalidInstanceError, match="exceeds budget 10B"):
        TextInstanceAdapter(max_bytes=10).load_instance(p)


def test_size_budget_respected(tmp_path):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    instance = TextInstanceAdapter(max_bytes=1024).load_instance(p)

    assert len(instance.receivers) == 3


def test_binary_file_rejected(tmp_path):
    p = tmp_path / "input.txt"
    p.write_bytes(b"\xff\xfe\x00\x81")

    with pytest.raises(InvalidInstanceError, match="not a text file"):
        TextInstanceAdapter().load_instance(p)


def test_permission_error_reports_filename_only(tmp_path, monkeypatch):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    def _raise_permission_error(self, *args, **kwargs):
        raise PermissionError("permission denied")

    monkeypatch.setattr("pathlib.Path.read_text", _raise_permission_error)

    with pytest.raises(PermissionError) as exc_info:
        TextInstanceAdapter().load_instance(p)

    assert str(exc_info.value) == "input.txt"


def test_stat_error_is_logged_and_reraised(tmp_path, monkeypatch, caplog):
    p = tmp_path / "input.txt"
    p.write_text(EXAMPLE, encoding="utf-8")

    def _failing_stat(self, *args, **kwargs):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr("pathlib.Path.exists", lambda self: True)
    monkeypatch.setattr("pathlib.Path.stat", _failing_stat)

    with caplog.at_level(logging.ERROR, logger="infrastructure.coverage.text_adapter"):
        with pytest.raises(OSError):
            TextInstanceAdapter().load_instance(p)

    assert any("Failed to stat input.txt" in r.getMessage() for r in caplog.records)
