"""Tests for serial number generation and batching."""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from energygrid.devices import generate_serial_numbers, make_batches  # noqa: E402


def test_serial_numbers_are_zero_padded():
    serials = generate_serial_numbers(500)
    assert len(serials) == 500
    assert serials[0] == "SN-000"
    assert serials[9] == "SN-009"
    assert serials[-1] == "SN-499"


def test_serial_numbers_widen_past_999():
    assert generate_serial_numbers(1001)[-1] == "SN-1000"


def test_no_serial_numbers():
    assert generate_serial_numbers(0) == []


@pytest.mark.parametrize("n", [0, 1, 9, 10, 11, 25, 100, 499, 500])
@pytest.mark.parametrize("k", [1, 3, 10])
def test_batching_properties(n, k):
    items = generate_serial_numbers(n)
    batches = make_batches(items, k)

    assert len(batches) == math.ceil(n / k)
    assert all(len(b) == k for b in batches[:-1])
    if batches:
        assert 1 <= len(batches[-1]) <= k
    assert [sn for b in batches for sn in b] == items


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        make_batches(["SN-000"], 0)
