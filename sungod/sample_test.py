"""Tests for the typed sampling recipes.

The statistical tests draw a million values from the default seed. They are
deterministic for that seed, but the bounds are loose on purpose: they check
the shape of the output, not exact counts.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from sungod.ra import DEFAULT_RANDOM_SEED, MASK64, Ra
from sungod.sample import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    POINTER_BITS,
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    ISize,
    USize,
    u64_to_f32,
)

NUM_SAMPLES = 1_000_000

_NARROW = [U8, I8, U16, I16, U32, I32, U64, I64, USize, ISize]


def _max_word_ra():
    """A generator whose next draw is exactly 2**64 - 1."""
    ra = Ra()
    ra.state = (0, 0, 0, 0)
    ra.counter = MASK64 - 362437
    return ra


# --- integer recipes ---


@pytest.mark.parametrize("ty", _NARROW, ids=lambda t: t.__name__)
def test_narrow_sample_uses_one_draw(ty):
    ra = Ra(12345)
    twin = ra.clone()
    for _ in range(100):
        assert ra.sample(ty) == ty.from_bits(twin.next_word())
    assert ra == twin


@pytest.mark.parametrize("ty", _NARROW + [U128, I128], ids=lambda t: t.__name__)
def test_samples_stay_in_range(ty):
    ra = Ra()
    for _ in range(1000):
        assert ty.MIN <= ra.sample(ty) <= ty.MAX


def test_limits():
    assert (U8.MIN, U8.MAX) == (0, 255)
    assert (I8.MIN, I8.MAX) == (-128, 127)
    assert (I16.MIN, I16.MAX) == (-32768, 32767)
    assert U32.MAX == 0xFFFFFFFF
    assert (I64.MIN, I64.MAX) == (-(1 << 63), (1 << 63) - 1)
    assert U128.MAX == (1 << 128) - 1
    assert USize.BITS == ISize.BITS == POINTER_BITS
    assert ISize.SIGNED and not USize.SIGNED


def test_from_bits_truncates():
    assert U8.from_bits(0x1FF) == 0xFF
    assert U16.from_bits(0xABCD1234) == 0x1234
    assert U32.from_bits(MASK64) == 0xFFFFFFFF
    assert U64.from_bits(MASK64) == MASK64


def test_from_bits_twos_complement():
    assert I8.from_bits(0x7F) == 127
    assert I8.from_bits(0x80) == -128
    assert I8.from_bits(0xFF) == -1
    assert I16.from_bits(0x12348000) == -32768
    assert I32.from_bits(0xFFFFFFFE) == -2
    assert I64.from_bits(MASK64) == -1
    assert I64.from_bits(1 << 63) == -(1 << 63)
    assert I128.from_bits(1 << 127) == -(1 << 127)
    assert I128.from_bits((1 << 128) - 1) == -1


def test_from_bits_rejects_out_of_range_words():
    with pytest.raises(ValueError):
        U8.from_bits(1 << 64)
    with pytest.raises(ValueError):
        I64.from_bits(-1)
    with pytest.raises(ValueError):
        U128.from_bits(1 << 128)
    assert U128.from_bits(1 << 64) == 1 << 64


def test_negative_random():
    ra = Ra(DEFAULT_RANDOM_SEED)
    assert any(ra.sample(I64) < 0 for _ in range(10))


# --- 128-bit recipes ---


def test_u128_high_word_first():
    ra = Ra(2024)
    twin = ra.clone()
    for _ in range(50):
        value = ra.sample(U128)
        high = twin.next_word()
        low = twin.next_word()
        assert value == (high << 64) | low
    assert ra == twin


def test_i128_high_word_first():
    ra = Ra(2024)
    twin = ra.clone()
    saw_negative = False
    for _ in range(50):
        value = ra.sample(I128)
        combined = (twin.next_word() << 64) | twin.next_word()
        expected = combined - (1 << 128) if combined >> 127 else combined
        assert value == expected
        saw_negative |= value < 0
    assert saw_negative


# --- bool recipe ---


def test_bool_is_bit_five_clear():
    ra = Ra(77)
    twin = ra.clone()
    seen = set()
    for _ in range(1000):
        value = ra.sample(Bool)
        assert value is (twin.next_word() & 0b100000 == 0)
        seen.add(value)
    assert seen == {True, False}


def test_bool_is_balanced():
    ra = Ra()
    trues = sum(ra.sample(Bool) for _ in range(100_000))
    assert 0.48 < trues / 100_000 < 0.52


# --- float recipes ---


def test_f64_divides_by_max_word():
    ra = Ra(5)
    twin = ra.clone()
    for _ in range(100):
        assert ra.sample(F64) == float(twin.next_word()) / 2.0**64


def test_f32_divides_by_max_word():
    ra = Ra(5)
    twin = ra.clone()
    for _ in range(100):
        value = ra.sample(F32)
        assert isinstance(value, np.float32)
        assert value == u64_to_f32(twin.next_word()) / np.float32(2.0**64)
        assert 0.0 <= value <= 1.0


def test_u64_to_f32_rounds_once():
    assert u64_to_f32(0) == np.float32(0.0)
    assert u64_to_f32(MASK64) == np.float32(2.0**64)
    # Ties go to the even mantissa.
    assert u64_to_f32((1 << 24) + 1) == np.float32(1 << 24)
    assert u64_to_f32((1 << 24) + 3) == np.float32((1 << 24) + 4)
    # Rounding through a 53-bit double first would land on the tie and
    # round down to 2**63.
    assert u64_to_f32((1 << 63) + (1 << 39) + 1) == np.float32(
        2.0**63 + 2.0**40
    )


def test_top_word_rounds_to_one():
    assert _max_word_ra().sample(F64) == 1.0
    assert _max_word_ra().sample(F32) == np.float32(1.0)


def test_valid_float_range():
    ra = Ra(DEFAULT_RANDOM_SEED)
    for _ in range(NUM_SAMPLES):
        sample = ra.sample(F64)
        assert 0.0 <= sample < 1.0


def test_edge_coverage():
    ra = Ra(DEFAULT_RANDOM_SEED)
    count = 0
    for _ in range(NUM_SAMPLES):
        sample = ra.sample(F64)
        if sample < 0.05 or 0.95 < sample:
            count += 1
    expected = NUM_SAMPLES // 10
    assert expected // 2 < count < 2 * expected


def test_split():
    ra = Ra(DEFAULT_RANDOM_SEED)
    count = sum(ra.sample(F64) <= 0.5 for _ in range(NUM_SAMPLES))
    assert NUM_SAMPLES * 0.45 < count < NUM_SAMPLES * 0.55


# --- distribution ---


def test_random_enough():
    ra = Ra(DEFAULT_RANDOM_SEED)
    samples = np.fromiter(
        (ra.sample(U8) for _ in range(NUM_SAMPLES)),
        dtype=np.uint8,
        count=NUM_SAMPLES,
    )
    histogram = np.bincount(samples, minlength=256)
    assert histogram.shape == (256,)

    # mu = n * p, var = n * p * (1 - p). 5 sd is a lot of slack.
    mean = NUM_SAMPLES / 256
    sd = math.sqrt(mean * (1 - 1 / 256))
    assert histogram.min() > mean - 5 * sd
    assert histogram.max() < mean + 5 * sd


# --- user recipes ---


class _Dice:
    @classmethod
    def sample(cls, ra: Ra) -> int:
        return 1 + U64.sample(ra) % 6


def test_user_recipe():
    ra = Ra(3)
    rolls = {ra.sample(_Dice) for _ in range(200)}
    assert rolls == {1, 2, 3, 4, 5, 6}
