"""Recipes that turn raw ``Ra.next_word`` draws into typed values.

Each recipe is a class with a ``sample(ra)`` classmethod, so the recipe
that runs is picked by the class the caller passes to ``Ra.sample``:

  * ``Bool`` — one draw, ``True`` iff bit 5 of the word is clear.
  * ``U8`` .. ``U64``, ``I8`` .. ``I64``, ``USize``, ``ISize`` — one draw,
    truncated to the width and, for signed types, read as two's complement.
  * ``U128``, ``I128`` — two draws, the first is the high half.
  * ``F32``, ``F64`` — one draw divided by ``2**64 - 1``, both converted to
    the float width first. Rounding can land on exactly ``1.0`` for words
    near the top of the range; that is left as is.

Supporting more exotic types is up to the caller: write a class with a
``sample(cls, ra)`` classmethod that uses one or two draws.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from .ra import MASK64

if TYPE_CHECKING:
    from .ra import Ra

# Width of the interpreter's pointers (64 on any current desktop build).
POINTER_BITS = sys.maxsize.bit_length() + 1

_BOOL_BIT = 0b100000
_F32_MANTISSA_BITS = 24


class Bool:
    @classmethod
    def sample(cls, ra: Ra) -> bool:
        return ra.next_word() & _BOOL_BIT == 0


class _Int:
    """Fixed-width integer recipe, configured through class keywords."""

    BITS: ClassVar[int]
    SIGNED: ClassVar[bool]
    MIN: ClassVar[int]
    MAX: ClassVar[int]
    _DRAWS: ClassVar[int] = 1

    def __init_subclass__(
        cls, bits: int = 0, signed: bool = False, **kwargs
    ) -> None:
        super().__init_subclass__(**kwargs)
        if not bits:
            return
        cls.BITS = bits
        cls.SIGNED = signed
        if signed:
            cls.MIN = -(1 << (bits - 1))
            cls.MAX = (1 << (bits - 1)) - 1
        else:
            cls.MIN = 0
            cls.MAX = (1 << bits) - 1

    @classmethod
    def from_bits(cls, word: int) -> int:
        """Truncate/reinterpret a raw draw without advancing any generator.

        ``word`` is one 64-bit draw, or for 128-bit types the two draws
        already combined as ``high << 64 | low``.
        """
        raw_bits = 64 * cls._DRAWS
        if not 0 <= word < 1 << raw_bits:
            raise ValueError(
                f"{cls.__name__} expects a {raw_bits}-bit raw word, got {word!r}"
            )
        value = word & ((1 << cls.BITS) - 1)
        if cls.SIGNED and value > cls.MAX:
            value -= 1 << cls.BITS
        return value

    @classmethod
    def sample(cls, ra: Ra) -> int:
        return cls.from_bits(ra.next_word())


class _WideInt(_Int):
    _DRAWS = 2

    @classmethod
    def sample(cls, ra: Ra) -> int:
        high = ra.next_word()
        low = ra.next_word()
        return cls.from_bits(high << 64 | low)


class U8(_Int, bits=8):
    pass


class I8(_Int, bits=8, signed=True):
    pass


class U16(_Int, bits=16):
    pass


class I16(_Int, bits=16, signed=True):
    pass


class U32(_Int, bits=32):
    pass


class I32(_Int, bits=32, signed=True):
    pass


class U64(_Int, bits=64):
    pass


class I64(_Int, bits=64, signed=True):
    pass


class USize(_Int, bits=POINTER_BITS):
    pass


class ISize(_Int, bits=POINTER_BITS, signed=True):
    pass


class U128(_WideInt, bits=128):
    pass


class I128(_WideInt, bits=128, signed=True):
    pass


def u64_to_f32(word: int) -> np.float32:
    """Convert a 64-bit word to float32, rounding once to nearest-even.

    Going through a Python float first would round twice (to 53 bits, then
    to 24) and can disagree with a direct integer-to-single conversion.
    """
    extra = word.bit_length() - _F32_MANTISSA_BITS
    if extra > 0:
        top, rest = divmod(word, 1 << extra)
        half = 1 << (extra - 1)
        if rest > half or (rest == half and top & 1):
            top += 1
        word = top << extra
    # At most 25 significant bits remain, so both conversions are exact.
    return np.float32(float(word))


class F32:
    @classmethod
    def sample(cls, ra: Ra) -> np.float32:
        return u64_to_f32(ra.next_word()) / u64_to_f32(MASK64)


class F64:
    @classmethod
    def sample(cls, ra: Ra) -> float:
        return float(ra.next_word()) / float(MASK64)
