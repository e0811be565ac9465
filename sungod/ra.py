"""Xorwow pseudorandom number generator.

A simple and slim generator: four 64-bit words of xorshift state plus a
Weyl counter that keeps the sequence out of short cycles. Fast, seedable,
bit-reproducible across platforms.

NOTE: This generator is not at all suitable for cryptographic use.

Typed values come from recipe classes in ``sample.py``::

    from sungod.ra import Ra
    from sungod.sample import U64

    ra = Ra.default()
    assert ra.sample(U64) != ra.sample(U64)
"""

from __future__ import annotations

from typing import Protocol, TypeVar

MASK64 = 0xFFFFFFFFFFFFFFFF

DEFAULT_RANDOM_SEED = 0xCAFEBABEDEADBEEF

T_co = TypeVar("T_co", covariant=True)


class Sample(Protocol[T_co]):
    """How to make a value of some type from raw ``next_word`` draws."""

    @classmethod
    def sample(cls, ra: Ra) -> T_co: ...


class Ra:
    """Holds all the random state. Instance as many as you want.

    Instances behave as plain values: ``clone()`` (or ``copy.copy``) gives
    an independent generator that continues with the same output.
    """

    _SEED_MIX = (
        0x70A7A712EAF07AA2,
        0xE96A320D4BC6BDDB,
        0xBC78C1658C9333BF,
        0xBE5B64076E942A9E,
    )
    _WEYL_STEP = 362437

    __slots__ = ("state", "counter")

    def __init__(self, seed: int = DEFAULT_RANDOM_SEED) -> None:
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise TypeError(f"seed must be an int, got {type(seed).__name__}")
        if not 0 <= seed <= MASK64:
            raise ValueError(f"seed {seed!r} does not fit in 64 unsigned bits")
        self.state: tuple[int, int, int, int] = tuple(  # type: ignore[assignment]
            c ^ seed for c in self._SEED_MIX
        )
        self.counter: int = 100

    @classmethod
    def default(cls) -> Ra:
        return cls(DEFAULT_RANDOM_SEED)

    def next_word(self) -> int:
        """The random source: advance the state and return a 64-bit word."""
        s, s1, s2, t = self.state

        t ^= t >> 2
        t ^= (t << 2) & MASK64
        t ^= s ^ ((s << 4) & MASK64)
        self.state = (t, s, s1, s2)

        self.counter = (self.counter + self._WEYL_STEP) & MASK64
        return (t + self.counter) & MASK64

    xorwow = next_word

    def sample(self, ty: type[Sample[T_co]]) -> T_co:
        """Return a random value built by the recipe ``ty``."""
        recipe = getattr(ty, "sample", None)
        if recipe is None:
            raise TypeError(f"{ty!r} has no sample recipe")
        return recipe(self)

    def clone(self) -> Ra:
        other = type(self).__new__(type(self))
        other.state = self.state
        other.counter = self.counter
        return other

    def __copy__(self) -> Ra:
        return self.clone()

    def __deepcopy__(self, memo: dict) -> Ra:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ra):
            return NotImplemented
        return self.state == other.state and self.counter == other.counter

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        words = ", ".join(f"0x{w:016X}" for w in self.state)
        return f"Ra(state=({words}), counter=0x{self.counter:016X})"
