import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK_32


def mulberry32(seed: int) -> Callable[[], float]:
    """
    Seeded float source in [0, 1). Every call starts a fresh sequence,
    so the same seed always replays the same numbers.
    """
    state = int(seed) & MASK_32

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK_32
        t = _imul(state ^ (state >> 15), state | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / 4294967296

    return next_float


def random_source(seed: int | None = None) -> Callable[[], float]:
    if seed is None:
        return random.random
    return mulberry32(int(seed))


def shuffle(items: Sequence[T], seed: int | None = None) -> list[T]:
    out = list(items)
    rnd = random_source(seed)
    for i in range(len(out) - 1, 0, -1):
        j = int(rnd() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
