import math
import secrets
from typing import Tuple, Union

import numpy as np

SEED_BYTES = 32
PHILOX_BUFFER_SIZE = 4
_WORD_BITS = 64
_HALF_BITS = SEED_BYTES * 4
_HALF_MASK = (1 << _HALF_BITS) - 1
_COUNTER_SPAN = 1 << (SEED_BYTES * 8)

SeedLike = Union["Seed", int, bytes, bytearray, str]


class Seed:
    """Immutable 256-bit seed.

    Build one with ``Seed.new_random()`` for a non-reproducible run or with
    ``Seed.from_value(...)`` for a reproducible one. Integers are stored
    little-endian, so ``Seed.from_value(0)`` is the all-zero seed.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        if len(data) != SEED_BYTES:
            raise ValueError(f"A seed needs exactly {SEED_BYTES} bytes, got {len(data)}.")
        object.__setattr__(self, "_data", bytes(data))

    def __setattr__(self, name, value):
        raise AttributeError("Seed is immutable.")

    @classmethod
    def new_random(cls) -> "Seed":
        return cls(secrets.token_bytes(SEED_BYTES))

    @classmethod
    def from_value(cls, value: SeedLike) -> "Seed":
        if isinstance(value, Seed):
            return value
        if isinstance(value, bool):
            raise TypeError("Booleans are not valid seeds.")
        if isinstance(value, (int, np.integer)):
            number = int(value)
            if number < 0 or number.bit_length() > SEED_BYTES * 8:
                raise ValueError(f"Integer seeds must be in [0, 2**{SEED_BYTES * 8}).")
            return cls(number.to_bytes(SEED_BYTES, "little"))
        if isinstance(value, (bytes, bytearray)):
            return cls(bytes(value))
        if isinstance(value, str):
            return cls.from_hex(value)
        raise TypeError(f"Cannot build a seed from {type(value).__name__}.")

    @classmethod
    def from_hex(cls, text: str) -> "Seed":
        try:
            data = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"Invalid seed hex string: {text!r}") from exc
        return cls(data)

    def to_bytes(self) -> bytes:
        return self._data

    def to_int(self) -> int:
        return int.from_bytes(self._data, "little")

    def hex(self) -> str:
        return self._data.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seed):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Seed({self.hex()})"


def _philox_layout(seed: Seed) -> Tuple[int, int]:
    # The low half of the seed keys Philox, the high half picks which 2**128
    # block slice of the 256-bit counter space the stream runs through.
    value = seed.to_int()
    key = value & _HALF_MASK
    base = (value >> _HALF_BITS) << _HALF_BITS
    return key, base


def _words_to_int(words) -> int:
    return sum(int(word) << (_WORD_BITS * idx) for idx, word in enumerate(words))


class DeterministicStream:
    """Counter-addressable random stream built on numpy's Philox generator.

    Word ``p`` of the stream is word ``p % 4`` of the Philox block at counter
    ``base + p // 4``. The cursor counts 64-bit words taken so far, so any
    cursor can be reached by generating at most one block, without replaying
    earlier draws.
    """

    def __init__(self, seed: Seed):
        self._seed = seed
        self._key, self._base = _philox_layout(seed)
        self.advance_to(0)

    @property
    def seed(self) -> Seed:
        return self._seed

    @property
    def cursor(self) -> int:
        state = self._bit_generator.state
        counter = _words_to_int(state["state"]["counter"])
        # Philox bumps the counter before filling its buffer, so the counter
        # names the block the buffer was filled from.
        block = (counter - self._base + 1) % _COUNTER_SPAN
        return PHILOX_BUFFER_SIZE * block + int(state["buffer_pos"]) - PHILOX_BUFFER_SIZE

    def advance_to(self, position: int) -> None:
        position = int(position)
        if position < 0:
            raise ValueError(f"Stream position must be non-negative, got {position}.")

        block, offset = divmod(position, PHILOX_BUFFER_SIZE)
        counter = (self._base + block - 1) % _COUNTER_SPAN
        bit_generator = np.random.Philox(key=self._key, counter=counter)
        if offset:
            bit_generator.random_raw(offset)

        self._bit_generator = bit_generator
        self._generator = np.random.Generator(bit_generator)

    def draw_uniform_integer(self, minimum: int, maximum: int) -> int:
        value = int(self._generator.integers(minimum, maximum, endpoint=True, dtype=np.int64))
        self._drop_pending_half_word()
        return value

    def draw_uniform_float(self, minimum: float, maximum: float) -> float:
        minimum = float(minimum)
        maximum = float(maximum)
        if math.isinf(maximum - minimum):
            unit = float(self._generator.random())
            value = 2.0 * (0.5 * minimum + (0.5 * maximum - 0.5 * minimum) * unit)
        else:
            value = float(self._generator.uniform(minimum, maximum))
        return min(max(value, minimum), maximum)

    def _drop_pending_half_word(self) -> None:
        # Narrow integer ranges are served 32 bits at a time and the unused
        # upper half of the word stays buffered. Dropping it keeps the whole
        # generator state describable by the word cursor alone.
        state = self._bit_generator.state
        if state["has_uint32"]:
            state["has_uint32"] = 0
            state["uinteger"] = 0
            self._bit_generator.state = state

    def __repr__(self) -> str:
        return f"DeterministicStream(seed={self._seed!r}, cursor={self.cursor})"
