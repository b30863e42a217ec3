import array
from typing import Iterator, Sequence

from .utils import iter_words_down, iter_words_up


WORD_SIZE = 64
WORD_MASK = (1 << WORD_SIZE) - 1


def word_count_for(length: int) -> int:
    """Number of 64-bit words needed for ``length`` bits."""
    return (length + WORD_SIZE - 1) // WORD_SIZE


def shift_word_left(word: int, k: int) -> int:
    """``word << k`` truncated to a word; shifting by 64 or more gives 0."""
    if k >= WORD_SIZE:
        return 0
    return (word << k) & WORD_MASK


def shift_word_right(word: int, k: int) -> int:
    """``word >> k``; shifting by 64 or more gives 0."""
    if k >= WORD_SIZE:
        return 0
    return word >> k


class BitVector:
    """
    Fixed-length bit vector packed into 64-bit words.

    Bit ``i`` lives in word ``i // 64`` at bit ``i % 64``. Bits of the last
    word beyond ``length`` are always zero once a public method returns.
    Mutators work in place and return the vector itself so calls can be
    chained; ``copy``, ``|`` and ``&`` return new vectors.
    """

    def __init__(self, length: int):
        if length < 0:
            raise ValueError(f"Bit vector length must not be negative: {length}")
        self.length = length
        self.word_count = word_count_for(length)
        self.words = array.array("Q")  # 64-bit integers
        self.words.extend([0] * self.word_count)

    @classmethod
    def from_bits(cls, spec: Sequence, zero: str = "0") -> "BitVector":
        """
        Build a vector from a literal such as ``"100100"``.

        Position ``i`` of ``spec`` becomes bit ``i``; it is cleared when
        ``spec[i] == zero`` and set for any other symbol.
        """
        vector = cls(len(spec))
        for i, symbol in enumerate(spec):
            if symbol != zero:
                vector.set(i, True)
        return vector

    def copy(self) -> "BitVector":
        result = BitVector(self.length)
        result.words = array.array("Q", self.words)
        return result

    __copy__ = copy

    def __deepcopy__(self, memo) -> "BitVector":
        return self.copy()

    # Bit access

    def _check_index(self, index: int):
        if not 0 <= index < self.length:
            raise IndexError(f"Bit index {index} out of range [0, {self.length})")

    def get(self, index: int) -> bool:
        self._check_index(index)
        word_idx = index // WORD_SIZE
        bit_idx = index % WORD_SIZE
        return bool((self.words[word_idx] >> bit_idx) & 1)

    def set(self, index: int, bit: bool = True) -> "BitVector":
        self._check_index(index)
        word_idx = index // WORD_SIZE
        bit_idx = index % WORD_SIZE
        if bit:
            self.words[word_idx] |= (1 << bit_idx)
        else:
            self.words[word_idx] &= ~(1 << bit_idx) & WORD_MASK
        return self

    # Bulk initialisation

    def zero(self) -> "BitVector":
        for i in range(self.word_count):
            self.words[i] = 0
        return self

    def fill_ones(self) -> "BitVector":
        for i in range(self.word_count):
            self.words[i] = WORD_MASK
        self._clean()
        return self

    def negate(self) -> "BitVector":
        for i in range(self.word_count):
            self.words[i] = ~self.words[i] & WORD_MASK
        self._clean()
        return self

    def _clean(self):
        # Clear the bits of the last word that lie beyond ``length``.
        k = self.length % WORD_SIZE
        if k:
            self.words[self.word_count - 1] &= (1 << k) - 1

    # Elementwise operators

    def _check_length(self, other: "BitVector"):
        if self.length != other.length:
            raise ValueError(f"Bit vector length mismatch: {self.length} != {other.length}")

    def or_assign(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        for i in range(self.word_count):
            self.words[i] |= other.words[i]
        return self

    def and_assign(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        for i in range(self.word_count):
            self.words[i] &= other.words[i]
        return self

    def __ior__(self, other: "BitVector") -> "BitVector":
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.or_assign(other)

    def __iand__(self, other: "BitVector") -> "BitVector":
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.and_assign(other)

    def __or__(self, other: "BitVector") -> "BitVector":
        if not isinstance(other, BitVector):
            return NotImplemented
        return bv_or(self, other)

    def __and__(self, other: "BitVector") -> "BitVector":
        if not isinstance(other, BitVector):
            return NotImplemented
        return bv_and(self, other)

    # Shifts

    def shift_up(self, k: int) -> "BitVector":
        """
        Move every bit ``k`` positions toward higher indices.

        Bits pushed past ``length - 1`` are dropped and the lowest ``k``
        bits become zero. Any ``k >= length`` clears the vector.
        """
        if k < 0:
            raise ValueError(f"Shift distance must not be negative: {k}")
        if k == 0 or self.length == 0:
            return self

        word_offset, bit_offset = divmod(k, WORD_SIZE)
        words = self.words
        for i in iter_words_up(self.word_count, word_offset):
            src = i - word_offset
            high = shift_word_left(words[src], bit_offset)
            low = shift_word_right(words[src - 1], WORD_SIZE - bit_offset) if src > 0 else 0
            words[i] = high | low

        for i in range(min(word_offset, self.word_count)):
            words[i] = 0

        self._clean()
        return self

    def shift_down(self, k: int) -> "BitVector":
        """
        Move every bit ``k`` positions toward lower indices.

        The lowest ``k`` bits are dropped and the top ``k`` bits become zero.
        """
        if k < 0:
            raise ValueError(f"Shift distance must not be negative: {k}")
        if k == 0 or self.length == 0:
            return self

        word_offset, bit_offset = divmod(k, WORD_SIZE)
        words = self.words
        count = self.word_count
        for i in iter_words_down(count, word_offset):
            src = i + word_offset
            low = shift_word_right(words[src], bit_offset)
            high = shift_word_left(words[src + 1], WORD_SIZE - bit_offset) if src + 1 < count else 0
            words[i] = low | high

        for i in range(max(count - word_offset, 0), count):
            words[i] = 0

        self._clean()
        return self

    # Comparison and read accessors

    def equals(self, other: "BitVector") -> bool:
        if self.length != other.length:
            return False
        full_words, rest = divmod(self.length, WORD_SIZE)
        for i in range(full_words):
            if self.words[i] != other.words[i]:
                return False
        if rest:
            mask = (1 << rest) - 1
            return (self.words[full_words] & mask) == (other.words[full_words] & mask)
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[bool]:
        for i in range(self.length):
            yield self.get(i)

    def to_bits(self, one: str = "1", zero: str = "0") -> str:
        return "".join(one if bit else zero for bit in self)

    def __repr__(self) -> str:
        return f"<BitVector {self.to_bits()}>"


def bv_or(v: BitVector, w: BitVector) -> BitVector:
    """``v | w`` as a new vector."""
    return v.copy().or_assign(w)


def bv_and(v: BitVector, w: BitVector) -> BitVector:
    """``v & w`` as a new vector."""
    return v.copy().and_assign(w)
