import logging
import time
from typing import List, Sequence

from .base import PatternTooLongError
from .bitvector import WORD_SIZE, BitVector
from .utils import Symbols, as_pattern


logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256  # one-byte symbols


class PatternMaskTable:
    """
    Read-only mapping from byte value to the pattern mask for that symbol.

    Bit ``i`` of ``table[a]`` is 0 exactly when the pattern has ``a`` at
    position ``i``. Indexing returns a copy; scans combine the shared masks
    into their state through :meth:`or_into`, so the table never changes
    after it is built.
    """

    def __init__(self, pattern: bytes, masks: Sequence[BitVector]):
        self.pattern = pattern
        self.length = len(pattern)
        self._masks = tuple(masks)

    def _mask(self, symbol: int) -> BitVector:
        if not 0 <= symbol < ALPHABET_SIZE:
            raise ValueError(f"Symbol {symbol} outside the one-byte alphabet")
        return self._masks[symbol]

    def __getitem__(self, symbol: int) -> BitVector:
        return self._mask(symbol).copy()

    def or_into(self, state: BitVector, symbol: int) -> BitVector:
        """``state |= table[symbol]`` without copying the mask."""
        return state.or_assign(self._mask(symbol))

    def __len__(self) -> int:
        return len(self._masks)

    def __repr__(self) -> str:
        return f"<PatternMaskTable pattern={self.pattern!r}>"


class PatternMaskBuilder:
    """Builds the per-symbol masks for one pattern."""

    def __init__(self, pattern: Symbols):
        """
        Initialize builder with a pattern.

        Args:
            pattern: ``bytes``-like object, ``str`` (encoded as UTF-8) or an
                iterable of byte values.
        """
        self.pattern = as_pattern(pattern)
        self.pattern_length = len(self.pattern)
        self.masks: List[BitVector] = []

        self.stats = {
            "build_time": 0,
            "pattern_length": self.pattern_length,
            "distinct_symbols": 0
        }

    def build(self) -> PatternMaskTable:
        """Execute the full building pipeline."""
        start_time = time.time()

        self._build_all_ones()
        self._clear_pattern_positions()

        self.stats["build_time"] = time.time() - start_time
        self._calculate_stats()
        logger.debug(f"Built mask table for {self.pattern!r} in {self.stats['build_time']:.6f}s")

        return PatternMaskTable(self.pattern, self.masks)

    def _build_all_ones(self):
        self.masks = [BitVector(self.pattern_length).fill_ones() for _ in range(ALPHABET_SIZE)]

    def _clear_pattern_positions(self):
        for i, symbol in enumerate(self.pattern):
            self.masks[symbol].set(i, False)

    def _calculate_stats(self):
        self.stats["distinct_symbols"] = len(set(self.pattern))


def build_mask_table(pattern: Symbols) -> PatternMaskTable:
    return PatternMaskBuilder(pattern).build()


def build_word_masks(pattern: Symbols, word_size: int = WORD_SIZE) -> List[int]:
    """
    Masks for the single-word matcher, one integer per byte value.

    The state word needs a spare bit above the pattern, so patterns of
    ``word_size`` symbols or more are rejected.
    """
    pattern = as_pattern(pattern)
    if len(pattern) >= word_size:
        raise PatternTooLongError(len(pattern), word_size)

    word_mask = (1 << word_size) - 1
    masks = [word_mask] * ALPHABET_SIZE
    bit = 1  # walks up through the pattern positions
    for symbol in pattern:
        masks[symbol] &= ~bit
        bit <<= 1
    return masks
