import logging
from typing import Any, Dict, Iterator, List, Optional

from .base import Match, ScanStep
from .bitvector import WORD_SIZE, BitVector
from .builder import PatternMaskTable, build_mask_table, build_word_masks
from .utils import Symbols, as_pattern, as_symbols, render_bits, word_bits


logger = logging.getLogger(__name__)

VARIANTS = ("auto", "vector", "word")

DEFAULT_CONFIG = {
    "variant": "vector",
    "word_size": WORD_SIZE,
    "trace": True
}


class ShiftOrAlgorithm:
    """Shift-Or scan with a bit vector state, any pattern length."""

    def __init__(self, table: PatternMaskTable):
        self.table = table
        self.length = table.length

    def steps(self, text: Symbols) -> Iterator[ScanStep]:
        """
        Consume ``text`` one symbol at a time.

        Bit ``j`` of the state is 0 while the last ``j + 1`` symbols read
        equal the first ``j + 1`` pattern symbols. The all-ones start state
        means no bit can reach position ``m - 1`` as 0 before ``m`` symbols
        have been read.
        """
        m = self.length
        state = BitVector(m).fill_ones()
        for i, symbol in enumerate(as_symbols(text)):
            if m == 0:
                yield ScanStep(i, symbol, render_bits(()), Match(i, i))
                continue
            self.table.or_into(state.shift_up(1), symbol)

            match = None
            if not state.get(m - 1):
                match = Match(i - m + 1, i + 1)
            yield ScanStep(i, symbol, render_bits(state), match)

    def scan(self, text: Symbols) -> Iterator[Match]:
        m = self.length
        if m == 0:
            for i, _ in enumerate(as_symbols(text)):
                yield Match(i, i)
            return

        table = self.table
        state = BitVector(m).fill_ones()
        for i, symbol in enumerate(as_symbols(text)):
            table.or_into(state.shift_up(1), symbol)
            if not state.get(m - 1):
                yield Match(i - m + 1, i + 1)


class WordShiftOrAlgorithm:
    """Shift-Or scan with a single machine word as state."""

    def __init__(self, pattern: bytes, word_size: int = WORD_SIZE):
        self.masks = build_word_masks(pattern, word_size)
        self.word_mask = (1 << word_size) - 1
        self.length = len(pattern)
        # (m-1)'th bit for checking matches
        self.check_bit = 1 << (self.length - 1) if self.length else 0

    def _update(self, state: int, symbol: int) -> int:
        if not 0 <= symbol < len(self.masks):
            raise ValueError(f"Symbol {symbol} outside the one-byte alphabet")
        return ((state << 1) | self.masks[symbol]) & self.word_mask

    def steps(self, text: Symbols) -> Iterator[ScanStep]:
        m = self.length
        state = self.word_mask
        for i, symbol in enumerate(as_symbols(text)):
            if m == 0:
                yield ScanStep(i, symbol, render_bits(()), Match(i, i))
                continue
            state = self._update(state, symbol)
            match = None if state & self.check_bit else Match(i - m + 1, i + 1)
            yield ScanStep(i, symbol, render_bits(word_bits(state, m)), match)

    def scan(self, text: Symbols) -> Iterator[Match]:
        m = self.length
        state = self.word_mask
        for i, symbol in enumerate(as_symbols(text)):
            if m == 0:
                yield Match(i, i)
                continue
            state = self._update(state, symbol)
            if not state & self.check_bit:
                yield Match(i - m + 1, i + 1)


class PatternSearchEngine:
    """Exact single-pattern search over byte streams."""

    def __init__(self, pattern: Optional[Symbols] = None, config: Optional[Dict[str, Any]] = None):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)
        if self.config["variant"] not in VARIANTS:
            raise ValueError(f"Unknown variant {self.config['variant']!r}, expected one of {VARIANTS}")

        self.pattern = None
        self.table = None
        self._algorithms = {}

        if pattern is not None:
            self.load_pattern(pattern)

    def load_pattern(self, pattern: Symbols):
        """Set the pattern to search for; replaces any previous one.

        The mask table is built on first use by the vector variant.
        """
        self.pattern = as_pattern(pattern)
        self.table = None
        self._algorithms = {}

    def search(self, text: Symbols, variant: Optional[str] = None) -> List[Match]:
        return list(self._get_algorithm(variant).scan(text))

    def iter_matches(self, text: Symbols, variant: Optional[str] = None) -> Iterator[Match]:
        return self._get_algorithm(variant).scan(text)

    def iter_steps(self, text: Symbols, variant: Optional[str] = None) -> Iterator[ScanStep]:
        return self._get_algorithm(variant).steps(text)

    def _get_algorithm(self, variant: Optional[str] = None):
        if self.pattern is None:
            raise RuntimeError("Pattern not loaded. Use load_pattern() first.")

        variant = self._detect_variant(variant or self.config["variant"])
        if variant not in self._algorithms:
            if variant == "word":
                self._algorithms[variant] = WordShiftOrAlgorithm(self.pattern, self.config["word_size"])
            else:
                if self.table is None:
                    self.table = build_mask_table(self.pattern)
                self._algorithms[variant] = ShiftOrAlgorithm(self.table)
            logger.debug(f"Using {variant} variant for pattern of length {len(self.pattern)}")
        return self._algorithms[variant]

    def _detect_variant(self, variant: str) -> str:
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant {variant!r}, expected one of {VARIANTS}")
        if variant == "auto":
            return "word" if len(self.pattern) < self.config["word_size"] else "vector"
        return variant


def find_all(text: Symbols, pattern: Symbols, variant: str = "vector") -> List[int]:
    """Start offsets of every occurrence of ``pattern`` in ``text``."""
    engine = PatternSearchEngine(pattern, {"variant": variant})
    return [match.start for match in engine.iter_matches(text)]
