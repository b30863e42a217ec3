from .base import Match, PatternTooLongError, ScanStep
from .bitvector import WORD_SIZE, BitVector, bv_and, bv_or
from .builder import PatternMaskBuilder, PatternMaskTable, build_mask_table, build_word_masks
from .engine import PatternSearchEngine, ShiftOrAlgorithm, WordShiftOrAlgorithm, find_all


__all__ = [
    "BitVector",
    "bv_or",
    "bv_and",
    "WORD_SIZE",
    "PatternMaskBuilder",
    "PatternMaskTable",
    "build_mask_table",
    "build_word_masks",
    "PatternSearchEngine",
    "ShiftOrAlgorithm",
    "WordShiftOrAlgorithm",
    "Match",
    "ScanStep",
    "PatternTooLongError",
    "find_all"
]

__version__ = "0.1.0"
