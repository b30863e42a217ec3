from dataclasses import dataclass
from typing import Any, Dict, Optional


class PatternTooLongError(ValueError):
    """Pattern does not fit the state word of the word-limited matcher."""

    def __init__(self, length: int, word_size: int = 64):
        super().__init__(f"Pattern too long: {length} symbols, limit is {word_size - 1}")
        self.length = length
        self.word_size = word_size


@dataclass(frozen=True)
class Match:
    """An exact occurrence of the pattern; ``text[start:end] == pattern``."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end
        }


@dataclass
class ScanStep:
    """State of a scan right after one input symbol was consumed."""
    position: int
    symbol: int
    state: str
    match: Optional[Match] = None

    @property
    def char(self) -> str:
        """The symbol as text; bytes outside printable ASCII as ``\\xNN``."""
        if 0x20 <= self.symbol < 0x7F:
            return chr(self.symbol)
        return f"\\x{self.symbol:02x}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "symbol": self.symbol,
            "state": self.state,
            "match": self.match.to_dict() if self.match else None
        }
