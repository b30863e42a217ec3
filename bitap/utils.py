from typing import Iterable, Iterator, Union


Symbols = Union[str, bytes, bytearray, memoryview, Iterable[int]]

# Diagnostic rendering: 16 bits per block, four blocks per line.
BLOCK_SIZE = 16
BLOCK_SEPARATORS = (" | ", " | ", " | ", " |\n | ")


def iter_words_up(word_count: int, offset: int = 0) -> range:
    """
    Destination word indices for a shift toward higher bit indices.

    Highest index first. The source words of an up-shift sit at or below
    the destination, so visiting destinations top-down reads every source
    word before it is overwritten. Indices below ``offset`` are skipped;
    they have no source word and are cleared by the caller.
    """
    return range(word_count - 1, offset - 1, -1)


def iter_words_down(word_count: int, offset: int = 0) -> range:
    """
    Destination word indices for a shift toward lower bit indices.

    Lowest index first, the mirror image of :func:`iter_words_up`. The top
    ``offset`` indices are skipped.
    """
    return range(0, max(word_count - offset, 0))


def as_symbols(data: Symbols) -> Iterable[int]:
    """Byte view of a text or pattern. Text is encoded as UTF-8."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, memoryview):
        return data.tobytes()
    return data


def as_pattern(data: Symbols) -> bytes:
    """Materialise a pattern; raises ValueError on symbols outside 0..255."""
    return bytes(as_symbols(data))


def render_bits(bits: Iterable[bool]) -> str:
    """Human readable rendering of a bit sequence, set bits as ``1``."""
    out = [" | "]
    count = 0
    for bit in bits:
        out.append("1" if bit else ".")
        count += 1
        if count % BLOCK_SIZE == 0:
            out.append(BLOCK_SEPARATORS[(count // BLOCK_SIZE - 1) % len(BLOCK_SEPARATORS)])
    # Pad the last block so the closing bar lines up.
    remainder = count % BLOCK_SIZE
    if remainder or count == 0:
        out.append(" " * (BLOCK_SIZE - remainder))
        out.append(" |")
    else:
        out[-1] = " |"
    return "".join(out)


def word_bits(word: int, length: int) -> Iterator[bool]:
    """The low ``length`` bits of a word, bit 0 first."""
    for _ in range(length):
        yield bool(word & 1)
        word >>= 1
