import logging
import os
import sys
from typing import List, Optional

from .base import PatternTooLongError
from .engine import PatternSearchEngine


def _configure_logging():
    level_name = os.getenv("BITAP_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


def main(argv: Optional[List[str]] = None, prog: Optional[str] = None) -> int:
    """
    Report every occurrence of a pattern in a string.

    Usage: bitap string pattern

    Environment:
        BITAP_VARIANT: vector (default), word or auto.
        BITAP_TRACE: set to 0 to hide the per-character state lines.
        BITAP_LOG_LEVEL: logging level name, WARNING by default.
    """
    argv = sys.argv if argv is None else argv
    if prog is None:
        prog = os.path.basename(argv[0]) if argv else "bitap"
    if len(argv) != 3:
        print(f"Usage: {prog} string pattern", file=sys.stderr)
        return 1

    _configure_logging()
    text, pattern = argv[1], argv[2]
    config = {
        "variant": os.getenv("BITAP_VARIANT", "vector").strip().lower(),
        "trace": os.getenv("BITAP_TRACE", "1").strip() != "0"
    }

    try:
        engine = PatternSearchEngine(pattern, config)
        steps = engine.iter_steps(text)
    except PatternTooLongError:
        print("Pattern too long.", file=sys.stderr)
        return 1
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    for step in steps:
        if step.match:
            print(f"match at: {step.match.start}")
        # Print state for educational purposes...
        if engine.config["trace"]:
            print(f"{step.char} {step.state}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
