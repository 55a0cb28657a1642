"""
Utilities for converting symbol spans to displayable strings.
"""

import unicodedata
from collections.abc import Hashable, Sequence


def _visible(ch: str) -> str:
    # every control-like category (Cc, Cf, Cn, Co, Cs) starts with "C"
    if unicodedata.category(ch).startswith("C"):
        return f"\\u{ord(ch):04x}"
    return ch


def render_span(span: Sequence[Hashable]) -> str:
    """
    Render a token span for humans.

    Character spans are joined and control characters escaped; bytes spans
    are decoded as UTF-8 with replacement; any other symbol type falls back
    to the repr of each symbol.
    """
    if all(isinstance(s, str) for s in span):
        text = "".join(span)
    elif all(isinstance(s, int) and 0 <= s < 256 for s in span):
        text = bytes(span).decode("utf-8", errors="replace")
    else:
        return " ".join(repr(s) for s in span)
    return "".join(map(_visible, text))
