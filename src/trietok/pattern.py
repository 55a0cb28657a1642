"""Regex presets for splitting raw text into chunks for parallel vocabulary building."""

from enum import Enum

import regex as re

from .errors import PatternError


class TokenPattern(str, Enum):
    """
    Pre-defined chunking patterns.

    ``GPT2`` splits words, numbers and punctuation runs the way the GPT-2
    pre-tokenizer does (https://github.com/openai/tiktoken); ``LINES`` and
    ``PARAGRAPHS`` follow document structure.
    """

    GPT2 = r"""'(?:[sdmt]|ll|ve|re)| ?\p{L}+| ?\p{N}+| ?[^\s\p{L}\p{N}]+|\s+(?!\S)|\s+"""

    # document structure: each line keeps its newline
    LINES = r"[^\n]*\n|[^\n]+"

    # blank-line separated paragraphs, separators attached to the paragraph before
    PARAGRAPHS = r"(?:[^\n]|\n(?!\s*\n))+\s*|\s+"

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"unknown pattern, valid patterns: {', '.join(pat.name for pat in cls)}",
                pattern=name,
            )


def list_patterns() -> list[str]:
    """Return available pattern preset names."""
    return [pat.name.lower() for pat in TokenPattern]


def get_pattern(name: str) -> str:
    """Return the regex string of a preset by name."""
    return TokenPattern.get(name)


def split_text(text: str, pattern: str = "lines") -> list[str]:
    """
    Split ``text`` into the chunks matched by ``pattern``.

    ``pattern`` is either a preset name from :class:`TokenPattern` or a raw
    regex. Chunks are returned in text order; text not covered by any match
    is dropped, so presets are written to cover all input.

    :raises PatternError: If ``pattern`` is neither a preset nor a valid regex.
    """
    try:
        pat = TokenPattern.get(pattern)
    except PatternError:
        pat = pattern
    return [m.group(0) for m in _compile_pattern(pat).finditer(text)]


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
