"""Custom exception hierarchy for trietok errors."""

from collections.abc import Hashable

import regex as re

from .types import TokenId


class TrieTokError(Exception):
    """Base exception for all trietok errors."""


class TrainingError(TrieTokError):
    """Raised when vocabulary building fails."""


class UnreachableTargetError(TrainingError):
    """Raised when the target vocabulary size cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        target_size: int | None = None,
        vocab_size: int | None = None,
    ) -> None:
        """Initialize with optional sizes that get appended to the message."""
        extra = " "
        if target_size is not None:
            extra += f"(target size: {target_size}) "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        super().__init__(message + extra)
        self.target_size = target_size
        self.vocab_size = vocab_size


class TokenizationError(TrieTokError):
    """Raised when encoding fails."""


class UnknownSymbolError(TokenizationError):
    """Raised when an input symbol has no entry in the trie."""

    def __init__(
        self,
        message: str,
        *,
        symbol: Hashable | None = None,
        position: int | None = None,
    ) -> None:
        extra = " "
        if symbol is not None:
            extra += f"(symbol: {symbol!r}) "
        if position is not None:
            extra += f"(position: {position}) "
        super().__init__(message + extra)
        self.symbol = symbol
        self.position = position


class VocabularyError(TrieTokError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        invalid_tok: TokenId | None = None,
    ) -> None:
        """Initialize with an optional token id that gets appended to the message."""
        extra = " "
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok}) "
        super().__init__(message + extra)
        self.invalid_tok = invalid_tok


class UnknownTokenIdError(VocabularyError):
    """Raised when a token id to decode has no lookup entry."""


class PatternError(TrieTokError):
    """Raised when compiling and/or resolving split patterns."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern or preset name that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err


class ParallelModeError(TrieTokError):
    """Raised when an unknown parallel mode is requested."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available_modes: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available_modes}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available_modes = available_modes
