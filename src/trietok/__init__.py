"""trietok: trie-based subword vocabulary induction and tokenization."""

from ._progress import disable_progress, enable_progress
from ._trie import Node
from .errors import (
    ParallelModeError,
    PatternError,
    TokenizationError,
    TrainingError,
    TrieTokError,
    UnknownSymbolError,
    UnknownTokenIdError,
    UnreachableTargetError,
    VocabularyError,
)
from .parallel import ParallelMode, list_parallel_modes
from .pattern import TokenPattern, get_pattern, list_patterns, split_text
from .tokenizer import Tokenizer
from .trainer import build_vocabulary, build_vocabulary_parallel, extract_alphabet

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("trietok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "Node",
    "build_vocabulary",
    "build_vocabulary_parallel",
    "extract_alphabet",
    "ParallelMode",
    "TokenPattern",
    "get_pattern",
    "split_text",
    "list_patterns",
    "list_parallel_modes",
    "enable_progress",
    "disable_progress",
    "TrieTokError",
    "TrainingError",
    "UnreachableTargetError",
    "TokenizationError",
    "UnknownSymbolError",
    "VocabularyError",
    "UnknownTokenIdError",
    "PatternError",
    "ParallelModeError",
]
