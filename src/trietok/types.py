"""
Core types for trie tokenization.
"""

from collections.abc import Hashable

type TokenId = int
type Span[T: Hashable] = tuple[T, ...]
type Lookup[T: Hashable] = dict[TokenId, Span[T]]
