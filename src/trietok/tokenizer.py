"""
Trie-backed tokenizer that greedily segments symbol sequences into token ids.
"""

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

from ._sanitise import render_span
from ._trie import Node
from .errors import UnknownSymbolError, UnknownTokenIdError, VocabularyError
from .parallel import ParallelMode, ParallelStrategy, group_items, resolve_workers
from .types import Lookup, Span, TokenId

log = logging.getLogger(__name__)


class Tokenizer[T: Hashable]:
    """
    Greedy longest-match tokenizer over an arbitrary symbol alphabet.

    Owns the trie roots (keyed by first symbol) and the reverse lookup from
    token id to the exact symbol span the token stands for. The lookup is the
    sole source of truth for decoding.
    """

    def __init__(self) -> None:
        # first symbol -> trie root
        self.roots: dict[T, Node[T]] = {}
        # token -> symbols
        self.lookup: Lookup[T] = {}

    @classmethod
    def from_vocabulary(cls, spans: Iterable[Sequence[T]]) -> "Tokenizer[T]":
        """
        Rebuild a tokenizer from spans listed in token id order.

        :param spans: Symbol spans; the i-th span receives token id ``i``.
        :raises VocabularyError: If a span is empty or listed twice.
        """
        tokenizer: Tokenizer[T] = cls()
        for token, span in enumerate(spans):
            if tuple(span) in tokenizer:
                raise VocabularyError("duplicate span in vocabulary", invalid_tok=token)
            tokenizer.register(span, token)
        log.debug(f"rebuilt tokenizer with {len(tokenizer)} tokens")
        return tokenizer

    def __len__(self) -> int:
        return len(self.lookup)

    def __contains__(self, span: object) -> bool:
        """Return ``True`` if ``span`` is a registered token."""
        if not isinstance(span, Sequence) or not span:
            return False
        return self.token_for(span) is not None

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.lookup)

    def register(self, span: Sequence[T], token: TokenId) -> None:
        """
        Register ``span`` as the symbols of ``token``.

        :raises VocabularyError: If ``span`` is empty, or if ``token`` or
            ``span`` is already registered.
        """
        if not span:
            raise VocabularyError("cannot register an empty span", invalid_tok=token)
        if token in self.lookup:
            raise VocabularyError("token id already registered", invalid_tok=token)
        if self.token_for(span) is not None:
            raise VocabularyError("span already registered", invalid_tok=token)
        self.lookup[token] = tuple(span)

        root = self.roots.get(span[0])
        if root is None:
            root = Node(span[0])
            self.roots[span[0]] = root
        root.register(span, token)

    def token_for(self, span: Sequence[T]) -> TokenId | None:
        """Return the token registered for exactly ``span``, if any."""
        if not span:
            return None
        node = self.roots.get(span[0])
        for symbol in span[1:]:
            if node is None:
                return None
            node = node.children.get(symbol)
        return None if node is None else node.token

    def items(self) -> Iterator[tuple[TokenId, Span[T]]]:
        """Yield ``(token, span)`` pairs in token id order."""
        for token in sorted(self.lookup):
            yield token, self.lookup[token]

    def segment(self, symbols: Sequence[T]) -> list[tuple[TokenId, int, int]]:
        """
        Split ``symbols`` into maximal trie-matching spans, left to right.

        :param symbols: Sequence to segment.
        :returns: ``(token, start, end)`` per span, ``end`` exclusive.
        :raises UnknownSymbolError: If a position cannot be matched.
        """
        spans: list[tuple[TokenId, int, int]] = []
        pos = 0
        n = len(symbols)
        while pos < n:
            root = self.roots.get(symbols[pos])
            if root is None:
                raise UnknownSymbolError(
                    "symbol not in trained alphabet", symbol=symbols[pos], position=pos
                )
            token, end = root.match(symbols, pos)
            if token is None:
                raise UnknownSymbolError(
                    "no registered token starts with symbol",
                    symbol=symbols[pos],
                    position=pos,
                )
            spans.append((token, pos, end))
            pos = end
        return spans

    def encode(self, symbols: Sequence[T]) -> list[TokenId]:
        """
        Encode a symbol sequence into token ids.

        :raises UnknownSymbolError: If a symbol was never seen in training.
        """
        return [token for token, _, _ in self.segment(symbols)]

    def decode(self, tokens: Iterable[TokenId]) -> list[T]:
        """
        Expand token ids back into the symbols they stand for.

        :raises UnknownTokenIdError: If any token id is not in the vocabulary.
        """
        symbols: list[T] = []
        for tok in tokens:
            span = self.lookup.get(tok)
            if span is None:
                raise UnknownTokenIdError("token not found in vocabulary", invalid_tok=tok)
            symbols.extend(span)
        return symbols

    def decode_text(self, tokens: Iterable[TokenId]) -> str:
        """Decode tokens of a character alphabet straight into a string."""
        return "".join(self.decode(tokens))

    def encode_batch(
        self,
        inputs: list[Sequence[T]],
        num_workers: int | None = None,
        parallel_mode: ParallelMode | ParallelStrategy = ParallelMode.AUTO,
    ) -> list[list[TokenId]]:
        """
        Encode many sequences with optional thread-level parallelism.

        Parallelization happens across inputs, never within one input, since
        greedy segmentation of a sequence depends on everything before it.

        :param inputs: Sequences to encode.
        :param num_workers: Worker count; ``None`` uses every CPU.
        :param parallel_mode: ``off`` encodes serially, ``batch`` always uses
            the thread pool, ``auto`` uses it for more than one input.
        :returns: Encoded token sequences in input order.
        """
        return self._run_batch(self.encode, inputs, num_workers, parallel_mode)

    def decode_batch(
        self,
        token_batch: list[list[TokenId]],
        num_workers: int | None = None,
        parallel_mode: ParallelMode | ParallelStrategy = ParallelMode.AUTO,
    ) -> list[list[T]]:
        """Decode multiple token sequences, see :meth:`encode_batch`."""
        return self._run_batch(self.decode, token_batch, num_workers, parallel_mode)

    def render_vocab(self) -> list[str]:
        """Return one human-readable ``[token] symbols`` line per vocabulary entry."""
        return [f"[{tok}] {render_span(span)}" for tok, span in self.items()]

    def _run_batch(
        self,
        fn: Callable,
        items: list,
        num_workers: int | None,
        parallel_mode: ParallelMode | ParallelStrategy,
    ) -> list:
        """Apply ``fn`` to every item according to the requested parallel mode."""
        if not items:
            return []

        mode = ParallelMode.get(parallel_mode)
        workers = resolve_workers(num_workers)

        def process_batch() -> list:
            """Apply ``fn`` to grouped items in parallel."""
            if workers == 1 or len(items) <= 1:
                return [fn(item) for item in items]

            groups = group_items(items, workers)

            def run_group(group: list) -> list:
                return [fn(item) for item in group]

            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(run_group, groups))
            return [out for group in results for out in group]

        match mode:
            case ParallelMode.OFF:
                return [fn(item) for item in items]
            case ParallelMode.BATCH:
                return process_batch()
            case ParallelMode.AUTO:
                if len(items) <= 1:
                    return [fn(item) for item in items]
                return process_batch()
