"""Vocabulary building: grow a trie tokenizer from its alphabet by merging spans."""

import logging
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor

from ._decorators import measure_time
from ._progress import merge_progress
from .errors import UnknownSymbolError, UnreachableTargetError
from .parallel import group_items, resolve_workers
from .tokenizer import Tokenizer
from .types import Span

log = logging.getLogger(__name__)

type SpanCounts[T: Hashable] = Counter[Span[T]]


def extract_alphabet[T: Hashable](corpus: Iterable[T]) -> list[T]:
    """Return the distinct symbols of ``corpus`` in order of first occurrence."""
    return list(dict.fromkeys(corpus))


def count_spans[T: Hashable](
    tokenizer: Tokenizer[T], symbols: Sequence[T]
) -> SpanCounts[T]:
    """
    Count merge candidates in one sequence under the current tokenizer.

    Every pair of adjacent segments contributes the raw symbol range covering
    both; the final segment, having no right neighbour, contributes its own
    range. Keys are inserted in order of first occurrence.

    :raises UnknownSymbolError: If ``symbols`` holds a symbol the tokenizer
        cannot match.
    """
    counts: SpanCounts[T] = Counter()
    segments = tokenizer.segment(symbols)
    for (_, start, _), (_, _, end) in zip(segments, segments[1:]):
        counts[tuple(symbols[start:end])] += 1
    if segments:
        _, start, end = segments[-1]
        counts[tuple(symbols[start:end])] += 1
    return counts


def merge_counts[T: Hashable](partials: Iterable[SpanCounts[T]]) -> SpanCounts[T]:
    """Sum per-span counts, keeping the first-seen order of spans across ``partials``."""
    total: SpanCounts[T] = Counter()
    for partial in partials:
        total.update(partial)
    return total


def select_candidate[T: Hashable](
    counts: SpanCounts[T], vocabulary: set[Span[T]]
) -> Span[T] | None:
    """
    Pick the most frequent span that is not registered yet.

    Ties go to the span counted first. Returns ``None`` when every counted
    span is already in ``vocabulary``.
    """
    best: Span[T] | None = None
    best_count = 0
    for span, count in counts.items():
        if count > best_count and span not in vocabulary:
            best, best_count = span, count
    return best


@measure_time
def build_vocabulary[T: Hashable](
    corpus: Sequence[T],
    target_size: int,
    verbose: bool = False,
    show_progress: bool = True,
) -> Tokenizer[T]:
    """
    Build a tokenizer with exactly ``target_size`` tokens from ``corpus``.

    Each distinct symbol becomes a single-symbol token first. Every merge
    round then re-segments the whole corpus with the current tokenizer,
    counts the spans formed by adjacent segments and registers the most
    frequent span not yet in the vocabulary under the next token id.

    If the alphabet alone already reaches ``target_size`` the single-symbol
    tokenizer is returned as is.

    :param corpus: Training symbols, e.g. a ``str`` or a list of ints.
    :param target_size: Number of tokens in the finished vocabulary.
    :param verbose: Log each learned merge when ``True``.
    :param show_progress: Display a progress bar over merge rounds.
    :returns: The finished tokenizer.
    :raises UnreachableTargetError: If ``target_size`` is negative or no
        unregistered span is left before the target is reached.

    Example:
       >>> tok = build_vocabulary("abab", 3, show_progress=False)
       >>> tok.encode("abab")
       [2, 2]
    """
    _check_target(target_size)
    tokenizer, vocabulary = _seed(extract_alphabet(corpus), target_size)

    def count_round() -> SpanCounts[T]:
        return count_spans(tokenizer, corpus)

    _merge_until(tokenizer, vocabulary, target_size, count_round, verbose, show_progress)
    return tokenizer


@measure_time
def build_vocabulary_parallel[T: Hashable](
    chunks: Sequence[Sequence[T]],
    base_alphabet: Iterable[T],
    target_size: int,
    num_workers: int | None = None,
    verbose: bool = False,
    show_progress: bool = True,
) -> Tokenizer[T]:
    """
    Build a tokenizer from a corpus split into independent chunks.

    Runs the same merge loop as :func:`build_vocabulary`, but counting is
    done per group of chunks on a process pool. Each worker process receives
    the chunks once, when the pool starts, and keeps its own copy of the
    tokenizer; every round it replays the merges learned since its last task,
    then counts. Counts are summed in chunk order and the winning span is
    registered by the caller once every worker has finished the round. Spans
    never cross chunk boundaries.

    With a single chunk and ``base_alphabet = extract_alphabet(chunk)`` the
    result is identical to :func:`build_vocabulary`, and the result never
    depends on ``num_workers``. Symbols must be picklable when more than one
    worker is used.

    :param chunks: Independently segmentable parts of the corpus.
    :param base_alphabet: Single-symbol vocabulary; ids follow first occurrence.
    :param target_size: Number of tokens in the finished vocabulary.
    :param num_workers: Worker processes; ``None`` uses every CPU.
    :param verbose: Log each learned merge when ``True``.
    :param show_progress: Display a progress bar over merge rounds.
    :returns: The finished tokenizer.
    :raises UnreachableTargetError: If the target cannot be reached.
    :raises UnknownSymbolError: If a chunk holds a symbol outside ``base_alphabet``.
    """
    _check_target(target_size)
    alphabet = extract_alphabet(base_alphabet)
    tokenizer, vocabulary = _seed(alphabet, target_size)
    if len(tokenizer) >= target_size:
        return tokenizer

    non_empty = [chunk for chunk in chunks if len(chunk) > 0]
    _check_symbols(non_empty, set(alphabet))

    workers = resolve_workers(num_workers)
    groups = group_items(non_empty, workers)
    log.debug(f"counting {len(non_empty)} chunks in {len(groups)} groups on {workers} workers")

    if workers == 1 or len(groups) <= 1:

        def count_serial() -> SpanCounts[T]:
            return merge_counts(
                count_spans(tokenizer, chunk) for group in groups for chunk in group
            )

        _merge_until(
            tokenizer, vocabulary, target_size, count_serial, verbose, show_progress
        )
        return tokenizer

    with ProcessPoolExecutor(
        max_workers=min(workers, len(groups)),
        initializer=_init_worker,
        initargs=(groups, alphabet),
    ) as pool:

        def count_parallel() -> SpanCounts[T]:
            merges = tuple(
                tokenizer.lookup[tok] for tok in range(len(alphabet), len(tokenizer))
            )
            tasks = [(index, merges) for index in range(len(groups))]
            # list() joins every worker before the reduce
            partials = list(pool.map(_count_group_in_worker, tasks))
            return merge_counts(partials)

        _merge_until(
            tokenizer, vocabulary, target_size, count_parallel, verbose, show_progress
        )
    return tokenizer


# per-process state of the counting pool, set up by _init_worker
_worker_groups: list = []
_worker_tokenizer: Tokenizer | None = None
_worker_merges: int = 0


def _init_worker(groups: list, alphabet: list) -> None:
    global _worker_groups, _worker_tokenizer, _worker_merges
    _worker_groups = groups
    _worker_tokenizer, _ = _seed(alphabet, len(alphabet))
    _worker_merges = 0


def _count_group_in_worker(task: tuple[int, tuple[Span, ...]]) -> SpanCounts:
    """Catch up on learned merges, then count one group of chunks."""
    global _worker_merges
    index, merges = task
    base = len(_worker_tokenizer) - _worker_merges
    for offset in range(_worker_merges, len(merges)):
        _worker_tokenizer.register(merges[offset], base + offset)
    _worker_merges = len(merges)
    return merge_counts(
        count_spans(_worker_tokenizer, chunk) for chunk in _worker_groups[index]
    )


def _check_symbols[T: Hashable](chunks: list[Sequence[T]], alphabet: set[T]) -> None:
    """Fail before any round runs if a chunk uses a symbol outside ``alphabet``."""
    for chunk in chunks:
        for pos, symbol in enumerate(chunk):
            if symbol not in alphabet:
                raise UnknownSymbolError(
                    "chunk symbol not in base alphabet", symbol=symbol, position=pos
                )


def _check_target(target_size: int) -> None:
    if target_size < 0:
        raise UnreachableTargetError(
            "target size must not be negative", target_size=target_size
        )


def _seed[T: Hashable](
    alphabet: list[T], target_size: int
) -> tuple[Tokenizer[T], set[Span[T]]]:
    """Register every alphabet symbol as a single-symbol token."""
    tokenizer: Tokenizer[T] = Tokenizer()
    vocabulary: set[Span[T]] = set()
    for token, symbol in enumerate(alphabet):
        tokenizer.register((symbol,), token)
        vocabulary.add((symbol,))

    if len(alphabet) > target_size:
        log.warning(
            f"alphabet has {len(alphabet)} symbols, more than the target size "
            f"{target_size}; no merges will be learned"
        )
    log.debug(f"seeded tokenizer with {len(alphabet)} single-symbol tokens")
    return tokenizer, vocabulary


def _merge_until[T: Hashable](
    tokenizer: Tokenizer[T],
    vocabulary: set[Span[T]],
    target_size: int,
    count_round: Callable[[], SpanCounts[T]],
    verbose: bool,
    show_progress: bool,
) -> None:
    """Run merge rounds until the tokenizer holds ``target_size`` tokens."""
    n_merges = max(0, target_size - len(tokenizer))
    with merge_progress(n_merges, show_progress) as pbar:
        while len(tokenizer) < target_size:
            counts = count_round()
            span = select_candidate(counts, vocabulary)
            if span is None:
                raise UnreachableTargetError(
                    "no unregistered span left to merge",
                    target_size=target_size,
                    vocab_size=len(tokenizer),
                )

            token = len(tokenizer)
            tokenizer.register(span, token)
            vocabulary.add(span)
            pbar.update(1)

            log.debug(f"token {token} chosen from {len(counts)} candidate spans")
            if verbose:
                log.info(
                    "merge %d/%d: %r (count %d) -> %d",
                    token - (target_size - n_merges) + 1,
                    n_merges,
                    span,
                    counts[span],
                    token,
                )


__all__ = [
    "build_vocabulary",
    "build_vocabulary_parallel",
    "extract_alphabet",
    "count_spans",
    "merge_counts",
    "select_candidate",
]
