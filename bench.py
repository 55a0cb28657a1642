"""Benchmark sequential against parallel vocabulary building on synthetic text."""

import argparse
import time

import trietok as ttok


def format_bytes(num_bytes: int) -> str:
    """Format bytes into human-readable units."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


def make_text(target_kb: int) -> str:
    """Build deterministic synthetic text close to target size."""
    target_bytes = target_kb * 1024
    seed = (
        "The wormhole shimmered above Titan while engines hummed in sync. "
        "Captain Rao logged coordinates and the archive AI cross-checked stellar drift. "
        "Quantum relays pulsed, translating static into maps for the next jump.\n"
    )
    repeat = max(1, target_bytes // len(seed.encode("utf-8")) + 1)
    text = seed * repeat
    while len(text.encode("utf-8")) > target_bytes:
        text = text[:-1]
    return text


def measure(name: str, fn) -> tuple[float, ttok.Tokenizer]:
    """Run one benchmark case and print its wall time."""
    start = time.perf_counter()
    tok = fn()
    elapsed = time.perf_counter() - start
    print(f"{name:<36} {elapsed:>10.3f}s")
    return elapsed, tok


def main() -> None:
    """Compare the sequential builder with the parallel one at several worker counts."""
    parser = argparse.ArgumentParser(description="Benchmark trietok vocabulary building.")
    parser.add_argument("--size-kb", type=int, default=64, help="Synthetic corpus size.")
    parser.add_argument("--vocab-size", type=int, default=300, help="Target vocab size.")
    parser.add_argument("--workers", type=int, default=8, help="Parallel worker count.")
    args = parser.parse_args()

    ttok.disable_progress()

    text = make_text(args.size_kb)
    chunks = ttok.split_text(text, "lines")
    alphabet = ttok.extract_alphabet(text)
    print(f"Corpus size: {format_bytes(len(text.encode('utf-8')))} ({len(text):,} chars)")
    print(f"Chunks: {len(chunks):,}  Alphabet: {len(alphabet)}  Workers: {args.workers}")

    print("\n--- Build ---")
    t_seq, seq_tok = measure(
        "sequential", lambda: ttok.build_vocabulary(text, args.vocab_size)
    )
    t_one, _ = measure(
        "parallel workers=1",
        lambda: ttok.build_vocabulary_parallel(
            chunks, alphabet, args.vocab_size, num_workers=1
        ),
    )
    t_n, par_tok = measure(
        f"parallel workers={args.workers}",
        lambda: ttok.build_vocabulary_parallel(
            chunks, alphabet, args.vocab_size, num_workers=args.workers
        ),
    )
    print(f"parallel speedup over workers=1: {t_one / t_n:.2f}x")
    print(f"parallel vs sequential: {t_seq / t_n:.2f}x")

    print("\n--- Compression ---")
    for name, tok in (("sequential", seq_tok), ("parallel", par_tok)):
        encoded = tok.encode(text)
        assert tok.decode_text(encoded) == text, f"{name} round trip failed"
        print(f"{name:<12} {len(text) / len(encoded):.2f} symbols/token")


if __name__ == "__main__":
    main()
