"""Build a character vocabulary from a Hugging Face text dataset."""

import argparse
import logging

from datasets import load_dataset

import trietok as ttok

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)

HF_DATASET = "stevez80/Sci-Fi-Books-gutenberg"


def main() -> None:
    """Load documents, build a vocabulary over them in parallel and show it."""
    parser = argparse.ArgumentParser(description="Build a trietok vocabulary.")
    parser.add_argument("--num-docs", type=int, default=200, help="Documents to load.")
    parser.add_argument("--vocab-size", type=int, default=1_000, help="Target size.")
    parser.add_argument(
        "--split",
        type=str,
        default="gpt2",
        help="Split preset or regex used to chunk documents.",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker processes.")
    parser.add_argument("--verbose", action="store_true", help="Log every merge.")
    args = parser.parse_args()

    ds = load_dataset(HF_DATASET, split="train")
    docs: list[str] = ds[: args.num_docs]["text"]
    print(f"number of docs {len(docs)}")

    chunks = [chunk for doc in docs for chunk in ttok.split_text(doc, args.split)]
    alphabet = ttok.extract_alphabet(ch for doc in docs for ch in doc)
    print(f"number of chunks {len(chunks):,}, alphabet size {len(alphabet)}")

    tok = ttok.build_vocabulary_parallel(
        chunks,
        alphabet,
        args.vocab_size,
        num_workers=args.workers,
        verbose=args.verbose,
    )

    for line in tok.render_vocab()[len(alphabet) :]:
        print(line)


if __name__ == "__main__":
    main()
