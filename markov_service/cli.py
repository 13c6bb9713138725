#!/usr/bin/env python3
"""
Train a Markov chain on a text file and print generated text.

Usage:
    python -m markov_service --file corpus.txt --order 3 --seed "once upon" --amount 20
    python -m markov_service --file corpus.txt --kind character --seed "th" --graph trie.dot
"""

import argparse
import random
import sys
from pathlib import Path

from markov_service.config import ConfigurationError, settings
from markov_service.services.markov import MarkovChain
from markov_service.services.tokenizer import parse_kind, tokenize
from markov_service.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate text from a variable-order Markov chain")

    parser.add_argument("--order", type=int, default=settings.MARKOV_ORDER,
                       help="the 'look-behind memory' of the Markov chain")
    parser.add_argument("--file", type=str, default=settings.MARKOV_FILE,
                       help="the file to create a Markov chain from")
    parser.add_argument("--kind", type=str, default=settings.MARKOV_KIND,
                       help="the size of a single token: word, character, or line")
    parser.add_argument("--seed", type=str, default=settings.MARKOV_SEED,
                       help="the text to seed the generator with")
    parser.add_argument("--amount", type=int, default=settings.MARKOV_AMOUNT,
                       help="the amount of output to generate (e.g. 8 words if --kind word)")

    parser.add_argument("--rng-seed", type=int, default=settings.MARKOV_RANDOM_SEED,
                       help="seed for the random source (reproducible output)")
    parser.add_argument("--graph", type=str, default=None,
                       help="write the trained trie as a GraphViz DOT file ('-' for stdout)")
    parser.add_argument("--graph-source", choices=["probability", "counts"], default="probability",
                       help="which trie to render with --graph")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # Configuration errors are fatal before any training happens
    try:
        kind = parse_kind(args.kind)
        if args.order < 1:
            raise ConfigurationError(f"order should be at least 1 (got {args.order})")
        if args.order > settings.MARKOV_MAX_ORDER:
            raise ConfigurationError(
                f"order should be at most {settings.MARKOV_MAX_ORDER} (got {args.order})"
            )
        if args.amount < 0:
            raise ConfigurationError(f"amount should be non-negative (got {args.amount})")
        if not tokenize(args.seed, kind):
            raise ConfigurationError("seed should be non-empty")
    except ConfigurationError as e:
        logger.error(f"[ERR] {e}")
        return 2

    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"[ERR] could not open file {path}: {e}")
        return 1

    chain = MarkovChain(order=args.order, kind=kind, rng=random.Random(args.rng_seed))

    logger.info("[TRAIN] training...")
    chain.train(text)
    stats = chain.stats()
    logger.info(
        f"[TRAIN] done: {stats.total_count} tokens, {stats.vocabulary_size} distinct, "
        f"{stats.node_count} trie nodes"
    )

    if args.graph:
        if args.graph == "-":
            sys.stdout.write(chain.to_dot(args.graph_source))
        else:
            chain.write_dot(args.graph, args.graph_source)
            logger.info(f"[GRAPH] wrote {args.graph_source} trie to {args.graph}")

    print(chain.generate_text(args.seed, args.amount))
    return 0


if __name__ == "__main__":
    sys.exit(main())
