"""Command-line interface for passphrase generation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from markovpass.data.corpus import read_corpus
from markovpass.errors import InsufficientTrainingData
from markovpass.utils.generator import PassphraseGenerator
from markovpass.utils.sampling import SamplerConfig, TorchIndexSource


logger = logging.getLogger(__name__)

DEFAULT_CORPUS = Path('traindata') / 'corpus.txt'


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


# largest seed torch.Generator.manual_seed takes on every platform
SEED_MAX = 2 ** 63 - 1


def seed_int(value: str) -> int:
    number = int(value)
    if not 0 <= number <= SEED_MAX:
        raise argparse.ArgumentTypeError(f"seed must be between 0 and {SEED_MAX}, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Generate passphrases from a word-level Markov chain'
    )
    parser.add_argument(
        'length',
        type=positive_int,
        nargs='?',
        default=6,
        help='Number of words in the passphrase (default: 6)'
    )
    parser.add_argument(
        '--corpus',
        type=Path,
        default=DEFAULT_CORPUS,
        help='Training text file'
    )
    parser.add_argument(
        '-c', '--count',
        type=positive_int,
        default=1,
        help='Number of passphrases to generate'
    )
    parser.add_argument('-s', '--separator', type=str, default=' ')
    parser.add_argument(
        '--seed',
        type=seed_int,
        help='Random seed for reproducible output'
    )
    parser.add_argument(
        '--max-stalls',
        type=positive_int,
        default=SamplerConfig.max_stalls,
        help='Dead-end lookups tolerated before a walk ends early'
    )
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def generate(args) -> List[str]:
    """Train on the corpus and return the requested passphrases."""
    tokens = read_corpus(args.corpus)
    generator = PassphraseGenerator(
        tokens,
        index_source=TorchIndexSource(args.seed),
        config=SamplerConfig(max_stalls=args.max_stalls),
    )

    passphrases = []
    for _ in range(args.count):
        passphrases.append(args.separator.join(generator.generate(args.length)))
    return passphrases


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        passphrases = generate(args)
    except FileNotFoundError as e:
        logger.error(f"Corpus file not found: {e.filename}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read corpus file {e.filename}: {e.strerror}")
        return 1
    except UnicodeDecodeError as e:
        logger.error(f"Corpus file {args.corpus} is not valid UTF-8: {e.reason}")
        return 1
    except InsufficientTrainingData as e:
        logger.error(str(e))
        return 1

    noun = "passphrase is" if args.count == 1 else "passphrases are"
    print(f"\nYour randomly generated {args.length} length {noun}:\n")
    for passphrase in passphrases:
        print(passphrase)
    return 0


if __name__ == '__main__':
    sys.exit(main())
