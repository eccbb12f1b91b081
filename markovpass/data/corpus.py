"""Corpus loading and word normalization utilities."""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Tuple

from markovpass.errors import InsufficientTrainingData


logger = logging.getLogger(__name__)

# Leading/trailing runs of anything that is not a letter or digit
_EDGE_PUNCT = re.compile(r'^[\W_]+|[\W_]+$')


def clean_word(token: str) -> str:
    """Strip surrounding punctuation from a token and lowercase it.

    Internal characters are kept as-is, so ``"Don't"`` becomes ``"don't"``.
    A token made only of punctuation cleans to the empty string.
    """
    return _EDGE_PUNCT.sub('', token).lower()


def clean_words(tokens: Iterable[str]) -> List[str]:
    """Clean every token, dropping the ones that end up empty."""
    words = []
    for token in tokens:
        word = clean_word(token)
        if word:
            words.append(word)
    return words


def tokenize(text: str) -> List[str]:
    return text.split()


def read_corpus(path: Path) -> List[str]:
    """Read a training text file and return its raw whitespace tokens."""
    with open(path, 'r', encoding='utf-8') as f:
        tokens = tokenize(f.read())
    logger.info(f"Read {len(tokens)} tokens from {path}")
    return tokens


def select_seed(words: List[str], index_source) -> Tuple[str, str, str]:
    """Pick a random starting triplet from a cleaned word sequence.

    Args:
        words: Cleaned word sequence
        index_source: Object with a ``randbelow(n)`` method

    The start index is drawn from ``[0, len(words) - 3)``, which leaves out
    the final triplet whose trailing pair has no recorded continuation.
    A three-word corpus only has one triplet, so it is used directly.
    """
    if len(words) < 3:
        raise InsufficientTrainingData(len(words))

    upper = len(words) - 3
    start = index_source.randbelow(upper) if upper > 0 else 0
    seed = (words[start], words[start + 1], words[start + 2])
    logger.debug(f"Seed triplet at index {start}: {seed}")
    return seed
