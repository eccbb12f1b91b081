"""Passphrase generation pipeline."""

import logging
from typing import Iterable, List, Optional

from markovpass.data.corpus import clean_words, select_seed
from markovpass.models.transition import build_model
from markovpass.utils.sampling import (
    ChainSampler,
    IndexSource,
    SamplerConfig,
    TorchIndexSource,
)


logger = logging.getLogger(__name__)


class PassphraseGenerator:
    """Builds a transition model once and samples passphrases from it."""

    def __init__(
        self,
        tokens: Iterable[str],
        index_source: Optional[IndexSource] = None,
        config: Optional[SamplerConfig] = None,
    ):
        """
        Args:
            tokens: Raw whitespace-split training tokens
            index_source: Source of random indices (default: unseeded torch generator)
            config: Sampler settings

        Raises:
            InsufficientTrainingData: fewer than three words survive cleaning
        """
        tokens = list(tokens)
        self.words = clean_words(tokens)
        logger.debug(f"Kept {len(self.words)} of {len(tokens)} tokens after cleaning")
        self.index_source = index_source or TorchIndexSource()
        self.model = build_model(self.words)
        self.sampler = ChainSampler(self.model, self.index_source, config)

    def generate(self, length: int) -> List[str]:
        """Sample a word sequence of up to ``length`` words."""
        seed = select_seed(self.words, self.index_source)
        return self.sampler.sample(length, seed)


def generate_passphrase(
    tokens: Iterable[str],
    length: int,
    separator: str = ' ',
    index_source: Optional[IndexSource] = None,
) -> str:
    """Train on ``tokens`` and return one passphrase joined by ``separator``."""
    generator = PassphraseGenerator(tokens, index_source=index_source)
    return separator.join(generator.generate(length))
