"""Random index sources and the Markov chain sampler."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import torch

from markovpass.models.transition import TransitionModel


logger = logging.getLogger(__name__)


class IndexSource(Protocol):
    def randbelow(self, n: int) -> int:
        """Return an integer drawn uniformly from ``[0, n)``."""
        ...


class TorchIndexSource:
    """Uniform index draws from a private torch generator."""

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Optional seed for reproducible draws
        """
        self.generator = torch.Generator()
        if seed is None:
            self.generator.seed()
        else:
            self.generator.manual_seed(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be positive")
        return int(torch.randint(0, n, (1,), generator=self.generator).item())


@dataclass
class SamplerConfig:
    """Configuration for the chain sampler."""
    # consecutive lookups without a continuation before the walk ends
    max_stalls: int = 3


class ChainSampler:
    """Walks a transition model to produce a word sequence."""

    def __init__(
        self,
        model: TransitionModel,
        index_source: IndexSource,
        config: Optional[SamplerConfig] = None,
    ):
        """
        Args:
            model: Transition model built from the training words
            index_source: Source of uniform random indices
            config: Sampler settings (default: SamplerConfig())
        """
        self.model = model
        self.index_source = index_source
        self.config = config or SamplerConfig()
        if self.config.max_stalls < 1:
            raise ValueError("max_stalls must be at least 1")
        self.last_stalled = False

    def sample(self, length: int, seed: Tuple[str, str, str]) -> List[str]:
        """Generate up to ``length`` words starting with the seed's third word.

        A pair with no recorded continuation leaves the chain state where it
        is. After ``max_stalls`` such lookups in a row the walk ends and the
        words produced so far are returned.
        """
        if length < 0:
            raise ValueError("length must be non-negative")

        self.last_stalled = False
        if length == 0:
            return []

        _, prev, curr = seed
        result = [curr]
        stalls = 0
        for _ in range(length - 1):
            candidates = self.model.get((prev, curr))
            if not candidates:
                stalls += 1
                if stalls >= self.config.max_stalls:
                    break
                continue

            stalls = 0
            next_word = candidates[self.index_source.randbelow(len(candidates))]
            result.append(next_word)
            prev, curr = curr, next_word

        if len(result) < length:
            logger.warning(
                f"Chain stalled on ({prev!r}, {curr!r}); "
                f"returning {len(result)} of {length} words"
            )
            self.last_stalled = True
        return result
