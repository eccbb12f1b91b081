"""Bigram-to-next-word transition model."""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from markovpass.errors import InsufficientTrainingData


logger = logging.getLogger(__name__)

Bigram = Tuple[str, str]


class TransitionModel:
    """Maps each observed word pair to the words seen following it.

    Keys and buckets live in two parallel lists with a dict index into
    them. Buckets keep observation order and repeats, so a word seen
    twice after a pair is twice as likely to be drawn.
    """

    def __init__(self):
        self._keys: List[Bigram] = []
        self._buckets: List[List[str]] = []
        self._index: Dict[Bigram, int] = {}

    @classmethod
    def build(cls, words: Sequence[str]) -> 'TransitionModel':
        """Build a model from a cleaned word sequence.

        Fewer than three words yields an empty model.
        """
        model = cls()
        for i in range(len(words) - 2):
            model._observe((words[i], words[i + 1]), words[i + 2])
        return model

    def _observe(self, key: Bigram, next_word: str) -> None:
        slot = self._index.get(key)
        if slot is None:
            slot = len(self._keys)
            self._index[key] = slot
            self._keys.append(key)
            self._buckets.append([])
        self._buckets[slot].append(next_word)

    def get(self, key: Bigram) -> Optional[Tuple[str, ...]]:
        """Return the candidates recorded after ``key``, or None if unseen."""
        slot = self._index.get(key)
        if slot is None:
            return None
        return tuple(self._buckets[slot])

    def keys(self) -> List[Bigram]:
        return list(self._keys)

    def items(self) -> Iterator[Tuple[Bigram, Tuple[str, ...]]]:
        for key, bucket in zip(self._keys, self._buckets):
            yield key, tuple(bucket)

    @property
    def num_transitions(self) -> int:
        """Total number of recorded (pair, next word) observations."""
        return sum(len(bucket) for bucket in self._buckets)

    def get_stats(self) -> Dict:
        """Return basic statistics about the model."""
        if not self._keys:
            return {"contexts": 0, "total_transitions": 0}

        total = self.num_transitions
        return {
            "contexts": len(self._keys),
            "total_transitions": total,
            "avg_transitions_per_context": total / len(self._keys),
        }

    def __contains__(self, key) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransitionModel):
            return NotImplemented
        return self._keys == other._keys and self._buckets == other._buckets

    def __repr__(self) -> str:
        return f"TransitionModel(contexts={len(self)}, transitions={self.num_transitions})"


def build_model(words: Sequence[str]) -> TransitionModel:
    """Build a model, rejecting corpora too short to contain a trigram."""
    if len(words) < 3:
        raise InsufficientTrainingData(len(words))

    model = TransitionModel.build(words)
    stats = model.get_stats()
    logger.info(
        f"Built transition model: {stats['contexts']} contexts, "
        f"{stats['total_transitions']} transitions"
    )
    return model
