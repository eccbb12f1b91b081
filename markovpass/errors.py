"""Exceptions raised by markovpass."""


class MarkovPassError(Exception):
    """Base class for markovpass errors."""


class InsufficientTrainingData(MarkovPassError, ValueError):
    """Raised when the cleaned corpus is too short to form a trigram."""

    def __init__(self, word_count: int, required: int = 3):
        self.word_count = word_count
        self.required = required
        super().__init__(
            f"Training corpus has {word_count} usable words, "
            f"at least {required} are required"
        )
