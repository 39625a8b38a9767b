# charmarkov/core/errors.py
"""
Exception types raised by the character model.

Configuration and data-source problems surface to the caller. Running off
the end of the learned contexts during generation is normal control flow
and is never signalled with an exception.
"""


class CharMarkovError(Exception):
    """Base class for every error raised by charmarkov."""


class ModelConfigError(CharMarkovError, ValueError):
    """Raised when a model is constructed with an invalid window length."""


class CorpusReadError(CharMarkovError, OSError):
    """Raised when the training corpus cannot be opened or read."""


class ModelNotTrainedError(CharMarkovError, RuntimeError):
    """Raised when generating from a model whose last training run failed."""


class EmptyBucketError(CharMarkovError, LookupError):
    """An empty bucket reached the sampler. Indicates a bug, not bad input."""


class NotNormalizedError(CharMarkovError, RuntimeError):
    """A bucket was sampled before its probabilities were computed."""
