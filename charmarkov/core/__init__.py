"""
charmarkov.core

The statistical model:
 - frequency records and per-window buckets (CharData, ContextBucket)
 - the window -> bucket table (ContextTable)
 - normalization and sampling over a bucket (calculate_probabilities, sample)
 - training and generation (LanguageModel)
"""

from .char_data import CharData
from .context_bucket import ContextBucket
from .context_table import ContextTable
from .distribution import calculate_probabilities, sample
from .errors import (
    CharMarkovError,
    CorpusReadError,
    EmptyBucketError,
    ModelConfigError,
    ModelNotTrainedError,
    NotNormalizedError,
)
from .language_model import GenerationResult, GenerationState, LanguageModel
from .protocols import CharSource, RandomSource

__all__ = [
    "CharData",
    "ContextBucket",
    "ContextTable",
    "calculate_probabilities",
    "sample",
    "LanguageModel",
    "GenerationResult",
    "GenerationState",
    "CharSource",
    "RandomSource",
    "CharMarkovError",
    "CorpusReadError",
    "EmptyBucketError",
    "ModelConfigError",
    "ModelNotTrainedError",
    "NotNormalizedError",
]
