"""
charmarkov - character-level Markov text generation.

    from charmarkov import LanguageModel
    lm = LanguageModel(3, seed=20).train_text(corpus)
    print(lm.generate("The", 200))
"""

from .core import (
    CharMarkovError,
    CorpusReadError,
    LanguageModel,
    ModelConfigError,
    ModelNotTrainedError,
)
from .core.char_stream import FileCharSource, StringCharSource

__all__ = [
    "LanguageModel",
    "FileCharSource",
    "StringCharSource",
    "CharMarkovError",
    "CorpusReadError",
    "ModelConfigError",
    "ModelNotTrainedError",
]

__version__ = "0.1.0"
