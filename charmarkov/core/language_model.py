# charmarkov/core/language_model.py
"""
LanguageModel - fixed-order character Markov model.

Training slides a window of `window_length` characters over a corpus and
counts, per window, which character came next. After the corpus is consumed
every bucket is normalized into a cumulative distribution. Generation then
walks the table: look up the trailing window, draw a character from its
bucket, append, repeat.

Boundary behaviour (none of it raises):
  - seed text shorter than the window -> seed returned unchanged
  - requested length <= seed length   -> seed truncated to that length
  - trailing window never seen         -> text generated so far is returned

Example:
    lm = LanguageModel.seeded(window_length=2, seed=20)
    lm.train_text("abracadabra")
    lm.generate("ab", 12)
"""

from __future__ import annotations

import logging
import os
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from .context_bucket import ContextBucket
from .context_table import ContextTable
from .distribution import calculate_probabilities as _normalize, sample
from .errors import CorpusReadError, ModelConfigError, ModelNotTrainedError
from .protocols import CharSource, RandomSource
from .char_stream import FileCharSource, PathLike, open_source

logger = logging.getLogger(__name__)

# stop reasons reported by generate_detailed()
SEED_TOO_SHORT = "seed_too_short"
LENGTH_REACHED = "length_reached"
CONTEXT_EXHAUSTED = "context_exhausted"


class GenerationState(Enum):
    SEEDED = "seeded"
    EXTENDING = "extending"
    DONE = "done"


@dataclass(frozen=True)
class GenerationResult:
    text: str
    stop_reason: str
    states: Tuple[GenerationState, ...]


@dataclass
class _GenerationRun:
    """State of a single generate() call. Never reused across calls."""
    states: List[GenerationState] = field(default_factory=lambda: [GenerationState.SEEDED])

    @property
    def state(self) -> GenerationState:
        return self.states[-1]

    def move(self, new: GenerationState) -> None:
        if self.state is GenerationState.DONE:
            raise RuntimeError("generation run already finished")
        self.states.append(new)

    def finish(self, text: str, reason: str) -> GenerationResult:
        self.move(GenerationState.DONE)
        logger.debug("generation done (%s), %d chars", reason, len(text))
        return GenerationResult(text=text, stop_reason=reason, states=tuple(self.states))


class LanguageModel:
    """
    Character-level Markov model with a fixed window length.

    Args:
        window_length: context size in characters, must be >= 1
        seed: seed for the model's own random.Random; same seed, same corpus
              and same generate() arguments give identical output. None draws
              from system entropy.
        rng: any RandomSource to use instead (mutually exclusive with seed)

    A model owns its random source; share one model across threads only if
    `rng` is thread-safe or each caller uses its own model.
    """

    def __init__(
        self,
        window_length: int,
        seed: Optional[int] = None,
        *,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if isinstance(window_length, bool) or not isinstance(window_length, int) or window_length < 1:
            raise ModelConfigError(f"window_length must be a positive integer, got {window_length!r}")
        if rng is not None and seed is not None:
            raise ModelConfigError("pass either seed or rng, not both")
        if rng is not None and not isinstance(rng, RandomSource):
            raise TypeError(f"rng must provide random(), got {type(rng).__name__}")

        self.window_length = window_length
        self.seed = seed
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self.table = ContextTable(window_length)
        self._trained = False
        self._failed = False

    @classmethod
    def seeded(cls, window_length: int, seed: int) -> "LanguageModel":
        """Reproducible model: same seed, same output."""
        if seed is None:
            raise ModelConfigError("a seeded model needs a seed; use unseeded() for entropy")
        return cls(window_length, seed)

    @classmethod
    def unseeded(cls, window_length: int) -> "LanguageModel":
        """Model seeded from system entropy; output differs per run."""
        return cls(window_length)

    @property
    def is_trained(self) -> bool:
        return self._trained

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train(self, source: Union[CharSource, str, PathLike]) -> "LanguageModel":
        """
        Build the context table from `source` (a CharSource, corpus text, or
        a path object). Always starts from an empty table.
        """
        if isinstance(source, os.PathLike):
            return self.train_file(source)
        return self._train_from(open_source(source))

    def train_text(self, text: str) -> "LanguageModel":
        return self._train_from(open_source(text))

    def train_file(self, path: PathLike, encoding: str = "utf-8") -> "LanguageModel":
        """Train on a text file, read lazily one character at a time."""
        self._begin_training()
        with FileCharSource(path, encoding=encoding) as src:
            return self._train_from(src)

    def _begin_training(self) -> None:
        self.table = ContextTable(self.window_length)
        self._trained = False
        self._failed = True  # cleared once the pass completes

    def _train_from(self, source: CharSource) -> "LanguageModel":
        self._begin_training()
        t0 = time.perf_counter()
        try:
            n_chars = self._count_transitions(source)
        except CorpusReadError:
            logger.error("training aborted, corpus could not be read")
            raise
        except OSError as e:
            logger.error("training aborted: %s", e)
            raise CorpusReadError(f"cannot read training source: {e}") from e

        self.table.normalize()
        self._trained = True
        self._failed = False
        logger.info(
            "trained window=%d on %d chars: %d contexts in %.3fs",
            self.window_length, n_chars, len(self.table), time.perf_counter() - t0,
        )
        return self

    def _count_transitions(self, source: CharSource) -> int:
        window = ""
        while len(window) < self.window_length:
            if source.is_empty():
                logger.warning(
                    "corpus shorter than window (%d < %d chars), model is empty",
                    len(window), self.window_length,
                )
                return len(window)
            window += source.read_char()

        n_chars = len(window)
        while not source.is_empty():
            c = source.read_char()
            n_chars += 1
            self.table.bucket_for(window).update(c)
            window = window[1:] + c
        return n_chars

    def calculate_probabilities(self, bucket: ContextBucket) -> None:
        """Set p and cp on every record of `bucket` (see distribution module)."""
        _normalize(bucket)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def get_random_char(self, bucket: ContextBucket) -> str:
        """Draw one character from a normalized bucket using the model's rng."""
        return sample(bucket, self._rng.random())

    def generate(self, initial_text: str, text_length: int) -> str:
        """
        Extend `initial_text` until the whole text is `text_length` characters
        long (the seed counts toward the length), or until the current window
        has no entry in the table.
        """
        return self.generate_detailed(initial_text, text_length).text

    def generate_detailed(self, initial_text: str, text_length: int) -> GenerationResult:
        if text_length < 0:
            raise ValueError(f"text_length must be >= 0, got {text_length}")
        if self._failed:
            raise ModelNotTrainedError("last training run failed; retrain before generating")

        run = _GenerationRun()
        wl = self.window_length
        if len(initial_text) < wl:
            return run.finish(initial_text, SEED_TOO_SHORT)

        run.move(GenerationState.EXTENDING)
        if text_length <= len(initial_text):
            return run.finish(initial_text[:text_length], LENGTH_REACHED)

        chars = list(initial_text)
        window = initial_text[-wl:]
        while len(chars) < text_length:
            bucket = self.table.get(window)
            if bucket is None:
                return run.finish("".join(chars), CONTEXT_EXHAUSTED)
            chars.append(self.get_random_char(bucket))
            window = "".join(chars[-wl:])
        return run.finish("".join(chars), LENGTH_REACHED)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def windows(self) -> Iterator[str]:
        return iter(self.table)

    def bucket(self, window: str) -> Optional[ContextBucket]:
        return self.table.get(window)

    def __len__(self) -> int:
        return len(self.table)

    def __repr__(self) -> str:
        return f"LanguageModel(window_length={self.window_length}, contexts={len(self.table)})"

    def __str__(self) -> str:
        return str(self.table)
