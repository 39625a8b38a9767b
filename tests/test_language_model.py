# tests/test_language_model.py
import random

import pytest

from charmarkov.core.errors import CorpusReadError, ModelConfigError, ModelNotTrainedError
from charmarkov.core.language_model import (
    CONTEXT_EXHAUSTED,
    LENGTH_REACHED,
    SEED_TOO_SHORT,
    GenerationState,
    LanguageModel,
)

CORPUS = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of Light, it was the season of "
    "Darkness, it was the spring of hope, it was the winter of despair."
)


class ScriptedRandom:
    """Returns the given draws in order."""

    def __init__(self, *draws):
        self._draws = iter(draws)

    def random(self):
        return next(self._draws)


class BrokenSource:
    """Yields a few characters, then fails like a dropped network share."""

    def __init__(self, good="abcabc"):
        self._chars = list(good)

    def is_empty(self):
        return False

    def read_char(self):
        if not self._chars:
            raise OSError("device went away")
        return self._chars.pop(0)


# Construction ----------------------------------------------------------------
@pytest.mark.parametrize("bad", [0, -1, True, 1.5, "3", None])
def test_rejects_bad_window_length(bad):
    with pytest.raises(ModelConfigError):
        LanguageModel(bad)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        LanguageModel(0, seed=1)


def test_seed_and_rng_are_exclusive():
    with pytest.raises(ModelConfigError):
        LanguageModel(2, seed=1, rng=random.Random(1))


def test_rng_must_provide_random():
    with pytest.raises(TypeError):
        LanguageModel(2, rng=object())


def test_factories():
    assert LanguageModel.seeded(3, 20).seed == 20
    lm = LanguageModel.unseeded(3)
    assert lm.seed is None and lm.window_length == 3
    assert not lm.is_trained and len(lm) == 0


def test_seeded_factory_requires_a_seed():
    with pytest.raises(ModelConfigError):
        LanguageModel.seeded(3, None)


def test_unknown_encoding_is_a_config_error(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("abab", encoding="utf-8")
    with pytest.raises(ModelConfigError):
        LanguageModel(1, seed=1).train_file(path, encoding="nope")


# Training --------------------------------------------------------------------
def test_training_aab_window_one():
    lm = LanguageModel(1, seed=20).train_text("aab")
    assert list(lm.windows()) == ["a"]
    bucket = lm.bucket("a")
    assert [(r.chr, r.count) for r in bucket] == [("a", 1), ("b", 1)]
    assert [r.p for r in bucket] == [pytest.approx(0.5), pytest.approx(0.5)]
    assert lm.bucket("b") is None
    assert lm.is_trained


def test_trailing_window_without_successor_is_not_recorded():
    lm = LanguageModel(2, seed=20).train_text("ab")
    assert len(lm) == 0
    assert lm.generate("ab", 10) == "ab"


def test_corpus_shorter_than_window_gives_empty_model():
    lm = LanguageModel(5, seed=20).train_text("abc")
    assert len(lm) == 0
    assert lm.is_trained
    assert lm.generate("hello", 20) == "hello"


def test_counts_across_windows():
    lm = LanguageModel(2, seed=20).train_text("abcabd")
    assert sorted(lm.windows()) == ["ab", "bc", "ca"]
    assert [(r.chr, r.count) for r in lm.bucket("ab")] == [("c", 1), ("d", 1)]
    assert [(r.chr, r.count) for r in lm.bucket("ca")] == [("b", 1)]


def test_retraining_starts_from_fresh_table():
    lm = LanguageModel(1, seed=20)
    lm.train_text("aaaa")
    lm.train_text("bbbb")
    assert list(lm.windows()) == ["b"]
    assert lm.bucket("b").get(0).count == 3


def test_every_bucket_is_a_distribution():
    lm = LanguageModel(3, seed=7).train_text(CORPUS)
    assert len(lm) > 0
    for window in lm.windows():
        bucket = lm.bucket(window)
        assert len(bucket) > 0
        cps = [r.cp for r in bucket]
        assert all(a <= b for a, b in zip(cps, cps[1:]))
        assert sum(r.p for r in bucket) == pytest.approx(1.0, abs=1e-9)
        assert cps[-1] == pytest.approx(1.0, abs=1e-9)


def test_train_file(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("héllo héllo", encoding="utf-8")
    lm = LanguageModel(2, seed=1).train(path)
    assert "hé" in list(lm.windows())
    assert lm.bucket("hé").get(0).chr == "l"


def test_missing_corpus_propagates_and_blocks_generation(tmp_path):
    lm = LanguageModel(2, seed=1).train_text("abab")
    with pytest.raises(CorpusReadError) as info:
        lm.train_file(tmp_path / "nope.txt")
    assert isinstance(info.value, OSError)
    assert not lm.is_trained
    with pytest.raises(ModelNotTrainedError):
        lm.generate("ab", 5)
    # a successful run clears the failure
    lm.train_text("abab")
    assert lm.generate("ab", 4) == "abab"


def test_read_failure_mid_stream_is_a_corpus_error():
    lm = LanguageModel(2, seed=1)
    with pytest.raises(CorpusReadError) as info:
        lm.train(BrokenSource())
    assert isinstance(info.value.__cause__, OSError)
    assert not lm.is_trained


def test_calculate_probabilities_exposed_on_model():
    lm = LanguageModel(1, seed=1).train_text("abab")
    bucket = lm.bucket("a")
    bucket.update("c")
    lm.calculate_probabilities(bucket)
    # b:2, c:1
    assert [r.cp for r in bucket] == [pytest.approx(2 / 3), 1.0]


# Generation ------------------------------------------------------------------
def test_seed_shorter_than_window_returned_unchanged():
    lm = LanguageModel(3, seed=1).train_text(CORPUS)
    for n in (0, 2, 50):
        assert lm.generate("it", n) == "it"
    res = lm.generate_detailed("it", 50)
    assert res.stop_reason == SEED_TOO_SHORT
    assert res.states == (GenerationState.SEEDED, GenerationState.DONE)


def test_length_not_above_seed_returns_prefix():
    lm = LanguageModel(2, seed=1).train_text(CORPUS)
    assert lm.generate("it was", 3) == "it "
    assert lm.generate("it was", 6) == "it was"
    assert lm.generate("it was", 0) == ""


def test_negative_length_rejected():
    lm = LanguageModel(2, seed=1).train_text(CORPUS)
    with pytest.raises(ValueError):
        lm.generate("it", -1)


def test_length_counts_the_seed():
    lm = LanguageModel(1, seed=1).train_text("abababab")
    res = lm.generate_detailed("a", 6)
    assert res.text == "ababab"
    assert res.stop_reason == LENGTH_REACHED
    assert res.states == (
        GenerationState.SEEDED,
        GenerationState.EXTENDING,
        GenerationState.DONE,
    )


def test_whole_seed_is_kept_and_only_tail_is_the_window():
    lm = LanguageModel(1, seed=1).train_text("abababab")
    assert lm.generate("zzza", 7) == "zzzabab"


def test_follows_distribution_and_stops_on_unseen_window():
    lm = LanguageModel(1, rng=ScriptedRandom(0.1, 0.7)).train_text("aab")
    res = lm.generate_detailed("a", 5)
    # 0.1 < cp(a)=0.5 -> 'a'; 0.7 -> 'b'; window 'b' was never seen
    assert res.text == "aab"
    assert res.stop_reason == CONTEXT_EXHAUSTED


def test_untrained_model_returns_seed():
    lm = LanguageModel(2, seed=1)
    assert lm.generate("abc", 10) == "abc"


def test_same_seed_same_output():
    a = LanguageModel(3, seed=42).train_text(CORPUS)
    b = LanguageModel(3, seed=42).train_text(CORPUS)
    out_a = a.generate("it was", 300)
    out_b = b.generate("it was", 300)
    assert out_a == out_b
    assert out_a.startswith("it was")
    assert len(out_a) <= 300


def test_generated_text_only_uses_seen_transitions():
    lm = LanguageModel(2, seed=3).train_text(CORPUS)
    out = lm.generate("it", 200)
    for i in range(2, len(out)):
        window, nxt = out[i - 2:i], out[i]
        assert nxt in lm.bucket(window)


def test_str_dumps_table():
    lm = LanguageModel(1, seed=1).train_text("aab")
    assert str(lm) == "a : ((a 1 0.5 0.5) (b 1 0.5 1.0))\n"
    assert repr(lm) == "LanguageModel(window_length=1, contexts=1)"


def test_core_does_not_import_utils():
    import ast
    from pathlib import Path

    import charmarkov.core

    core_dir = Path(charmarkov.core.__file__).parent
    for src in core_dir.glob("*.py"):
        tree = ast.parse(src.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom):
                module = node.module or ""
                assert "utils" not in module.split("."), f"{src.name} imports {module}"
            elif isinstance(node, ast.Import):
                for alias in node.names:
                    assert not alias.name.startswith("charmarkov.utils"), src.name
