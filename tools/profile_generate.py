# tools/profile_generate.py
"""
Small profiling harness for LanguageModel.train / generate.
Usage:
  python tools/profile_generate.py --window 4 --iters 200 --length 500
  python tools/profile_generate.py --corpus data/some_book.txt --seed-text "The "

Prints mean/median/stdev generation latency and a sample of the output.
"""
import argparse
import statistics
import time
from pathlib import Path

from charmarkov.core.language_model import LanguageModel

# small synthetic corpus (or pass --corpus with a real text)
SAMPLE_TEXT = (
    "the quick brown fox jumps over the lazy dog. "
    "hello world this is a test sentence. "
    "please schedule a meeting next monday at nine. "
    "thank you for your contribution to the project. "
    "could you show me the latest report. "
) * 20


def benchmark(lm, seed_text, length, iterations=200):
    times = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        _ = lm.generate(seed_text, length)
        times.append((time.perf_counter() - t0) * 1000.0)  # ms
    return times


def summarize(times):
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "mean_ms": statistics.mean(times_sorted),
        "median_ms": statistics.median(times_sorted),
        "stdev_ms": statistics.pstdev(times_sorted),
        "p90_ms": times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)],
        "max_ms": max(times_sorted),
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--corpus", type=Path, help="training text file (default: built-in sample)")
    parser.add_argument("--window", type=int, default=3, help="window length")
    parser.add_argument("--iters", type=int, default=200, help="measured iterations")
    parser.add_argument("--length", type=int, default=300, help="total generated length")
    parser.add_argument("--seed-text", type=str, default="the quick", help="initial text")
    args = parser.parse_args()

    lm = LanguageModel(args.window, seed=20)
    t0 = time.perf_counter()
    if args.corpus:
        lm.train_file(args.corpus)
    else:
        lm.train_text(SAMPLE_TEXT)
    print(f"Trained {len(lm)} contexts in {(time.perf_counter() - t0) * 1000.0:.2f} ms")

    times = benchmark(lm, args.seed_text, args.length, iterations=args.iters)
    print("Profiling summary (ms):", summarize(times))
    print("Sample output:", lm.generate(args.seed_text, min(args.length, 200)))


if __name__ == "__main__":
    main()
