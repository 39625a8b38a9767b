# logger_utils.py - timing metrics and stdlib logging setup for the CLI

import logging
import os
import sys
import time
from datetime import datetime

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level=logging.INFO, path=None):
    """
    Configure the stdlib loggers used by charmarkov.core.
    Records go to stderr so generated text on stdout stays clean. If `path`
    is given they are also appended to that file, even when the root logger
    was already configured by someone else.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT,
                            handlers=[logging.StreamHandler(sys.stderr)])
    root.setLevel(level)
    if path:
        _add_file_handler(root, path)


def _add_file_handler(root, path):
    target = os.path.abspath(path)
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return h
    _ensure_dir(path)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    return handler


def _ensure_dir(path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


class Log:
    """Timing metrics for the CLI, printed to stderr and optionally kept in a file."""

    # where metric() and time_block() write; the CLI points this at its log file
    metrics_path = None

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (timing, counts). Printed to stderr and, when
        Log.metrics_path is set, appended to that file.
        Example: [12:45:02] training done: 0.123s
        """
        ts = datetime.now().strftime("%H:%M:%S")
        line = f"[{ts}] {tag}: {value}{unit}"
        print(line, file=sys.stderr)
        if Log.metrics_path:
            _ensure_dir(Log.metrics_path)
            with open(Log.metrics_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    @staticmethod
    def time_block(label):
        """
        Measure execution time of a code block:
            with Log.time_block("training"):
                lm.train_file(path)
        """
        return _Timer(label)


class _Timer:
    """Context manager used by Log.time_block."""
    def __init__(self, label):
        self.label = label
        self.start = None
        self.elapsed = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = round(time.perf_counter() - self.start, 3)
        status = "done" if exc_type is None else "failed"
        Log.metric(f"{self.label} {status}", self.elapsed, "s")
        return False
