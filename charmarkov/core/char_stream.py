# char_stream.py - character sources for training (in-memory text and lazily read files)

from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import IO, Optional, Union

from .errors import CorpusReadError, ModelConfigError
from .protocols import CharSource

PathLike = Union[str, "os.PathLike[str]"]


class StringCharSource:
    """Serves the characters of an in-memory string."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def is_empty(self) -> bool:
        return self._pos >= len(self._text)

    def read_char(self) -> str:
        if self.is_empty():
            raise EOFError("string source exhausted")
        ch = self._text[self._pos]
        self._pos += 1
        return ch


class FileCharSource:
    """
    Reads a text file one character at a time without loading it whole.
    Open and decode failures are reported as CorpusReadError; an unknown
    encoding name is a ModelConfigError.
    Use as a context manager, or call close() when done.
    """

    def __init__(self, path: PathLike, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self._peeked: Optional[str] = None
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ModelConfigError(f"unknown corpus encoding {encoding!r}") from e
        try:
            self._fh: Optional[IO[str]] = open(self.path, "r", encoding=encoding, newline="")
        except OSError as e:
            raise CorpusReadError(f"cannot open corpus {self.path}: {e}") from e

    def _fill(self) -> None:
        if self._peeked is not None or self._fh is None:
            return
        try:
            self._peeked = self._fh.read(1)
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusReadError(f"cannot read corpus {self.path}: {e}") from e

    def is_empty(self) -> bool:
        self._fill()
        return not self._peeked

    def read_char(self) -> str:
        if self.is_empty():
            raise EOFError(f"end of corpus {self.path}")
        ch = self._peeked
        self._peeked = None
        return ch

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "FileCharSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_source(obj: Union[CharSource, str], encoding: str = "utf-8") -> CharSource:
    """
    Adapt `obj` to a CharSource. Strings are treated as corpus text, not paths;
    pass a pathlib.Path to read a file.
    """
    if isinstance(obj, str):
        return StringCharSource(obj)
    if isinstance(obj, os.PathLike):
        return FileCharSource(obj, encoding=encoding)
    if isinstance(obj, CharSource):
        return obj
    raise TypeError(f"cannot read characters from {type(obj).__name__}")
