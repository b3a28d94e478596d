from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from tqdm import tqdm

from spellrank.text.tokenize import Sequence, tokenize
from spellrank.utils.errors import InvalidEncoding


log = logging.getLogger(__name__)


def _iter_lines(path: Path) -> Iterator[tuple[int, str]]:
    with open(path, "rb") as f:
        for line_no, raw in enumerate(f, start=1):
            try:
                yield line_no, raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidEncoding(f"{path}:{line_no}: invalid UTF-8 at byte {e.start}") from e


def iter_words(
    path: Path,
    *,
    casefold: bool = False,
    normalize: str | None = None,
    progress: bool = False,
) -> Iterator[Sequence]:
    """Stream a word list as token sequences.

    Format: one word per line, UTF-8. Blank lines and lines starting
    with `#` are skipped; surrounding whitespace is stripped.
    """
    lines: Iterator[tuple[int, str]] = _iter_lines(Path(path))
    if progress:
        lines = tqdm(lines, desc=Path(path).name, unit=" lines")
    for _line_no, line in lines:
        word = line.lstrip("\ufeff").strip()
        if not word or word.startswith("#"):
            continue
        yield tokenize(word, casefold=casefold, normalize=normalize)


def load_words(
    path: Path,
    *,
    casefold: bool = False,
    normalize: str | None = None,
    progress: bool = False,
) -> list[Sequence]:
    """Read the whole list, dropping duplicates but keeping first-seen order."""
    seen: set[Sequence] = set()
    words: list[Sequence] = []
    for w in iter_words(path, casefold=casefold, normalize=normalize, progress=progress):
        if w in seen:
            continue
        seen.add(w)
        words.append(w)
    log.info("Loaded %d word(s) from %s", len(words), path)
    return words
