from __future__ import annotations

import bisect
import heapq
import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator

from spellrank.distance.costs import DEFAULT_COSTS, CostModel
from spellrank.postprocess.banded import bounded_distance
from spellrank.text.tokenize import Sequence, as_sequence, detokenize
from spellrank.utils.cancel import CancelToken
from spellrank.utils.errors import ConfigError


log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2048


@dataclass(frozen=True)
class Candidate:
    word: Sequence
    distance: int

    @property
    def text(self) -> str:
        return detokenize(self.word)

    @property
    def sort_key(self) -> tuple[int, Sequence]:
        return (self.distance, self.word)


@dataclass(frozen=True)
class SuggestionResult:
    """Candidates ordered by distance, then by word."""

    candidates: tuple[Candidate, ...] = ()

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    def __getitem__(self, idx: int) -> Candidate:
        return self.candidates[idx]

    def words(self) -> list[str]:
        return [c.text for c in self.candidates]


def _sort_key(c: Candidate) -> tuple[int, Sequence]:
    return c.sort_key


class BoundedRanking:
    """The best top_n candidates seen so far, in result order.

    Memory stays at top_n entries whatever the number of matches. Once
    full, `limit` drops to the worst kept distance so callers can tighten
    their search radius.
    """

    def __init__(self, top_n: int, max_distance: int):
        self.top_n = top_n
        self.max_distance = max_distance
        self._items: list[Candidate] = []
        self._words: set[Sequence] = set()

    def __contains__(self, word: Sequence) -> bool:
        return word in self._words

    @property
    def limit(self) -> int:
        if len(self._items) < self.top_n:
            return self.max_distance
        return self._items[-1].distance

    def offer(self, candidate: Candidate) -> None:
        if candidate.word in self._words or candidate.distance > self.limit:
            return
        if len(self._items) == self.top_n and candidate.sort_key > self._items[-1].sort_key:
            return
        bisect.insort(self._items, candidate, key=_sort_key)
        self._words.add(candidate.word)
        if len(self._items) > self.top_n:
            self._words.discard(self._items.pop().word)

    def ranked(self) -> list[Candidate]:
        return list(self._items)


def validate_request(max_distance: int, top_n: int, cost: CostModel, workers: int = 1, chunk_size: int = 1) -> None:
    if max_distance < 0:
        raise ConfigError(f"max_distance must be >= 0, got {max_distance}")
    if top_n <= 0:
        raise ConfigError(f"top_n must be > 0, got {top_n}")
    if workers < 1:
        raise ConfigError(f"workers must be >= 1, got {workers}")
    if chunk_size < 1:
        raise ConfigError(f"chunk_size must be >= 1, got {chunk_size}")
    cost.validate()


def rank_chunk(
    query: Sequence,
    words: Iterable,
    max_distance: int,
    top_n: int,
    cost: CostModel = DEFAULT_COSTS,
    *,
    transpositions: bool = True,
    cancel: CancelToken | None = None,
) -> list[Candidate]:
    """Local top-n of one slice of the dictionary."""
    kept = BoundedRanking(top_n, max_distance)
    for item in words:
        if cancel is not None:
            cancel.raise_if_cancelled()
        word = as_sequence(item)
        if word in kept:
            continue
        d = bounded_distance(query, word, kept.limit, cost, transpositions=transpositions, cancel=cancel)
        if d is not None:
            kept.offer(Candidate(word=word, distance=d))
    return kept.ranked()


def merge_ranked(partials: Iterable[Iterable[Candidate]], top_n: int) -> list[Candidate]:
    """Combine local top-n lists; the outcome does not depend on their order."""
    best: dict[Sequence, Candidate] = {}
    for part in partials:
        for c in part:
            best.setdefault(c.word, c)
    return heapq.nsmallest(top_n, best.values(), key=_sort_key)


def _chunks(items: Iterable, size: int) -> Iterator[list]:
    it = iter(items)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


def _rank_parallel(
    query: Sequence,
    dictionary: Iterable,
    max_distance: int,
    top_n: int,
    cost: CostModel,
    transpositions: bool,
    workers: int,
    chunk_size: int,
    cancel: CancelToken | None,
) -> list[Candidate]:
    partials: list[list[Candidate]] = []
    pending: set[Future] = set()
    # at most 2 chunks per worker are materialized at any time
    max_in_flight = workers * 2
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="suggest") as pool:
        try:
            for chunk in _chunks(dictionary, chunk_size):
                if cancel is not None:
                    cancel.raise_if_cancelled()
                pending.add(
                    pool.submit(
                        rank_chunk,
                        query,
                        chunk,
                        max_distance,
                        top_n,
                        cost,
                        transpositions=transpositions,
                        cancel=cancel,
                    )
                )
                if len(pending) >= max_in_flight:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    partials.extend(f.result() for f in done)
            done, pending = wait(pending)
            partials.extend(f.result() for f in done)
        except Exception:
            for f in pending:
                f.cancel()
            raise
    return merge_ranked(partials, top_n)


def suggest(
    query,
    dictionary: Iterable,
    max_distance: int,
    top_n: int,
    cost: CostModel = DEFAULT_COSTS,
    *,
    transpositions: bool = True,
    workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel: CancelToken | None = None,
) -> SuggestionResult:
    """Rank dictionary words by edit distance to query.

    Words further than max_distance are dropped. Ties on distance are broken
    by the word's unit sequence and the list is cut to top_n. With
    workers > 1 the dictionary is split into chunks ranked on a thread pool;
    the merged output is identical to a sequential run. Raises Cancelled
    (discarding partial results) if cancel fires before the scan ends.
    """
    validate_request(max_distance, top_n, cost, workers, chunk_size)
    q = as_sequence(query)
    t0 = time.perf_counter()
    if workers == 1:
        ranked = rank_chunk(q, dictionary, max_distance, top_n, cost, transpositions=transpositions, cancel=cancel)
    else:
        ranked = _rank_parallel(q, dictionary, max_distance, top_n, cost, transpositions, workers, chunk_size, cancel)
    log.debug(
        "suggest %r: %d candidate(s) within %d in %.3fs (workers=%d)",
        detokenize(q),
        len(ranked),
        max_distance,
        time.perf_counter() - t0,
        workers,
    )
    return SuggestionResult(candidates=tuple(ranked))
