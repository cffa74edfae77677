# corpus_analysis/engine.py
from __future__ import annotations

import os
import time
import logging
from array import array
from typing import Dict, Iterable, List, Optional, Tuple

from . import config as CFG
from .alphabet import AlphabetTable
from .loader import parse_size
from .models import AnalysisReport
from .ngram import count_distinct, distinct_windows as _distinct_windows
from .vectorizer import split_pairs, vectorize

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the vectorizer (corpus files -> flat (code, tag) stream, shared alphabet),
      - the distinct n-gram counter over the code half of that stream.

    Public API (used by CLI/Flask):
      * build(sources, ...):   vectorize all corpus files once, keep the stream
      * analyze(gram):         distinct n-gram count for any gram -> AnalysisReport
      * distinct_windows(...): sorted distinct windows decoded back to text
      * shutdown():            drop the cached stream
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.table: Optional[AlphabetTable] = None
        self.codes: Optional[array] = None
        self.tags: Optional[array] = None
        self.sources: List[str] = []
        self.parse_seconds: float = 0.0
        self._workers: Optional[int] = None

    # /* ~~~ Vectorize every corpus file into one cached stream ~~~ */
    def build(
        self,
        sources: Iterable[str],
        *,
        char_include_list: Iterable[str] = (),
        buf_size: Optional[int] = None,        # bytes; default config.DEFAULT_INPUT_BUFFER
        workers: Optional[int] = None,
        table: Optional[AlphabetTable] = None, # pre-seeded alphabet, else a fresh one
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["CORPUS_VERBOSE"] = "1"

        sources = [str(s) for s in sources]
        if not sources:
            raise ValueError("build(): at least one corpus file is required")
        if buf_size is None:
            buf_size = parse_size(CFG.DEFAULT_INPUT_BUFFER)

        table = table if table is not None else AlphabetTable()
        log.info("Vectorizing %d source files (buffer=%d bytes)", len(sources), buf_size)

        t0 = time.perf_counter()
        pairs = vectorize(buf_size, char_include_list, sources, table, workers=workers)
        self.parse_seconds = time.perf_counter() - t0

        self.codes, self.tags = split_pairs(pairs)
        self.table = table
        self.sources = sources
        self._workers = workers

        log.info("Total parsing took %.3f s", self.parse_seconds)
        log.info("Total %d characters in corpus", len(self.codes))
        log.info("Total %d unique characters", len(table))

    # ------------- query -------------

    # /* ~~~ Distinct n-gram count on the cached stream ~~~ */
    def analyze(self, gram: int = CFG.GRAM, *, include_last: Optional[bool] = None) -> AnalysisReport:
        self._require_built()
        t0 = time.perf_counter()
        unique = count_distinct(gram, self.codes, include_last=include_last, workers=self._workers)
        elapsed = time.perf_counter() - t0
        log.info("Total unique analysis time is %.3f s", elapsed)
        log.info("Total %d unique %d-gram", unique, gram)
        return AnalysisReport(
            gram=gram,
            files=len(self.sources),
            total_chars=len(self.codes),
            unique_chars=len(self.table),
            unique_grams=unique,
            parse_seconds=self.parse_seconds,
            analysis_seconds=elapsed,
        )

    def distinct_windows(
        self,
        gram: int,
        *,
        limit: Optional[int] = None,
        include_last: Optional[bool] = None,
    ) -> List[Tuple[str, int]]:
        """Sorted distinct windows as text, with their occurrence counts."""
        self._require_built()
        rev = self.table.reverse()
        rows = _distinct_windows(gram, self.codes, include_last=include_last, workers=self._workers)
        if limit is not None:
            rows = rows[:max(0, limit)]
        return [("".join(rev.get(c, CFG.EXCLUDED_GLYPH) for c in w), n) for w, n in rows]

    @property
    def alphabet(self) -> Dict[str, int]:
        self._require_built()
        return self.table.snapshot()

    @property
    def built(self) -> bool:
        return self.codes is not None

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.codes = None
        self.tags = None
        self.table = None
        self.sources = []
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_built(self) -> None:
        if self.codes is None or self.table is None:
            raise RuntimeError("Engine not initialized. Call build() first.")
