"""
Alphabet vectorizer.

Turns corpus files into one flat list of (code, tag) pairs:
  * a char inside the Thai block, or listed in char_include_list, gets its
    code from the shared AlphabetTable (allocated on first sight);
  * any other char becomes (0, 0);
  * every pair starts with tag 0 and the last pair of each word then takes
    the word's tag.

Files are processed concurrently, one task per file, but the output is
always in input order: per-file results are collected from the futures in
submission order, never in completion order.
"""
from __future__ import annotations
import logging
from array import array
from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from .alphabet import AlphabetTable
from .config import THAI_FIRST, THAI_LAST, WORKERS
from .loader import read_corpus
from .models import Corpus, SymbolPair

log = logging.getLogger(__name__)


def is_eligible(ch: str, include: AbstractSet[str]) -> bool:
    cp = ord(ch)
    return THAI_FIRST <= cp <= THAI_LAST or ch in include


def vectorize_corpus(corpus: Corpus, char_include_list: Iterable[str], table: AlphabetTable) -> List[SymbolPair]:
    """Vectorize an already decoded corpus, document -> sentence -> word -> char."""
    include = char_include_list if isinstance(char_include_list, frozenset) else frozenset(char_include_list)
    out: List[SymbolPair] = []
    for doc in corpus:
        for sentence in doc:
            for chars, tag in sentence:
                if not chars:
                    continue
                for ch in chars:
                    out.append((table.assign(ch), 0) if is_eligible(ch, include) else (0, 0))
                out[-1] = (out[-1][0], tag)
    return out


def _vectorize_file(path: str, buf_size: int, include: frozenset, table: AlphabetTable) -> List[SymbolPair]:
    log.info("Parsing: %s", path)
    return vectorize_corpus(read_corpus(path, buf_size), include, table)


def vectorize(
    buf_size: int,
    char_include_list: Iterable[str],
    corpuses: Sequence[str],
    table: AlphabetTable,
    *,
    workers: Optional[int] = None,
) -> List[SymbolPair]:
    """
    Vectorize every corpus file in `corpuses` against the shared `table`.

    Args:
        buf_size: read buffer size in bytes for each corpus file.
        char_include_list: non-Thai chars that still get a real code.
        corpuses: corpus file paths; output follows this order.
        table: alphabet shared by all workers; grows as new chars appear.
        workers: thread count (default: config.WORKERS).

    Returns:
        Flat list of (code, tag) pairs for all files, in input order.

    Raises:
        CorpusError: a file cannot be opened or decoded (aborts the run).
        AlphabetCapacityError: more eligible chars than available codes.
    """
    paths = [str(p) for p in corpuses]
    if not paths:
        return []
    include = frozenset(char_include_list)
    workers = max(1, min(workers or WORKERS, len(paths)))

    out: List[SymbolPair] = []
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(_vectorize_file, p, buf_size, include, table) for p in paths]
        try:
            for fut in futures:
                out.extend(fut.result())
        except BaseException:
            # partial corpora are not a valid result; drop queued files
            for fut in futures:
                fut.cancel()
            raise
    return out


def split_pairs(pairs: Iterable[SymbolPair]) -> Tuple[array, array]:
    """Unzip (code, tag) pairs into two byte arrays."""
    codes, tags = array("B"), array("B")
    for code, tag in pairs:
        codes.append(code)
        tags.append(tag)
    return codes, tags
