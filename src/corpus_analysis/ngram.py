"""
Sort-based distinct n-gram counter.

Every window of `gram` consecutive codes is materialized as a `bytes` object
(codes are single bytes, so bytes ordering is lexicographic by position),
the windows are sorted, and each index where the sorted value changes marks
the start of a new distinct window. The number of such boundaries is the
number of distinct n-grams ("unique" = distinct type, not singleton).

Window offsets run over [0, N - gram). The window starting at N - gram is
not inspected unless include_last=True (or config.INCLUDE_LAST_WINDOW).
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from . import config as CFG
from .errors import GramLengthError


def window_count(n: int, gram: int, include_last: Optional[bool] = None) -> int:
    """Number of windows for a sequence of length n; raises if there are none."""
    if include_last is None:
        include_last = CFG.INCLUDE_LAST_WINDOW
    if gram <= 0:
        raise GramLengthError(f"gram length must be greater than 0, got {gram}")
    count = n - gram + (1 if include_last else 0)
    if count <= 0:
        raise GramLengthError(f"gram length {gram} exceeds sequence length {n}")
    return count


def _as_bytes(raw: Iterable[int]) -> bytes:
    if isinstance(raw, bytes):
        return raw
    try:
        return bytes(raw)
    except ValueError as e:
        raise ValueError(f"codes must be in 0..255: {e}") from e


def _materialize(data: bytes, gram: int, start: int, stop: int) -> List[bytes]:
    return [data[i:i + gram] for i in range(start, stop)]


def sorted_windows(
    gram: int,
    raw: Iterable[int],
    *,
    include_last: Optional[bool] = None,
    workers: Optional[int] = None,
    chunk: Optional[int] = None,
) -> List[bytes]:
    """Materialize every window (in parallel chunks of offsets) and sort them."""
    data = _as_bytes(raw)
    count = window_count(len(data), gram, include_last)
    chunk = max(1, chunk or CFG.WINDOW_CHUNK)
    bounds = [(s, min(s + chunk, count)) for s in range(0, count, chunk)]
    workers = max(1, min(workers or CFG.WORKERS, len(bounds)))

    if workers == 1:
        windows = _materialize(data, gram, 0, count)
    else:
        windows = []
        with ThreadPoolExecutor(max_workers=workers) as ex:
            # map() yields in submission order
            for part in ex.map(lambda b: _materialize(data, gram, b[0], b[1]), bounds):
                windows.extend(part)

    windows.sort()
    return windows


def boundaries(windows: List[bytes]) -> List[int]:
    """Indices in a sorted window list where a new distinct value starts."""
    if not windows:
        return []
    unique = [0]
    unique.extend(i + 1 for i, (a, b) in enumerate(zip(windows, windows[1:])) if a != b)
    return unique


def distinct_window_indices(
    gram: int,
    raw: Iterable[int],
    *,
    include_last: Optional[bool] = None,
    workers: Optional[int] = None,
) -> List[int]:
    """
    Boundary indices into the sorted window array, one per distinct window.

    Example:
        >>> distinct_window_indices(2, [1, 2, 1, 2, 3])
        [0, 2]

    Raises:
        GramLengthError: gram <= 0, or gram leaves no window (gram >= N).
    """
    return boundaries(sorted_windows(gram, raw, include_last=include_last, workers=workers))


def count_distinct(
    gram: int,
    raw: Iterable[int],
    *,
    include_last: Optional[bool] = None,
    workers: Optional[int] = None,
) -> int:
    return len(distinct_window_indices(gram, raw, include_last=include_last, workers=workers))


def distinct_windows(
    gram: int,
    raw: Iterable[int],
    *,
    include_last: Optional[bool] = None,
    workers: Optional[int] = None,
) -> List[Tuple[bytes, int]]:
    """(window, occurrences) for every distinct window, in sorted order."""
    windows = sorted_windows(gram, raw, include_last=include_last, workers=workers)
    idx = boundaries(windows)
    ends = idx[1:] + [len(windows)]
    return [(windows[s], e - s) for s, e in zip(idx, ends)]
