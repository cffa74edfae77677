# corpus_analysis/alphabet.py
"""
Shared character -> code table used by every vectorizer worker.

The table and its counter sit behind one readers-writer lock and are only
reachable through assign()/lookup(). Lookups of known chars share the lock;
a new char takes the lock exclusively for one insert and one increment.
"""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional

from .config import FIRST_CODE, SYMBOL_MAX
from .errors import AlphabetCapacityError


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class AlphabetTable:
    """
    Incremental alphabet. Codes start at FIRST_CODE and grow by one per new
    char; 0 is never handed out. A mapping never changes once assigned.
    """

    def __init__(self, first_code: int = FIRST_CODE, max_code: int = SYMBOL_MAX) -> None:
        if first_code < 1:
            raise ValueError("first_code must be >= 1 (0 marks excluded chars)")
        self._codes: Dict[str, int] = {}
        self._next = first_code
        self._max = max_code
        self._lock = ReadWriteLock()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, int], max_code: int = SYMBOL_MAX) -> "AlphabetTable":
        """Seed a table with a pre-defined map; new chars continue after its largest code."""
        codes = dict(mapping)
        if any(c < 1 or c > max_code for c in codes.values()):
            raise ValueError(f"codes must be in 1..{max_code}")
        if len(set(codes.values())) != len(codes):
            raise ValueError("codes must be distinct")
        table = cls(first_code=max(codes.values(), default=FIRST_CODE - 1) + 1, max_code=max_code)
        table._codes = codes
        return table

    # ---- allocation ----
    def assign(self, ch: str) -> int:
        """Return the code of ch, allocating the next one if ch is new."""
        with self._lock.read():
            code = self._codes.get(ch)
        if code is not None:
            return code

        with self._lock.write():
            # another worker may have inserted ch between the two sections
            code = self._codes.get(ch)
            if code is None:
                if self._next > self._max:
                    raise AlphabetCapacityError(
                        f"alphabet is full: cannot assign a code to {ch!r} "
                        f"(codes are limited to {self._max})"
                    )
                code = self._next
                self._codes[ch] = code
                self._next += 1
        return code

    def lookup(self, ch: str) -> Optional[int]:
        with self._lock.read():
            return self._codes.get(ch)

    # ---- getters ----
    @property
    def next_code(self) -> int:
        with self._lock.read():
            return self._next

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current char -> code map."""
        with self._lock.read():
            return dict(self._codes)

    def reverse(self) -> Dict[int, str]:
        """code -> char, for turning windows back into text."""
        return {code: ch for ch, code in self.snapshot().items()}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._codes)

    def __contains__(self, ch: object) -> bool:
        with self._lock.read():
            return ch in self._codes
