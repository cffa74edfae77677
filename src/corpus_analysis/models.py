from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Tuple

# Nested corpus layout as stored on disk:
#   documents -> sentences -> words -> (chars, tag)
Word = Tuple[List[str], int]
Sentence = List[Word]
Document = List[Sentence]
Corpus = List[Document]

# (code, tag); tag is non-zero only on the last char of a word
SymbolPair = Tuple[int, int]


@dataclass(frozen=True)
class AnalysisReport:
    gram: int
    files: int
    total_chars: int          # length of the flat symbol sequence
    unique_chars: int         # size of the alphabet table
    unique_grams: int         # distinct windows, not singletons
    parse_seconds: float
    analysis_seconds: float

    def as_row(self) -> dict:
        return asdict(self)
