"""
BEST corpus analysis.

Reduces a tagged corpus (documents -> sentences -> words -> chars) to a flat
stream of (code, tag) pairs over a shared, incrementally built alphabet, and
counts the distinct n-grams of that stream.

Main components:
- AlphabetTable: thread-safe char -> code allocator
- vectorize: parallel, order-preserving corpus vectorizer
- distinct_window_indices / count_distinct: sort-based distinct n-gram counter
- Engine: build once, analyze any gram length
"""
from .alphabet import AlphabetTable
from .engine import Engine
from .errors import AnalysisError, AlphabetCapacityError, CorpusError, GramLengthError
from .models import AnalysisReport
from .ngram import count_distinct, distinct_window_indices
from .vectorizer import vectorize

__version__ = "0.1.0"
__all__ = [
    "AlphabetTable",
    "Engine",
    "AnalysisReport",
    "AnalysisError",
    "AlphabetCapacityError",
    "CorpusError",
    "GramLengthError",
    "count_distinct",
    "distinct_window_indices",
    "vectorize",
]
