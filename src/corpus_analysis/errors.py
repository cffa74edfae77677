from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every fatal condition raised by the analysis core."""


class CorpusError(AnalysisError, RuntimeError):
    """A corpus file could not be opened, decoded or does not match the schema."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class GramLengthError(AnalysisError, ValueError):
    """Window length is not positive or leaves no window in the sequence."""


class AlphabetCapacityError(AnalysisError, OverflowError):
    """More distinct eligible characters than the symbol width can encode."""
