"""
Corpus file loading.

A corpus file is a JSON document nested four levels deep:

    [                                  # documents
      [                                # sentences
        [                              # words
          [["ก", "บ"], 5],             # (chars, tag)
          ...
        ]
      ]
    ]

The decoder is strict: a file that does not follow this layout is an input
error for the whole run, since a partial corpus cannot be reduced.

Also here: glob expansion of source patterns, the non-Thai char list file
and the human readable buffer size ("16M").
"""
from __future__ import annotations
import glob
import json
import os
import re
from typing import Iterable, List

from .config import ENCODING, SYMBOL_MAX
from .errors import CorpusError
from .models import Corpus, Document, Sentence, Word

# Progress logging (set CORPUS_VERBOSE=1 to enable)
def _verbose() -> bool:
    return os.environ.get("CORPUS_VERBOSE") == "1"


_GLOB_MAGIC = re.compile(r"[*?[]")
_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmgt]?)(i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "k": 1 << 10, "m": 1 << 20, "g": 1 << 30, "t": 1 << 40}


def parse_size(text: str) -> int:
    """
    Parse a buffer size such as "16M", "512k", "1GiB" or "4096" into bytes.
    Units are binary multiples.
    """
    m = _SIZE_RE.match(str(text))
    if not m:
        raise ValueError(f"invalid size: {text!r}")
    number, unit, _ = m.groups()
    size = int(float(number) * _SIZE_UNITS[unit.lower()])
    if size <= 0:
        raise ValueError(f"size must be greater than 0: {text!r}")
    return size


def resolve_sources(patterns: Iterable[str]) -> List[str]:
    """
    Expand glob patterns into concrete file paths.
    Pattern order is kept; matches of one pattern are sorted for reproducibility.
    """
    out: List[str] = []
    for pattern in patterns:
        if _GLOB_MAGIC.search(pattern):
            matches = sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))
            if not matches:
                raise CorpusError(pattern, "pattern matched no files")
            out.extend(matches)
        else:
            out.append(pattern)
    return out


def load_char_list(path: str) -> List[str]:
    """
    Read the non-Thai chars to vectorize, one per line.
    Only the first char of a line is used; an empty line stands for "\\n".
    Result is deduplicated and sorted.
    """
    try:
        with open(path, "r", encoding=ENCODING, newline="") as f:
            text = f.read()
    except OSError as e:
        raise CorpusError(path, f"invalid char-list-file path ({e.strerror or e})") from e
    # only "\n" (optionally "\r\n") ends a line; other line breaks are listable chars
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    lines = [ln[:-1] if ln.endswith("\r") else ln for ln in lines]
    return sorted({(ln[0] if ln else "\n") for ln in lines})


# ---- schema checks ----

def _expect_list(value, path: str, where: str) -> list:
    if not isinstance(value, list):
        raise CorpusError(path, f"{where}: expected a list, got {type(value).__name__}")
    return value


def _decode_word(raw, path: str, where: str) -> Word:
    if not isinstance(raw, list) or len(raw) != 2:
        raise CorpusError(path, f"{where}: expected a [chars, tag] pair")
    chars, tag = raw
    _expect_list(chars, path, f"{where} chars")
    for ch in chars:
        if not isinstance(ch, str) or len(ch) != 1:
            raise CorpusError(path, f"{where}: expected a single character, got {ch!r}")
    # bool is an int subclass but is not a valid tag
    if isinstance(tag, bool) or not isinstance(tag, int) or not 0 <= tag <= SYMBOL_MAX:
        raise CorpusError(path, f"{where}: tag must be an integer in 0..{SYMBOL_MAX}, got {tag!r}")
    return chars, tag


def decode_corpus(data, path: str = "<memory>") -> Corpus:
    """Validate already parsed JSON against the documents/sentences/words layout."""
    corpus: Corpus = []
    for d, raw_doc in enumerate(_expect_list(data, path, "corpus")):
        doc: Document = []
        for s, raw_sent in enumerate(_expect_list(raw_doc, path, f"document {d}")):
            sent: Sentence = [
                _decode_word(raw_word, path, f"document {d} sentence {s} word {w}")
                for w, raw_word in enumerate(_expect_list(raw_sent, path, f"document {d} sentence {s}"))
            ]
            doc.append(sent)
        corpus.append(doc)
    return corpus


def read_corpus(path: str, buf_size: int = -1) -> Corpus:
    """
    Open and decode one corpus file.
    buf_size is passed to open() as the read buffer (<= 1 uses the default).
    """
    buffering = buf_size if buf_size > 1 else -1
    try:
        with open(path, "r", encoding=ENCODING, buffering=buffering) as f:
            data = json.load(f)
    except OSError as e:
        raise CorpusError(path, f"cannot open corpus ({e.strerror or e})") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CorpusError(path, f"cannot decode corpus ({e})") from e

    corpus = decode_corpus(data, path)
    if _verbose():
        words = sum(len(sent) for doc in corpus for sent in doc)
        print(f"[decoded] {path} documents={len(corpus):,} words={words:,}")
    return corpus
