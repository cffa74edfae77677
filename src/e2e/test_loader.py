# src/e2e/test_loader.py

import json
from pathlib import Path

import pytest

from corpus_analysis.errors import CorpusError
from corpus_analysis.loader import decode_corpus, load_char_list, parse_size, read_corpus, resolve_sources


@pytest.mark.parametrize("text,expected", [
    ("4096", 4096),
    ("16M", 16 * 1024 * 1024),
    ("512k", 512 * 1024),
    ("1GiB", 1 << 30),
    ("2 MB", 2 << 20),
    ("1.5K", 1536),
])
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "16X", "0", "-1M"])
def test_parse_size_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_size(text)


def test_resolve_sources_keeps_pattern_order(tmp_path: Path):
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "sub").mkdir()
    for name in ("b/2.json", "b/1.json", "b/sub/3.json", "a.json"):
        (tmp_path / name).write_text("[]", encoding="utf-8")

    out = resolve_sources([str(tmp_path / "b" / "**" / "*.json"), str(tmp_path / "a.json")])
    assert [Path(p).relative_to(tmp_path).as_posix() for p in out] == [
        "b/1.json", "b/2.json", "b/sub/3.json", "a.json",
    ]


def test_resolve_sources_empty_glob_is_an_error(tmp_path: Path):
    with pytest.raises(CorpusError):
        resolve_sources([str(tmp_path / "*.json")])


def test_resolve_sources_plain_path_passes_through(tmp_path: Path):
    missing = str(tmp_path / "not-there.json")
    assert resolve_sources([missing]) == [missing]


def test_resolve_sources_expands_question_mark_and_brackets(tmp_path: Path):
    for name in ("c1.json", "c2.json", "cx.json"):
        (tmp_path / name).write_text("[]", encoding="utf-8")
    names = lambda out: [Path(p).name for p in out]
    assert names(resolve_sources([str(tmp_path / "c?.json")])) == ["c1.json", "c2.json", "cx.json"]
    assert names(resolve_sources([str(tmp_path / "c[12].json")])) == ["c1.json", "c2.json"]


def test_load_char_list_takes_first_char_dedups_and_sorts(tmp_path: Path):
    p = tmp_path / "chars.txt"
    p.write_text("b\nabc\n\n.\nb\n", encoding="utf-8")
    assert load_char_list(str(p)) == ["\n", ".", "a", "b"]


def test_load_char_list_splits_only_on_newlines(tmp_path: Path):
    p = tmp_path / "chars.txt"
    # form feed, NEL, line separator and vertical tab are entries, not line breaks
    p.write_bytes("\x0c\n\x85\n\u2028\n\x0b\n".encode("utf-8"))
    assert load_char_list(str(p)) == ["\x0b", "\x0c", "\x85", "\u2028"]


def test_load_char_list_accepts_crlf(tmp_path: Path):
    p = tmp_path / "chars.txt"
    p.write_bytes(b"a\r\n\r\n!\r\n")
    assert load_char_list(str(p)) == ["\n", "!", "a"]


def test_load_char_list_missing_file(tmp_path: Path):
    with pytest.raises(CorpusError):
        load_char_list(str(tmp_path / "missing.txt"))


def test_read_corpus_roundtrip(tmp_path: Path):
    data = [[[[["ก", "บ"], 5], [["a"], 0]]], [[]]]
    p = tmp_path / "c.json"
    p.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    assert read_corpus(str(p), 64) == [[[(["ก", "บ"], 5), (["a"], 0)]], [[]]]


def test_decode_corpus_names_the_bad_spot():
    with pytest.raises(CorpusError, match="document 0 sentence 1 word 0"):
        decode_corpus([[[[["ก"], 1]], [[["ก"], "x"]]]], "mem.json")
