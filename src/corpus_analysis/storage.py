from __future__ import annotations
import csv
import json
import os
from dataclasses import fields
from typing import Dict, Iterable, List, Mapping, Union

from .alphabet import AlphabetTable
from .models import AnalysisReport

_COLUMNS = [f.name for f in fields(AnalysisReport)]


def _tmp_path(path: str) -> str:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    return f"{path}.tmp"


def save_report(reports: Union[AnalysisReport, Iterable[AnalysisReport]], path: str) -> None:
    """Write one CSV row per report (header first); replaces any existing file."""
    if isinstance(reports, AnalysisReport):
        reports = [reports]
    tmp = _tmp_path(path)
    with open(tmp, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=_COLUMNS)
        writer.writeheader()
        for r in reports:
            writer.writerow(r.as_row())
    os.replace(tmp, path)


def load_report(path: str) -> List[AnalysisReport]:
    out: List[AnalysisReport] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            out.append(AnalysisReport(
                gram=int(row["gram"]),
                files=int(row["files"]),
                total_chars=int(row["total_chars"]),
                unique_chars=int(row["unique_chars"]),
                unique_grams=int(row["unique_grams"]),
                parse_seconds=float(row["parse_seconds"]),
                analysis_seconds=float(row["analysis_seconds"]),
            ))
    return out


def save_alphabet(table: Union[AlphabetTable, Mapping[str, int]], path: str) -> None:
    """Dump char -> code as JSON, ordered by code."""
    mapping = table.snapshot() if isinstance(table, AlphabetTable) else dict(table)
    ordered = dict(sorted(mapping.items(), key=lambda kv: kv[1]))
    tmp = _tmp_path(path)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(ordered, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)


def load_alphabet(path: str) -> Dict[str, int]:
    with open(path, "r", encoding="utf-8") as f:
        return {str(k): int(v) for k, v in json.load(f).items()}
