from __future__ import annotations
import os

GRAM: int = 3

# Codes and tags are stored in one unsigned byte; code 0 marks an excluded char.
SYMBOL_MAX: int = 255
FIRST_CODE: int = 1

# Thai block (inclusive); chars outside it need to be listed explicitly
THAI_FIRST: int = 0x0E01
THAI_LAST: int = 0x0E7F

ENCODING: str = "utf-8"
DEFAULT_INPUT_BUFFER: str = "16M"
DEFAULT_OUT: str = "out.csv"

# workers
_cpu = os.cpu_count() or 4
WORKERS: int = _cpu * 2

# /* ~~~ n-gram counter: offsets per materialization task ~~~ */
WINDOW_CHUNK: int = 4096

# Windows start at offsets [0, N - g); True also counts the one at N - g.
INCLUDE_LAST_WINDOW: bool = False

# Shown in place of code 0 when windows are decoded back to text
EXCLUDED_GLYPH: str = "�"
