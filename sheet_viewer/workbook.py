"""
workbook.py — Worksheet access for sheet-viewer

Supports: .xlsx .xlsm (openpyxl) and .xls .ods .csv .tsv .txt (pandas)

Public API:
    book  = load_book("path/to/file.xlsx")
    sheet = resolve_worksheet(book, name="People")
    sheet.used_range()        -> (min_row, min_col, max_row, max_col) or None
    sheet.cell(row, column)   -> SheetCell (1-based coordinates)

Every reader is snapshotted into the same grid shape, so extraction never
needs to know where a sheet came from. Only cells holding a value are kept.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

import chardet
import numpy as np
import pandas as pd
from openpyxl import load_workbook

from sheet_viewer.model import fold_case
from sheet_viewer.normalize import is_blank

OPENPYXL_FORMATS = {".xlsx", ".xlsm"}
PANDAS_EXCEL_FORMATS = {".xls", ".ods"}
TEXT_FORMATS = {".csv", ".tsv", ".txt"}
ALL_FORMATS = OPENPYXL_FORMATS | PANDAS_EXCEL_FORMATS | TEXT_FORMATS


class WorkbookError(ValueError):
    """The file exists but could not be read as a workbook."""


@dataclass(frozen=True)
class SheetCell:
    value: Any = None
    data_type: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not is_populated(self.value)


EMPTY_CELL = SheetCell()


def is_populated(value) -> bool:
    # Whitespace-only text still occupies the cell.
    return not is_blank(value) and value != ""


class GridWorksheet:
    """A worksheet reduced to its populated cells, keyed by 1-based (row, column)."""

    def __init__(self, name: str, cells: dict[tuple[int, int], SheetCell]) -> None:
        self.name = name
        self._cells = cells
        self._rows: dict[int, list[int]] = {}
        for row, column in sorted(cells):
            self._rows.setdefault(row, []).append(column)

    def cell(self, row: int, column: int) -> SheetCell:
        return self._cells.get((row, column), EMPTY_CELL)

    def used_range(self) -> tuple[int, int, int, int] | None:
        if not self._cells:
            return None
        rows = [row for row, _ in self._cells]
        columns = [column for _, column in self._cells]
        return min(rows), min(columns), max(rows), max(columns)

    def row_is_empty(self, row: int) -> bool:
        return row not in self._rows

    def used_columns(self, row: int) -> list[int]:
        return list(self._rows.get(row, []))


def _grid_from_values(name: str, rows: Iterable[Iterable[Any]]) -> GridWorksheet:
    cells: dict[tuple[int, int], SheetCell] = {}
    for row_idx, values in enumerate(rows, start=1):
        for col_idx, value in enumerate(values, start=1):
            if isinstance(value, np.generic):
                value = value.item()
            if value is not None and pd.isna(value):
                value = None
            if is_populated(value):
                cells[(row_idx, col_idx)] = SheetCell(value)
    return GridWorksheet(name, cells)


def sheet_from_openpyxl(ws) -> GridWorksheet:
    cells: dict[tuple[int, int], SheetCell] = {}
    for row in ws.iter_rows():
        for cell in row:
            if is_populated(cell.value):
                cells[(cell.row, cell.column)] = SheetCell(cell.value, cell.data_type)
    return GridWorksheet(ws.title, cells)


def sheet_from_frame(name: str, frame: pd.DataFrame) -> GridWorksheet:
    return _grid_from_values(
        name,
        ([frame.iat[r, c] for c in range(frame.shape[1])] for r in range(frame.shape[0])),
    )


class SheetBook:
    """Ordered worksheets of one file, snapshotted on first access."""

    def __init__(self, path: Path, sheet_names: list[str], loader) -> None:
        self.path = path
        self.sheet_names = sheet_names
        self._loader = loader
        self._loaded: dict[str, GridWorksheet] = {}

    def __len__(self) -> int:
        return len(self.sheet_names)

    def worksheet(self, name: str) -> GridWorksheet:
        if name not in self._loaded:
            self._loaded[name] = self._loader(name)
        return self._loaded[name]


# ── Text decoding (CSV family) ─────────────────────────────────────────────────

def _detect_encoding(raw: bytes) -> str:
    detected = chardet.detect(raw).get("encoding")
    return detected or "utf-8"


def _read_text_safely(raw: bytes, preferred_encoding: str) -> str:
    """Decode line by line: UTF-8, then the detected encoding, then latin-1."""
    decoded_lines: list[str] = []
    for raw_line in raw.split(b"\n"):
        decoded: str | None = None
        for enc in ("utf-8", preferred_encoding, "latin-1"):
            try:
                decoded = raw_line.decode(enc)
                break
            except (LookupError, UnicodeDecodeError):
                continue
        if decoded is None:
            decoded = raw_line.decode("cp1252", errors="replace")
        decoded_lines.append(decoded.replace("\x00", ""))
    return "\n".join(decoded_lines)


def _detect_delimiter(text: str, suffix: str) -> str:
    if suffix == ".tsv":
        return "\t"
    sample = "\n".join([line for line in text.splitlines() if line.strip()][:25])
    if not sample:
        return ","
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
    except csv.Error:
        return ","


# ── Format loaders ─────────────────────────────────────────────────────────────

def _load_openpyxl(path: Path) -> SheetBook:
    try:
        # data_only: show cached formula results, never formulas.
        wb = load_workbook(path, data_only=True)
    except Exception as exc:
        raise WorkbookError(f"Could not read workbook: {exc}") from exc
    return SheetBook(path, list(wb.sheetnames), lambda name: sheet_from_openpyxl(wb[name]))


def _load_pandas_excel(path: Path, suffix: str) -> SheetBook:
    if suffix == ".xls":
        try:
            import xlrd  # noqa: F401
        except ImportError:
            raise ImportError(".xls files require xlrd — run: pip install xlrd")
    if suffix == ".ods":
        try:
            import odf  # noqa: F401
        except ImportError:
            raise ImportError(".ods files require odfpy — run: pip install odfpy")
    try:
        frames = pd.read_excel(path, sheet_name=None, header=None)
    except Exception as exc:
        raise WorkbookError(f"Could not read workbook: {exc}") from exc
    return SheetBook(path, list(frames), lambda name: sheet_from_frame(name, frames[name]))


def _load_text(path: Path, suffix: str) -> SheetBook:
    raw = path.read_bytes()
    text = _read_text_safely(raw, _detect_encoding(raw))
    delimiter = _detect_delimiter(text, suffix)
    if text.strip():
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                sep=delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                engine="python",
            )
        except Exception as exc:
            raise WorkbookError(f"Could not parse {suffix} file: {exc}") from exc
    else:
        frame = pd.DataFrame()
    name = path.stem
    return SheetBook(path, [name], lambda _name: sheet_from_frame(name, frame))


def load_book(path: str | Path) -> SheetBook:
    """Open ``path`` read-only. Raises FileNotFoundError, ImportError or WorkbookError."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix in OPENPYXL_FORMATS:
        return _load_openpyxl(path)
    if suffix in PANDAS_EXCEL_FORMATS:
        return _load_pandas_excel(path, suffix)
    if suffix in TEXT_FORMATS:
        return _load_text(path, suffix)
    raise WorkbookError(
        f"Unsupported file type '{suffix or '[missing extension]'}'. "
        f"Supported: {', '.join(sorted(ALL_FORMATS))}"
    )


def resolve_worksheet(
    book: SheetBook,
    name: str | None = None,
    index: int | None = None,
) -> GridWorksheet | None:
    """
    Pick a worksheet by name, then by 1-based index, else the first sheet.

    Names match exactly first, then case-insensitively. An unknown name
    returns None; an out-of-range index falls through to the first sheet.
    """
    if name is not None and name.strip():
        if name in book.sheet_names:
            return book.worksheet(name)
        folded = fold_case(name)
        for candidate in book.sheet_names:
            if fold_case(candidate) == folded:
                return book.worksheet(candidate)
        return None
    if not book.sheet_names:
        return None
    if index is not None and 1 <= index <= len(book.sheet_names):
        return book.worksheet(book.sheet_names[index - 1])
    return book.worksheet(book.sheet_names[0])
