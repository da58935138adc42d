from __future__ import annotations

from sheet_viewer.model import RowRecord, TabularData
from sheet_viewer.normalize import cell_to_text
from sheet_viewer.workbook import GridWorksheet


def read_headers(sheet: GridWorksheet, header_row: int) -> list[str]:
    """
    Trimmed labels of the used cells of ``header_row``, in column order.

    Empty cells between labels are skipped; whitespace-only cells still count
    and trim to ``""``. A row with no used cells yields a single blank header.
    """
    used = sheet.used_columns(header_row)
    if not used:
        return [""]
    headers = []
    for column in used:
        cell = sheet.cell(header_row, column)
        headers.append(cell_to_text(cell.value, cell.data_type).strip())
    return headers


def extract_sheet(sheet: GridWorksheet, max_rows: int | None = None) -> TabularData:
    """
    Read the used range of ``sheet`` into a ``TabularData``.

    The first used row is the header row. Blank rows are skipped, and
    ``max_rows`` bounds the number of kept rows, never the headers.
    """
    used = sheet.used_range()
    if used is None:
        header_row, last_row = 1, 1
    else:
        header_row, _, last_row, _ = used

    headers = read_headers(sheet, header_row)
    rows: list[RowRecord] = []
    for row_idx in range(header_row + 1, last_row + 1):
        if max_rows is not None and len(rows) >= max_rows:
            break
        if sheet.row_is_empty(row_idx):
            continue
        record = RowRecord()
        for col_idx, header in enumerate(headers, start=1):
            cell = sheet.cell(row_idx, col_idx)
            record[header] = cell_to_text(cell.value, cell.data_type)
        rows.append(record)

    return TabularData(sheet.name, tuple(headers), tuple(rows))
