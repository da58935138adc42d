from __future__ import annotations

from typing import Iterable

from sheet_viewer.model import TabularData


def parse_columns(raw: str | None) -> list[str]:
    """Split a ``--columns`` value on commas, trimming entries and dropping empties."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def project_columns(data: TabularData, requested: Iterable[str] | None) -> TabularData:
    """
    Keep only headers named in ``requested`` (exact, case-sensitive match).

    Header order follows the sheet, not the request. Unknown names are
    ignored, and row records are shared with the input untouched.
    """
    wanted = set(requested or ())
    if not wanted:
        return data
    return data.with_headers(header for header in data.headers if header in wanted)
