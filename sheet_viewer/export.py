"""JSON export: ``{sheet_name: [ {header: value-or-null, ...}, ... ]}``."""

from __future__ import annotations

import json
from typing import Any

from sheet_viewer.model import TabularData


def export_rows(data: TabularData) -> list[dict[str, str | None]]:
    rows = []
    for record in data.rows:
        row: dict[str, str | None] = {}
        for header in data.headers:
            value = record.lookup(header)
            row[header] = value if value != "" else None
        rows.append(row)
    return rows


def export_sheet(data: TabularData) -> dict[str, list[dict[str, str | None]]]:
    return {data.sheet_name: export_rows(data)}


def json_dumps(payload: Any) -> str:
    # Key order is header order, so no sort_keys here.
    return json.dumps(payload, indent=2, ensure_ascii=False)


def export_json(data: TabularData) -> str:
    return json_dumps(export_sheet(data))
