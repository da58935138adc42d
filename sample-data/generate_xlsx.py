#!/usr/bin/env python3
"""
Generates sample-data/sample.xlsx for trying every sheet-viewer style.

Run from the repo root:
    python sample-data/generate_xlsx.py
    sheet-viewer render sample-data/sample.xlsx --style tree --group-by Department

Sheets:
  "People"
    - Mixed cell types: text, dates, numbers, booleans, durations
    - Blank email for one row (exported as null)
    - An empty row between records (skipped)
    - Department values in mixed case (tree groups sort case-insensitively)
  "KPIs"
    - Two columns, so --style panel draws one box per metric
  "Empty"
    - No data at all
"""

from datetime import datetime, timedelta
from pathlib import Path

import openpyxl

OUTPUT = Path(__file__).parent / "sample.xlsx"

wb = openpyxl.Workbook()

# ── Sheet 1: People ──────────────────────────────────────────────────────────
ws = wb.active
ws.title = "People"
ws.append(["Name", "Email", "Department", "Joined", "Salary", "Remote", "Shift"])

data = [
    ["Ada Lovelace",   "ada@example.com",   "Ops",     datetime(2021, 4, 12, 9, 0),  1500.0,         True,  timedelta(hours=8)],
    ["Grace Hopper",   None,                "finance", datetime(2019, 1, 7, 8, 30),  1500.125,       False, timedelta(hours=7, minutes=30)],
    [None,             None,                None,      None,                         None,           None,  None],
    ["Alan Turing",    "alan@example.com",  "IT",      datetime(2020, 11, 2, 10, 15), 2200.123456789, True,  timedelta(days=1, hours=2)],
    ["Edsger Dijkstra", "ewd@example.com",  "Ops",     datetime(2022, 6, 30, 14, 45), 1875,          False, timedelta(hours=6)],
]
for row in data:
    ws.append(row)

# ── Sheet 2: KPIs (key/value) ────────────────────────────────────────────────
kpis = wb.create_sheet("KPIs")
kpis.append(["Metric", "Value"])
kpis.append(["Revenue", 125000])
kpis.append(["Churn", 0.025])
kpis.append(["NPS", 41])

# ── Sheet 3: Empty ───────────────────────────────────────────────────────────
wb.create_sheet("Empty")

wb.save(OUTPUT)
print(f"Created: {OUTPUT}")
