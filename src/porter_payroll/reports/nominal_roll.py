"""Nominal roll spreadsheet: days worked and pay per porter for one month."""
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Sequence

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

SHEET_NAME = "Nominal Roll"
COLUMN_WIDTH = 20
HEADERS = [
    "S No",
    "Account No",
    "Name of Porter",
    "Father Name",
    "No of Days",
    "Per Day Rate",
    "Total Amount",
    "Remarks",
]
# Title on row 1, blank row 2, header row 3.
HEADER_ROW = 3

_THIN = Side(style="thin")
_BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)


@dataclass(frozen=True)
class NominalRollRow:
    account_no: str
    name: str
    father_name: str
    days_worked: int
    per_day_rate: float
    total_amount: float


def nominal_roll_filename(month: str) -> str:
    return f"Nominal_Roll_{month}.xlsx"


def build_nominal_roll(rows: Sequence[NominalRollRow], month: str) -> bytes:
    df = pd.DataFrame(
        [
            [idx, r.account_no, r.name, r.father_name, r.days_worked, r.per_day_rate, r.total_amount, ""]
            for idx, r in enumerate(rows, start=1)
        ],
        columns=HEADERS,
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME, startrow=HEADER_ROW - 1)
        sheet = writer.sheets[SHEET_NAME]

        sheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(HEADERS))
        title = sheet.cell(row=1, column=1, value=f"NOMINAL ROLL OF PORTER MONTH OF {month.upper()}")
        title.font = Font(bold=True, size=14)
        title.alignment = Alignment(horizontal="center")

        for cell in sheet[HEADER_ROW]:
            cell.font = Font(bold=True)

        for row in sheet.iter_rows(min_row=1, max_row=sheet.max_row, max_col=len(HEADERS)):
            for cell in row:
                if row[0].row == 2:
                    continue
                cell.border = _BORDER

        for col in range(1, len(HEADERS) + 1):
            sheet.column_dimensions[sheet.cell(row=HEADER_ROW, column=col).column_letter].width = COLUMN_WIDTH

    return output.getvalue()
