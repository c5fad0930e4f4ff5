"""제안 Excel 보고서 생성.

Builds the spreadsheet report of the suggestion collection (openpyxl).
"""

from collections.abc import Sequence
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from suggestion_box.schemas.suggestion import SuggestionRecord

REPORT_HEADERS: list[str] = [
    "id",
    "created",
    "department",
    "tag",
    "priority",
    "status",
    "submitted_by",
    "text",
    "admin_response",
    "responded_date",
]


def _cell_value(record: SuggestionRecord, column: str) -> str:
    value = getattr(record, column)
    if value is None:
        return ""
    if column in ("created", "responded_date"):
        return value.strftime("%Y-%m-%d %H:%M")
    if column in ("status", "priority"):
        return value.value
    return str(value)


def build_suggestions_workbook(records: Sequence[SuggestionRecord]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Suggestions"

    # Header styling
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="6C5CE7", end_color="6C5CE7", fill_type="solid")
    for col_idx, header in enumerate(REPORT_HEADERS, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for record in records:
        ws.append([_cell_value(record, column) for column in REPORT_HEADERS])

    # 본문 열은 넓게, 줄바꿈 허용 (Wide, wrapped text columns)
    for letter, width in (("A", 28), ("B", 18), ("C", 20), ("H", 60), ("I", 50)):
        ws.column_dimensions[letter].width = width
    for row in ws.iter_rows(min_row=2, min_col=8, max_col=9):
        for cell in row:
            cell.alignment = Alignment(wrap_text=True, vertical="top")

    ws.freeze_panes = "A2"

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
