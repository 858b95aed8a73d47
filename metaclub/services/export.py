from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Iterable

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FILENAME = "registrations.xlsx"

# (header, row key, column width) in sheet order
EXPORT_COLUMNS = [
    ("Date", "created_at", 20),
    ("Event ID", "event_id", 10),
    ("Team Name", "team_name", 25),
    ("Type", "team_type", 10),
    ("Participant Name", "participant_name", 20),
    ("Email", "email", 30),
    ("Phone", "phone", 15),
    ("Role", "role", 15),
    ("Reg ID", "registration_number", 20),
    ("Ticket ID", "ticket_id", 20),
    ("Payment Status", "payment_status", 15),
    ("Amount Paid", "amount_paid", 15),
    ("Team Total", "total_amount", 15),
    ("Transaction ID", "transaction_id", 20),
    ("Screenshot URL", "screenshot_path", 50),
]


def _cell_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        # Control characters are not allowed in worksheets
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def build_registrations_workbook(rows: Iterable[Dict[str, Any]]) -> bytes:
    """Render the joined registrations projection as an .xlsx file."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Registrations"

    sheet.append([header for header, _, _ in EXPORT_COLUMNS])
    for index, (_, _, width) in enumerate(EXPORT_COLUMNS, start=1):
        sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = width

    for row in rows:
        sheet.append([_cell_value(row.get(key)) for _, key, _ in EXPORT_COLUMNS])
        # User text is data, never a formula
        for cell in sheet[sheet.max_row]:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
