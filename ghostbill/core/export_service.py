import csv
import io
from datetime import date as Date
from typing import List, Optional
from uuid import UUID

from ghostbill.core import calendar_math
from ghostbill.core.recurrence import format_date_only
from ghostbill.domain.models.enums.export_kind import ExportKind
from ghostbill.domain.schemas.transaction import TransactionDB
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository

CSV_HEADER = ["date", "merchant", "category", "amount", "currency", "note"]
UTF8_BOM = b"\xef\xbb\xbf"


class ExportTransactionsService:
    def __init__(self, repo: Optional[TransactionRepository] = None):
        self.repo = repo or TransactionRepository()

    def fetch_for_export(
        self,
        user_id: UUID,
        kind: ExportKind,
        month: Optional[Date] = None,
    ) -> List[TransactionDB]:
        start, end = calendar_math.month_bounds(month) if month else (None, None)
        if kind is ExportKind.income:
            return self.repo.list(user_id, start=start, end=end, income=True)
        if kind is ExportKind.expenses:
            return self.repo.list(user_id, start=start, end=end, spend_only=True)
        return self.repo.list(user_id, start=start, end=end)

    @staticmethod
    def make_csv(rows: List[TransactionDB]) -> bytes:
        """
        Render rows as CSV for spreadsheet import.

        UTF-8 with a BOM for Excel. Fields holding a comma, quote or newline
        are quoted with inner quotes doubled. The csv module also quotes a
        field holding a bare carriage return, so such a value survives a
        spreadsheet import as one cell. Lines are joined with "\\n" and there
        is no trailing newline.
        """
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerow(CSV_HEADER)
        for t in rows:
            writer.writerow([
                format_date_only(t.date),
                t.merchant or "",
                t.category or "",
                f"{t.amount:.2f}",
                t.currency or "",
                t.note or "",
            ])
        return UTF8_BOM + buf.getvalue().rstrip("\n").encode("utf-8")
