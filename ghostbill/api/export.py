from datetime import date as Date
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from ghostbill.api.deps import get_current_user_id, get_export_service
from ghostbill.core.export_service import ExportTransactionsService
from ghostbill.domain.models.enums.export_kind import ExportKind

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("/transactions.csv")
def export_transactions(
    kind: ExportKind = ExportKind.both,
    month: Optional[Date] = None,
    user_id: UUID = Depends(get_current_user_id),
    export_service: ExportTransactionsService = Depends(get_export_service),
):
    rows = export_service.fetch_for_export(user_id, kind, month)
    suffix = f"-{month:%Y-%m}" if month else ""
    return Response(
        content=export_service.make_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="ghostbill-{kind.value}{suffix}.csv"'},
    )
