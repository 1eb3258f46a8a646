from datetime import date as Date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED
from ghostbill.api.deps import get_current_user_id, get_recurring_service
from ghostbill.core import recurrence
from ghostbill.core.recurring_transactions_service import RecurringTransactionsService
from ghostbill.domain.models.enums.status import RecurrenceStatus
from ghostbill.domain.models.dtos import (
    ConsumedOccurrence,
    RecurringTransactionCreate,
    RecurringTransactionOut,
    RecurringTransactionUpdate,
)

router = APIRouter(prefix="/recurring", tags=["Recurring Transactions"])


@router.get("/next-occurrence")
def preview_next_occurrence(date: str, frequency: Optional[str] = None):
    """Next occurrence for a YYYY-MM-DD date; next_date is null when the date is unparsable."""
    return {"next_date": recurrence.next_occurrence(date, frequency)}

@router.post("", response_model=RecurringTransactionOut, status_code=HTTP_201_CREATED)
def create_recurring(body: RecurringTransactionCreate, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.create(user_id, body)

@router.get("", response_model=List[RecurringTransactionOut])
def list_recurring(user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.list(user_id)

@router.get("/due", response_model=List[RecurringTransactionOut])
def list_due(as_of: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.list_due(user_id, as_of)

@router.get("/{id}", response_model=RecurringTransactionOut)
def get_recurring(id: UUID, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.get(user_id, id)

@router.patch("/{id}", response_model=RecurringTransactionOut)
def update_recurring(id: UUID, body: RecurringTransactionUpdate, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.update(user_id, id, body)

@router.post("/{id}/status/{status}", response_model=RecurringTransactionOut)
def set_status(id: UUID, status: RecurrenceStatus, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.set_status(user_id, id, status)

@router.post("/{id}/consume", response_model=ConsumedOccurrence)
def consume_occurrence(id: UUID, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    return recurring_service.consume_occurrence(user_id, id)

@router.delete("/{id}")
def delete_recurring(id: UUID, user_id: UUID = Depends(get_current_user_id), recurring_service: RecurringTransactionsService = Depends(get_recurring_service)):
    recurring_service.delete(user_id, id)
    return {"ok": True}
