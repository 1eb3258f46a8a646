from datetime import date as Date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED
from ghostbill.api.deps import (
    get_checker_service,
    get_current_user_id,
    get_filter_service,
    get_transactions_service,
)
from ghostbill.core.transactions_service import TransactionsService
from ghostbill.core.filter_service import FilterTransactionsService
from ghostbill.core.transaction_checker_service import TransactionCheckerService
from ghostbill.domain.models.dtos import (
    FreeQuota,
    IncomeCreate,
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
    TxMonth,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionOut, status_code=HTTP_201_CREATED)
def create_transaction(body: TransactionCreate, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.create(user_id, body)

@router.get("", response_model=List[TransactionOut])
def list_transactions(month: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.list(user_id, month)

@router.post("/income", response_model=TransactionOut, status_code=HTTP_201_CREATED)
def report_income(body: IncomeCreate, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.insert_income_for_month(user_id, body)

@router.get("/months", response_model=List[TxMonth])
def months_with_activity(user_id: UUID = Depends(get_current_user_id), filter_service: FilterTransactionsService = Depends(get_filter_service)):
    return filter_service.months_with_activity(user_id)

@router.get("/quota", response_model=FreeQuota)
def free_quota(month: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), checker_service: TransactionCheckerService = Depends(get_checker_service)):
    return checker_service.quota(user_id, month)

@router.get("/{id}", response_model=TransactionOut)
def get_transaction(id: UUID, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.get(user_id, id)

@router.patch("/{id}", response_model=TransactionOut)
def update_transaction(id: UUID, body: TransactionUpdate, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.update(user_id, id, body)

@router.delete("/{id}")
def delete_transaction(id: UUID, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    transactions_service.delete(user_id, id)
    return {"ok": True}
