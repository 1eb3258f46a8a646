from datetime import date as Date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from ghostbill.api.deps import get_category_service, get_current_user_id, get_transactions_service
from ghostbill.core import calendar_math
from ghostbill.core.recurrence import today
from ghostbill.core.category_service import CategoryService
from ghostbill.core.transactions_service import TransactionsService
from ghostbill.domain.models.enums.category import ExpenseCategory
from ghostbill.domain.models.dtos import (
    SavingsCard,
    SavingsHistory,
    SpendingPoint,
    TopCategoryAmount,
    TopCategoryCount,
    TopExpense,
    TopMerchantCount,
    TransactionOut,
)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


# ---------- Savings ----------

@router.get("/savings", response_model=SavingsCard)
def savings_card(month: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.savings_card(user_id, month or today())

@router.get("/savings/history", response_model=SavingsHistory)
def savings_history(months_back: int = Query(12, ge=1, le=120), user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.savings_history(user_id, months_back)

# ---------- Top lists ----------

@router.get("/top-expenses", response_model=List[TopExpense])
def top_expenses(month: Optional[Date] = None, limit: int = Query(10, ge=1), user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    if month is not None:
        return transactions_service.top_expenses_for_month(user_id, month, limit)
    return transactions_service.top_expenses(user_id, limit=limit)

@router.get("/top-merchants", response_model=List[TopMerchantCount])
def top_merchants(limit: int = Query(10, ge=1), user_id: UUID = Depends(get_current_user_id), transactions_service: TransactionsService = Depends(get_transactions_service)):
    return transactions_service.top_merchants_by_count(user_id, limit)

# ---------- Categories ----------

@router.get("/categories/count", response_model=List[TopCategoryCount])
def categories_by_count(limit: Optional[int] = None, user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    return category_service.top_categories_by_count(user_id, limit)

@router.get("/categories/amount", response_model=List[TopCategoryAmount])
def categories_by_amount(limit: Optional[int] = None, user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    return category_service.top_categories_by_amount(user_id, limit)

@router.get("/spending", response_model=List[SpendingPoint])
def spending_over_time(months_back: int = Query(12, ge=1, le=120), user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    return category_service.spending_over_time(user_id, months_back)

@router.get("/categories/{category}/transactions", response_model=List[TransactionOut])
def category_transactions(category: ExpenseCategory, month: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    start, end = calendar_math.month_bounds(month) if month else (None, None)
    return category_service.transactions_for_category(user_id, category, start, end)

@router.get("/categories/{category}/total")
def category_total(category: ExpenseCategory, month: Optional[Date] = None, user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    start, end = calendar_math.month_bounds(month) if month else (None, None)
    return {"category": category, "total": category_service.sum_spend_for_category(user_id, category, start, end)}

@router.get("/categories/{category}/months", response_model=List[Date])
def category_months(category: ExpenseCategory, months_back: int = Query(24, ge=1, le=240), user_id: UUID = Depends(get_current_user_id), category_service: CategoryService = Depends(get_category_service)):
    return category_service.months_with_activity_for_category(user_id, category, months_back)
