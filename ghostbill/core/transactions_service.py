from __future__ import annotations

from datetime import date as Date
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException

from ghostbill.core import calendar_math
from ghostbill.core.recurrence import today
from ghostbill.core.profiles_service import ProfilesService
from ghostbill.core.categorizer_service import CONFIDENCE_THRESHOLD, CategorizerService
from ghostbill.domain.schemas.transaction import TransactionDB
from ghostbill.domain.models.dtos import (
    IncomeCreate,
    MonthlySavings,
    SavingsCard,
    SavingsHistory,
    SavingsPoint,
    TopExpense,
    TopMerchantCount,
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
)
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository

from ghostbill.core.log.logging_service import get_logger
logger = get_logger(__name__)

INCOME = "income"

# NOT NULL columns: an explicit null in a patch leaves them unchanged
_REQUIRED_FIELDS = frozenset({"amount", "currency", "date"})


class TransactionsService:
    def __init__(
        self,
        repo: Optional[TransactionRepository] = None,
        profiles: Optional[ProfilesService] = None,
        categorizer: Optional[CategorizerService] = None,
    ):
        self.repo = repo or TransactionRepository()
        self.profiles = profiles or ProfilesService()
        self.categorizer = categorizer or CategorizerService()

    # ---------- CRUD ----------

    def create(self, user_id: UUID, body: TransactionCreate) -> TransactionOut:
        data = body.model_dump()
        if data["category"] is not None:
            data["category"] = data["category"].value
        elif body.amount < 0 and (body.merchant or body.note):
            # Uncategorized spend: keep the suggestion only when it is confident
            suggestion = self.categorizer.suggest(user_id, body.merchant, body.note or "")
            if suggestion.confidence >= CONFIDENCE_THRESHOLD:
                data["category"] = suggestion.category.value
        t = self.repo.create(TransactionDB(user_id=user_id, **data))
        return self._to_out(t)

    def list(self, user_id: UUID, month: Optional[Date] = None) -> List[TransactionOut]:
        start, end = calendar_math.month_bounds(month) if month else (None, None)
        return [self._to_out(t) for t in self.repo.list(user_id, start=start, end=end)]

    def get(self, user_id: UUID, id_: UUID) -> TransactionOut:
        return self._to_out(self._get_or_404(user_id, id_))

    def update(self, user_id: UUID, id_: UUID, body: TransactionUpdate) -> TransactionOut:
        t = self._get_or_404(user_id, id_)

        # Only fields present in the request are patched
        data = body.model_dump(exclude_unset=True)
        for k, v in data.items():
            if v is None and k in _REQUIRED_FIELDS:
                continue
            if k == "category" and v is not None:
                v = v.value
            setattr(t, k, v)

        return self._to_out(self.repo.update(t))

    def delete(self, user_id: UUID, id_: UUID) -> None:
        self.repo.delete(self._get_or_404(user_id, id_))

    # ---------- Income ----------

    def has_income_for_month(self, user_id: UUID, month: Date) -> bool:
        start, end = calendar_math.month_bounds(month)
        return bool(self.repo.list(user_id, start=start, end=end, income=True))

    def has_activity_for_month(self, user_id: UUID, month: Date) -> bool:
        start, end = calendar_math.month_bounds(month)
        return bool(self.repo.list(user_id, start=start, end=end))

    def insert_income_for_month(self, user_id: UUID, body: IncomeCreate) -> TransactionOut:
        amount = abs(body.amount)
        if amount <= 0:
            raise HTTPException(status_code=422, detail="Income amount must be greater than zero.")

        start = calendar_math.month_start(body.month or today())
        t = TransactionDB(
            user_id=user_id,
            amount=amount,
            currency=self.profiles.currency(user_id),
            date=start,
            merchant="Income",
            category=INCOME,
            note=body.note or f"Reported income for {start.strftime('%B %Y')}",
            type=INCOME,
        )
        logger.info(f"User {user_id}: reported income {amount} for {start:%Y-%m}")
        return self._to_out(self.repo.create(t))

    # ---------- Aggregates ----------

    def sum_income(self, user_id: UUID, month: Date) -> float:
        start, end = calendar_math.month_bounds(month)
        return sum(t.amount for t in self.repo.list(user_id, start=start, end=end, income=True))

    def sum_spending(self, user_id: UUID, month: Date) -> float:
        start, end = calendar_math.month_bounds(month)
        return sum(abs(t.amount) for t in self.repo.list(user_id, start=start, end=end, spend_only=True))

    def monthly_savings(self, user_id: UUID, month: Date) -> MonthlySavings:
        start, end = calendar_math.month_bounds(month)
        income = self.sum_income(user_id, month)
        spending = self.sum_spending(user_id, month)
        return MonthlySavings(
            income=income,
            spending=spending,
            savings=income - spending,
            month_start=start,
            month_end=end,
        )

    def savings_card(self, user_id: UUID, month: Date) -> SavingsCard:
        currency = self.profiles.currency(user_id)
        if not self.has_income_for_month(user_id, month):
            start, end = calendar_math.month_bounds(month)
            return SavingsCard(
                has_income=False, income=0, spending=0, savings=0,
                currency=currency, month_start=start, month_end=end,
            )

        ms = self.monthly_savings(user_id, month)
        return SavingsCard(has_income=True, currency=currency, **ms.model_dump())

    def savings_history(self, user_id: UUID, months_back: int = 12, now: Optional[Date] = None) -> SavingsHistory:
        """
        Savings per month over the last `months_back` months.

        Months with reported income produce a point (savings floored at zero).
        Months with activity but no income are listed as unreported.
        """
        reported: List[SavingsPoint] = []
        unreported: List[Date] = []
        for m in calendar_math.month_starts_back(now or today(), months_back):
            if self.has_income_for_month(user_id, m):
                ms = self.monthly_savings(user_id, m)
                reported.append(SavingsPoint(month_start=m, savings=max(0.0, ms.savings)))
            elif self.has_activity_for_month(user_id, m):
                unreported.append(m)
        return SavingsHistory(reported=reported, unreported=unreported)

    def top_expenses(
        self,
        user_id: UUID,
        start: Optional[Date] = None,
        end: Optional[Date] = None,
        limit: int = 10,
    ) -> List[TopExpense]:
        rows = self.repo.list(user_id, start=start, end=end, spend_only=True)
        rows.sort(key=lambda t: abs(t.amount), reverse=True)
        return [
            TopExpense(id=t.id, merchant=t.merchant, date=t.date, amount=abs(t.amount), currency=t.currency)
            for t in rows[:limit]
        ]

    def top_expenses_for_month(self, user_id: UUID, month: Date, limit: int = 10) -> List[TopExpense]:
        start, end = calendar_math.month_bounds(month)
        return self.top_expenses(user_id, start=start, end=end, limit=limit)

    def top_merchants_by_count(self, user_id: UUID, limit: int = 10) -> List[TopMerchantCount]:
        """
        All-time merchants by number of non-income transactions.

        Counting is case-insensitive; the first spelling seen is the one shown.
        Blank merchant names are skipped.
        """
        counts: dict[str, list] = {}
        for t in self.repo.list(user_id, income=False, newest_first=False):
            raw = (t.merchant or "").strip()
            if not raw:
                continue
            key = raw.lower()
            if key in counts:
                counts[key][0] += 1
            else:
                counts[key] = [1, raw]

        ranked = sorted(counts.values(), key=lambda c: c[0], reverse=True)
        return [TopMerchantCount(merchant=display, count=n) for n, display in ranked[:limit]]

    # ---------- Internal methods ----------

    def _get_or_404(self, user_id: UUID, id_: UUID) -> TransactionDB:
        t = self.repo.get(user_id, id_)
        if not t:
            raise HTTPException(status_code=404, detail="Not found")
        return t

    @staticmethod
    def _to_out(t: TransactionDB) -> TransactionOut:
        """Convert database model to output DTO."""
        return TransactionOut.model_validate(t, from_attributes=True)
