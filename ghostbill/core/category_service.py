from __future__ import annotations

from collections import defaultdict
from datetime import date as Date
from typing import List, Optional
from uuid import UUID

from ghostbill.core import calendar_math
from ghostbill.core.recurrence import today
from ghostbill.domain.models.enums.category import ExpenseCategory
from ghostbill.domain.models.dtos import (
    SpendingPoint,
    TopCategoryAmount,
    TopCategoryCount,
    TransactionOut,
)
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository


def _limit(items: list, limit: Optional[int]) -> list:
    if limit is not None and limit > 0:
        return items[:limit]
    return items


class CategoryService:
    """Category tallies over the user's spend rows (non-income, negative amount)."""

    def __init__(self, repo: Optional[TransactionRepository] = None):
        self.repo = repo or TransactionRepository()

    def top_categories_by_count(self, user_id: UUID, limit: Optional[int] = None) -> List[TopCategoryCount]:
        counts: dict[ExpenseCategory, int] = defaultdict(int)
        for t in self.repo.list(user_id, spend_only=True):
            counts[ExpenseCategory.from_text(t.category)] += 1

        result = sorted(
            (TopCategoryCount(category=c, count=n) for c, n in counts.items()),
            key=lambda r: r.count,
            reverse=True,
        )
        return _limit(result, limit)

    def top_categories_by_amount(self, user_id: UUID, limit: Optional[int] = None) -> List[TopCategoryAmount]:
        totals: dict[ExpenseCategory, float] = defaultdict(float)
        for t in self.repo.list(user_id, spend_only=True):
            totals[ExpenseCategory.from_text(t.category)] += abs(t.amount)

        result = sorted(
            (TopCategoryAmount(category=c, total=v) for c, v in totals.items()),
            key=lambda r: r.total,
            reverse=True,
        )
        return _limit(result, limit)

    def spending_over_time(self, user_id: UUID, months_back: int = 12, now: Optional[Date] = None) -> List[SpendingPoint]:
        """Monthly spend totals, oldest month first; months without spend are zero."""
        months = calendar_math.month_starts_back(now or today(), months_back)
        if not months:
            return []

        buckets: dict[Date, float] = defaultdict(float)
        for t in self.repo.list(user_id, start=months[0], spend_only=True):
            buckets[calendar_math.month_start(t.date)] += abs(t.amount)

        return [SpendingPoint(month_start=m, total=buckets.get(m, 0.0)) for m in months]

    def transactions_for_category(
        self,
        user_id: UUID,
        category: ExpenseCategory,
        start: Optional[Date] = None,
        end: Optional[Date] = None,
    ) -> List[TransactionOut]:
        rows = self.repo.list(user_id, start=start, end=end, spend_only=True, category=category.value)
        return [TransactionOut.model_validate(t) for t in rows]

    def sum_spend_for_category(
        self,
        user_id: UUID,
        category: ExpenseCategory,
        start: Optional[Date] = None,
        end: Optional[Date] = None,
    ) -> float:
        rows = self.repo.list(user_id, start=start, end=end, spend_only=True, category=category.value)
        return sum(abs(t.amount) for t in rows)

    def months_with_activity_for_category(
        self,
        user_id: UUID,
        category: ExpenseCategory,
        months_back: int = 24,
        now: Optional[Date] = None,
    ) -> List[Date]:
        months = calendar_math.month_starts_back(now or today(), months_back)
        start = months[0] if months else None
        rows = self.repo.list(user_id, start=start, spend_only=True, category=category.value)
        return sorted({calendar_math.month_start(t.date) for t in rows}, reverse=True)
