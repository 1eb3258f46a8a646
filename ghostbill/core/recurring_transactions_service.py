from __future__ import annotations

from datetime import date as Date
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException

from ghostbill.core import recurrence
from ghostbill.core.profiles_service import ProfilesService
from ghostbill.domain.schemas.recurring_transaction import RecurringTransactionDB
from ghostbill.domain.schemas.transaction import TransactionDB
from ghostbill.domain.models.enums.status import RecurrenceStatus
from ghostbill.domain.models.dtos import (
    ConsumedOccurrence,
    RecurringTransactionCreate,
    RecurringTransactionOut,
    RecurringTransactionUpdate,
    TransactionOut,
)
from ghostbill.infrastructure.persistence.recurring_transaction_repository import RecurringTransactionRepository
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository

from ghostbill.core.log.logging_service import get_logger
logger = get_logger(__name__)

# NOT NULL columns: an explicit null in a patch leaves them unchanged
_REQUIRED_FIELDS = frozenset({
    "merchant_name", "amount", "frequency", "start_date", "next_date", "status", "notifications_enabled",
})


class RecurringTransactionsService:
    def __init__(
        self,
        repo: Optional[RecurringTransactionRepository] = None,
        tx_repo: Optional[TransactionRepository] = None,
        profiles: Optional[ProfilesService] = None,
    ):
        self.repo = repo or RecurringTransactionRepository()
        self.tx_repo = tx_repo or TransactionRepository()
        self.profiles = profiles or ProfilesService()

    def create(self, user_id: UUID, body: RecurringTransactionCreate) -> RecurringTransactionOut:
        data = body.model_dump(mode="json")
        r = self.repo.create(RecurringTransactionDB(user_id=user_id, **data))
        logger.info(f"User {user_id}: recurring '{r.merchant_name}' {r.frequency} next on {r.next_date}")
        return self._to_out(r)

    def list(self, user_id: UUID) -> List[RecurringTransactionOut]:
        return [self._to_out(r) for r in self.repo.list(user_id)]

    def list_due(self, user_id: UUID, as_of: Optional[Date] = None) -> List[RecurringTransactionOut]:
        cutoff = recurrence.format_date_only(as_of or recurrence.today())
        return [self._to_out(r) for r in self.repo.list_due(cutoff, user_id=user_id)]

    def get(self, user_id: UUID, id_: UUID) -> RecurringTransactionOut:
        return self._to_out(self._get_or_404(user_id, id_))

    def update(self, user_id: UUID, id_: UUID, body: RecurringTransactionUpdate) -> RecurringTransactionOut:
        r = self._get_or_404(user_id, id_)

        # Partial update: only keys the caller sent are written
        data = body.model_dump(mode="json", exclude_unset=True)
        for k, v in data.items():
            if v is None and k in _REQUIRED_FIELDS:
                continue
            setattr(r, k, v)

        return self._to_out(self.repo.update(r))

    def delete(self, user_id: UUID, id_: UUID) -> None:
        self.repo.delete(self._get_or_404(user_id, id_))

    def consume_occurrence(self, user_id: UUID, id_: UUID) -> ConsumedOccurrence:
        """
        Record the pending occurrence as a transaction and move next_date on.

        Nothing is written when the stored next_date cannot be parsed.
        """
        r = self._get_or_404(user_id, id_)

        new_next = recurrence.next_occurrence(r.next_date, r.frequency)
        if new_next is None:
            logger.warning(f"Recurring {r.id}: unparsable next_date '{r.next_date}'")
            raise HTTPException(status_code=422, detail="Cannot schedule next occurrence")

        t = self.tx_repo.create(TransactionDB(
            user_id=user_id,
            amount=-abs(r.amount),
            currency=self.profiles.currency(user_id),
            date=recurrence.parse_date_only(r.next_date),
            merchant=r.merchant_name,
            category=r.category,
            note=f"Recurring payment ({r.frequency})",
        ))

        logger.info(f"Recurring {r.id}: consumed {r.next_date}, next on {new_next}")
        r.next_date = new_next
        r = self.repo.update(r)
        return ConsumedOccurrence(
            transaction=TransactionOut.model_validate(t),
            recurring=self._to_out(r),
        )

    def roll_forward_due(self, as_of: Optional[Date] = None) -> int:
        """
        Advance every active row whose next_date is in the past until it is on
        or after `as_of`. Returns the number of rows moved.
        """
        as_of = as_of or recurrence.today()
        cutoff = recurrence.format_date_only(as_of)
        moved = 0

        for r in self.repo.list_due(cutoff, inclusive=False):
            current = recurrence.parse_date_only(r.next_date)
            if current is None:
                logger.warning(f"Recurring {r.id}: cannot schedule next occurrence from '{r.next_date}', skipping")
                continue

            r.next_date = recurrence.format_date_only(recurrence.roll_forward(current, r.frequency, as_of))
            self.repo.update(r)
            moved += 1

        logger.info(f"Roll-forward as of {cutoff}: {moved} recurring transaction(s) advanced")
        return moved

    def set_status(self, user_id: UUID, id_: UUID, status: RecurrenceStatus) -> RecurringTransactionOut:
        return self.update(user_id, id_, RecurringTransactionUpdate(status=status))

    # ---------- Internal methods ----------

    def _get_or_404(self, user_id: UUID, id_: UUID) -> RecurringTransactionDB:
        r = self.repo.get(user_id, id_)
        if not r:
            raise HTTPException(status_code=404, detail="Not found")
        return r

    @staticmethod
    def _to_out(r: RecurringTransactionDB) -> RecurringTransactionOut:
        """Convert database model to output DTO."""
        return RecurringTransactionOut.model_validate(r, from_attributes=True)
