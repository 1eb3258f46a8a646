from typing import Optional
from uuid import UUID

from fastapi import HTTPException

from ghostbill import conf
from ghostbill.domain.models.dtos import ProfileOut
from ghostbill.infrastructure.persistence.profile_repository import ProfileRepository
from ghostbill.core.log.logging_service import get_logger
logger = get_logger(__name__)

TOUR_TABS = ("home", "recurring", "savings", "analytics")


class ProfilesService:
    def __init__(self, repo: Optional[ProfileRepository] = None):
        self.repo = repo or ProfileRepository()

    def get(self, user_id: UUID) -> ProfileOut:
        p = self.repo.get(user_id)
        if p is None:
            # No row yet: every tour is unseen
            return ProfileOut(user_id=user_id)
        return ProfileOut.model_validate(p)

    # ---------- Tour flags ----------

    def has_seen_tour(self, user_id: UUID, tab: str) -> bool:
        column = self._tour_column(tab)
        p = self.repo.get(user_id)
        return bool(getattr(p, column)) if p is not None else False

    def set_seen_tour(self, user_id: UUID, tab: str, seen: bool = True) -> ProfileOut:
        column = self._tour_column(tab)
        logger.info(f"User {user_id}: {column}={seen}")
        return ProfileOut.model_validate(self.repo.upsert(user_id, {column: seen}))

    def has_seen_home_tour(self, user_id: UUID) -> bool:
        return self.has_seen_tour(user_id, "home")

    def has_seen_recurring_tour(self, user_id: UUID) -> bool:
        return self.has_seen_tour(user_id, "recurring")

    def has_seen_savings_tour(self, user_id: UUID) -> bool:
        return self.has_seen_tour(user_id, "savings")

    def has_seen_analytics_tour(self, user_id: UUID) -> bool:
        return self.has_seen_tour(user_id, "analytics")

    # ---------- Currency ----------

    def currency(self, user_id: UUID) -> str:
        """Profile currency, or the default when unset."""
        p = self.repo.get(user_id)
        return (p.currency if p is not None else None) or conf.DEFAULT_CURRENCY

    def set_currency(self, user_id: UUID, currency: str) -> ProfileOut:
        return ProfileOut.model_validate(self.repo.upsert(user_id, {"currency": currency.upper()}))

    @staticmethod
    def _tour_column(tab: str) -> str:
        tab = tab.lower()
        if tab not in TOUR_TABS:
            raise HTTPException(status_code=404, detail=f"Unknown tour: {tab}")
        return f"seen_{tab}_tour"
