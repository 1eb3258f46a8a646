from typing import Optional
from uuid import UUID
from fastapi import Depends, Header, HTTPException
from ghostbill.domain.schemas.database import SessionLocal
from ghostbill.core.profiles_service import ProfilesService
from ghostbill.core.categorizer_service import CategorizerService
from ghostbill.core.transactions_service import TransactionsService
from ghostbill.core.recurring_transactions_service import RecurringTransactionsService
from ghostbill.core.category_service import CategoryService
from ghostbill.core.feedback_service import FeedbackService
from ghostbill.core.export_service import ExportTransactionsService
from ghostbill.core.filter_service import FilterTransactionsService
from ghostbill.core.transaction_checker_service import TransactionCheckerService
from ghostbill.infrastructure.persistence.profile_repository import ProfileRepository
from ghostbill.infrastructure.persistence.transaction_repository import TransactionRepository
from ghostbill.infrastructure.persistence.recurring_transaction_repository import RecurringTransactionRepository
from ghostbill.infrastructure.persistence.feedback_repository import FeedbackRepository
from ghostbill.infrastructure.persistence.merchant_override_repository import MerchantOverrideRepository


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> UUID:
    """The identity provider in front of the API forwards the user's id in X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid X-User-Id header")


def get_session_factory():
    return SessionLocal


def get_profiles_service(session_factory=Depends(get_session_factory)) -> ProfilesService:
    return ProfilesService(ProfileRepository(session_factory))


def get_categorizer_service(session_factory=Depends(get_session_factory)) -> CategorizerService:
    return CategorizerService(MerchantOverrideRepository(session_factory))


def get_transactions_service(
    session_factory=Depends(get_session_factory),
    profiles: ProfilesService = Depends(get_profiles_service),
    categorizer: CategorizerService = Depends(get_categorizer_service),
) -> TransactionsService:
    return TransactionsService(TransactionRepository(session_factory), profiles, categorizer)


def get_recurring_service(
    session_factory=Depends(get_session_factory),
    profiles: ProfilesService = Depends(get_profiles_service),
) -> RecurringTransactionsService:
    return RecurringTransactionsService(
        RecurringTransactionRepository(session_factory),
        TransactionRepository(session_factory),
        profiles,
    )


def get_category_service(session_factory=Depends(get_session_factory)) -> CategoryService:
    return CategoryService(TransactionRepository(session_factory))


def get_feedback_service(session_factory=Depends(get_session_factory)) -> FeedbackService:
    return FeedbackService(FeedbackRepository(session_factory))


def get_export_service(session_factory=Depends(get_session_factory)) -> ExportTransactionsService:
    return ExportTransactionsService(TransactionRepository(session_factory))


def get_filter_service(session_factory=Depends(get_session_factory)) -> FilterTransactionsService:
    return FilterTransactionsService(TransactionRepository(session_factory))


def get_checker_service(session_factory=Depends(get_session_factory)) -> TransactionCheckerService:
    return TransactionCheckerService(TransactionRepository(session_factory))
