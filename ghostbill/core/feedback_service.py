from typing import Optional
from uuid import UUID

from fastapi import HTTPException

from ghostbill.domain.schemas.feedback import FeedbackDB
from ghostbill.domain.models.dtos import FeedbackCreate, FeedbackOut
from ghostbill.infrastructure.persistence.feedback_repository import FeedbackRepository
from ghostbill.core.log.logging_service import get_logger
logger = get_logger(__name__)


class FeedbackService:
    def __init__(self, repo: Optional[FeedbackRepository] = None):
        self.repo = repo or FeedbackRepository()

    def insert(self, user_id: UUID, body: FeedbackCreate) -> FeedbackOut:
        message = body.message.strip()
        if not message:
            raise HTTPException(status_code=422, detail="Feedback message cannot be empty")

        email = (body.email or "").strip() or None
        f = self.repo.create(FeedbackDB(user_id=user_id, message=message, email=email))
        logger.info(f"Feedback {f.id} received from {user_id}")
        return FeedbackOut.model_validate(f)
