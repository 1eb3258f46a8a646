from uuid import UUID
from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED
from ghostbill.api.deps import get_current_user_id, get_feedback_service
from ghostbill.core.feedback_service import FeedbackService
from ghostbill.domain.models.dtos import FeedbackCreate, FeedbackOut

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("", response_model=FeedbackOut, status_code=HTTP_201_CREATED)
def send_feedback(body: FeedbackCreate, user_id: UUID = Depends(get_current_user_id), feedback_service: FeedbackService = Depends(get_feedback_service)):
    return feedback_service.insert(user_id, body)
