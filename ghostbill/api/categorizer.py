from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from ghostbill.api.deps import get_categorizer_service, get_current_user_id
from ghostbill.core.categorizer_service import CategorizerService
from ghostbill.domain.models.dtos import (
    CategorySuggestion,
    MerchantCategoryOverride,
    MerchantCorrection,
    MerchantDisplayOverride,
    MerchantOverrideOut,
    SuggestRequest,
)

router = APIRouter(prefix="/categorizer", tags=["Categorizer"])


@router.post("/suggest", response_model=CategorySuggestion)
def suggest_category(body: SuggestRequest, user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    return categorizer_service.suggest(user_id, body.merchant, body.text)

@router.get("/autocorrect", response_model=Optional[MerchantCorrection])
def autocorrect_merchant(merchant: str, user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    """Canonical spelling of a merchant name, or null when nothing matches confidently."""
    return categorizer_service.autocorrect(user_id, merchant)

@router.get("/overrides", response_model=List[MerchantOverrideOut])
def list_overrides(user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    return categorizer_service.list_overrides(user_id)

@router.put("/overrides/category", response_model=MerchantOverrideOut)
def remember_category(body: MerchantCategoryOverride, user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    return categorizer_service.remember_category(user_id, body.merchant, body.category)

@router.put("/overrides/display-name", response_model=MerchantOverrideOut)
def remember_display_name(body: MerchantDisplayOverride, user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    return categorizer_service.remember_display_name(user_id, body.merchant, body.display_name)

@router.delete("/overrides")
def forget_override(merchant: str, user_id: UUID = Depends(get_current_user_id), categorizer_service: CategorizerService = Depends(get_categorizer_service)):
    categorizer_service.forget(user_id, merchant)
    return {"ok": True}
