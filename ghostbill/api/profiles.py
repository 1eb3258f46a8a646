from uuid import UUID
from fastapi import APIRouter, Depends
from ghostbill.api.deps import get_current_user_id, get_profiles_service
from ghostbill.core.profiles_service import ProfilesService
from ghostbill.domain.models.dtos import CurrencyUpdate, ProfileOut, TourFlagUpdate

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileOut)
def get_profile(user_id: UUID = Depends(get_current_user_id), profiles_service: ProfilesService = Depends(get_profiles_service)):
    return profiles_service.get(user_id)

@router.get("/tours/{tab}")
def has_seen_tour(tab: str, user_id: UUID = Depends(get_current_user_id), profiles_service: ProfilesService = Depends(get_profiles_service)):
    return {"tab": tab, "seen": profiles_service.has_seen_tour(user_id, tab)}

@router.put("/tours/{tab}", response_model=ProfileOut)
def set_seen_tour(tab: str, body: TourFlagUpdate, user_id: UUID = Depends(get_current_user_id), profiles_service: ProfilesService = Depends(get_profiles_service)):
    return profiles_service.set_seen_tour(user_id, tab, body.seen)

@router.put("/currency", response_model=ProfileOut)
def set_currency(body: CurrencyUpdate, user_id: UUID = Depends(get_current_user_id), profiles_service: ProfilesService = Depends(get_profiles_service)):
    return profiles_service.set_currency(user_id, body.currency)
