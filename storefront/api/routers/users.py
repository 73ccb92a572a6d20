from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_current_user_id, get_get_profile_use_case
from storefront.api.schemas.users import ProfileResponse
from storefront.application.use_cases.get_profile import GetProfileUseCase
from storefront.domain.exceptions import InfrastructureError, UserNotFoundError


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ProfileResponse)
def get_me(
    user_id: int = Depends(get_current_user_id),
    use_case: GetProfileUseCase = Depends(get_get_profile_use_case),
):
    try:
        output = use_case.execute(user_id=user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InfrastructureError as exc:
        raise HTTPException(status_code=500, detail="Internal server error.") from exc

    return ProfileResponse(
        id=output.id,
        name=output.name,
        email=output.email,
        provider=output.provider,
    )
