"""Single member routes: own profile and couples' reviews."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from singles.application.usecase.profile import (
    GetProfileRequest,
    GetProfileUseCase,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from singles.application.usecase.review import (
    CreateReviewRequest,
    CreateReviewResponse,
    CreateReviewUseCase,
    GetReviewsRequest,
    GetReviewsResponse,
    GetReviewsUseCase,
)
from singles.domain.service import JWTService
from singles.domain.value import AccountKind, ProfileUpdate
from singles.interface.api.auth import authenticate

router = APIRouter(prefix="/singles", tags=["singles"], route_class=DishkaRoute)


class CreateReviewAPIRequest(BaseModel):
    score: float
    comment: str | None = Field(default=None, max_length=5000)


@router.get("/me/profile", response_model=ProfileResponse)
async def get_my_profile(
    get_profile_use_case: FromDishka[GetProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Get the current single's profile."""
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.SINGLE)
    return await get_profile_use_case.execute(GetProfileRequest(user_id=payload.user_id))


@router.put("/me/profile", response_model=ProfileResponse)
async def update_my_profile(
    update: ProfileUpdate,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Update the current single's profile.

    Only fields present in the body are changed; send ``null`` to clear one.
    """
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.SINGLE)
    return await update_profile_use_case.execute(
        UpdateProfileRequest(user_id=payload.user_id, update=update)
    )


@router.post(
    "/{single_user_id}/reviews",
    response_model=CreateReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    single_user_id: UUID,
    body: CreateReviewAPIRequest,
    create_review_use_case: FromDishka[CreateReviewUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateReviewResponse:
    """Leave feedback on a single. One review per couple and single."""
    payload = authenticate(jwt_service, auth_token)
    return await create_review_use_case.execute(
        CreateReviewRequest(
            single_user_id=str(single_user_id),
            couple_user_id=payload.user_id,
            score=body.score,
            comment=body.comment,
        )
    )


@router.get("/{single_user_id}/reviews", response_model=GetReviewsResponse)
async def get_reviews(
    single_user_id: UUID,
    get_reviews_use_case: FromDishka[GetReviewsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetReviewsResponse:
    authenticate(jwt_service, auth_token)
    return await get_reviews_use_case.execute(
        GetReviewsRequest(single_user_id=str(single_user_id))
    )
