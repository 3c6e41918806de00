"""Public onboarding routes, authenticated by the token in the emailed link."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from singles.application.usecase.invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from singles.application.usecase.onboarding import (
    CompleteActivationRequest,
    CompleteActivationResponse,
    CompleteActivationUseCase,
    SubmissionResponse,
    SubmitMediaRequest,
    SubmitMediaUseCase,
    SubmitProfileRequest,
    SubmitProfileUseCase,
    ValidateActivationRequest,
    ValidateActivationResponse,
    ValidateActivationUseCase,
)

router = APIRouter(
    prefix="/singles/onboarding", tags=["onboarding"], route_class=DishkaRoute
)


@router.post("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    request: ValidateInviteRequest,
    validate_invite_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check an invite link before the profile form is shown."""
    return await validate_invite_use_case.execute(request)


@router.post("/profile", response_model=SubmissionResponse)
async def submit_profile(
    request: SubmitProfileRequest,
    submit_profile_use_case: FromDishka[SubmitProfileUseCase],
) -> SubmissionResponse:
    """Submit the invitee's profile for moderation."""
    return await submit_profile_use_case.execute(request)


@router.post("/media", response_model=SubmissionResponse)
async def submit_media(
    request: SubmitMediaRequest,
    submit_media_use_case: FromDishka[SubmitMediaUseCase],
) -> SubmissionResponse:
    """Submit identity documents, selfies and video references."""
    return await submit_media_use_case.execute(request)


@router.post("/activation/validate", response_model=ValidateActivationResponse)
async def validate_activation(
    request: ValidateActivationRequest,
    validate_activation_use_case: FromDishka[ValidateActivationUseCase],
) -> ValidateActivationResponse:
    """Check an activation link before the password form is shown."""
    return await validate_activation_use_case.execute(request)


@router.post("/activate", response_model=CompleteActivationResponse)
async def activate(
    request: CompleteActivationRequest,
    complete_activation_use_case: FromDishka[CompleteActivationUseCase],
) -> CompleteActivationResponse:
    """Redeem an activation token and set the single's password.

    A token that is invalid, expired or already used is answered with
    200 and the matching status, so the frontend can render the message.
    """
    return await complete_activation_use_case.execute(request)
