"""Public onboarding use cases, authenticated by invite or activation token."""

from singles.application.usecase.onboarding.activation import (
    CompleteActivationRequest,
    CompleteActivationResponse,
    CompleteActivationUseCase,
    ValidateActivationRequest,
    ValidateActivationResponse,
    ValidateActivationUseCase,
)
from singles.application.usecase.onboarding.submit_verification import (
    SubmissionResponse,
    SubmitMediaRequest,
    SubmitMediaUseCase,
    SubmitProfileRequest,
    SubmitProfileUseCase,
)

__all__ = [
    "CompleteActivationRequest",
    "CompleteActivationResponse",
    "CompleteActivationUseCase",
    "SubmissionResponse",
    "SubmitMediaRequest",
    "SubmitMediaUseCase",
    "SubmitProfileRequest",
    "SubmitProfileUseCase",
    "ValidateActivationRequest",
    "ValidateActivationResponse",
    "ValidateActivationUseCase",
]
