"""End-to-end tests for the invite, moderation and activation flow."""

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from singles.config import Settings
from singles.domain.repository import AccountRepository
from singles.domain.service import NotificationClient
from singles.domain.service.notification import ACTIVATION_TEMPLATE
from singles.domain.value import AccountKind
from singles.interface.api.app import create_app
from singles.util.jwt import create_token
from tests.conftest import make_couple, make_single
from tests.di import build_test_container

PROFILE = {
    "nickname": "Robin",
    "contact_email": "robin@example.com",
    "country": "Spain",
    "city": "Valencia",
    "short_bio": "Friendly and curious.",
    "consent_acknowledged": True,
}
MEDIA = {
    "identity_documents": [{"id": "doc-1", "url": "https://cdn.example.com/doc-1"}],
    "selfies": [{"id": "selfie-1", "url": "https://cdn.example.com/selfie-1"}],
}


async def _resolve(container, dependency):
    async with container() as request_container:
        return await request_container.get(dependency)


class Env:
    """One app over one mocked container, plus helpers to act as members."""

    def __init__(self) -> None:
        self.container = build_test_container()
        self.app = create_app(self.container)
        self.auth = Settings().auth

    def get(self, dependency):
        # In-memory repositories are app-scoped, so this sees the app's state
        return asyncio.run(_resolve(self.container, dependency))

    def client_for(self, user_id=None, kind=AccountKind.COUPLE, is_moderator=False):
        cookies = {}
        if user_id is not None:
            cookies["auth_token"] = create_token(
                str(user_id), kind, self.auth, is_moderator
            )
        return TestClient(self.app, cookies=cookies)

    def couple(self, **overrides):
        accounts = self.get(AccountRepository)
        return asyncio.run(make_couple(accounts, **overrides))

    def single(self, **overrides):
        accounts = self.get(AccountRepository)
        return asyncio.run(make_single(accounts, **overrides))


@pytest.fixture
def env():
    """Fresh app and in-memory state per test."""
    return Env()


def _token(url: str) -> str:
    return url.split("token=", 1)[1]


class TestOnboardingFlow:
    """Full journey from invite to completed linkage."""

    def test_invite_to_completion(self, env):
        # Arrange
        couple = env.couple()
        couple_client = env.client_for(couple.id)
        invitee = env.client_for()
        moderator = env.client_for(uuid4(), is_moderator=True)

        # Couple invites a single
        response = couple_client.post(
            "/singles/invites/",
            json={"invitee_email": "Robin@Example.com", "requested_role": "single_female"},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "pending"
        assert created["role_label"] == "Unicorn Invite"
        invite_token = _token(created["invite_url"])

        # Invitee opens the link and submits profile and media
        response = invitee.post("/singles/onboarding/validate", json={"token": invite_token})
        assert response.json()["valid"] is True
        assert response.json()["inviter_name"] == "Alex & Sam"

        response = invitee.post(
            "/singles/onboarding/profile", json={"token": invite_token, "profile": PROFILE}
        )
        assert response.json()["session_status"] == "awaiting_uploads"

        response = invitee.post(
            "/singles/onboarding/media", json={"token": invite_token, "media": MEDIA}
        )
        assert response.json()["session_status"] == "under_review"

        # Moderator reviews and approves
        response = moderator.get("/singles/admin/invites")
        assert response.status_code == 200
        queue = response.json()
        assert queue["total"] == 1
        assert queue["items"][0]["session"]["submitted_profile"]["nickname"] == "Robin"

        response = moderator.post(f"/singles/admin/invites/{created['invite_id']}/approve")
        assert response.status_code == 200
        assert response.json()["invite"]["status"] == "awaiting_activation"

        notifications = env.get(NotificationClient)
        activation_link = notifications.sent_with(ACTIVATION_TEMPLATE)[0].data[
            "activation_link"
        ]
        activation_token = _token(activation_link)

        # Invitee activates
        response = invitee.post(
            "/singles/onboarding/activation/validate", json={"token": activation_token}
        )
        assert response.json()["valid"] is True

        response = invitee.post(
            "/singles/onboarding/activate",
            json={"token": activation_token, "password": "s3cure-pass"},
        )
        assert response.status_code == 200
        activated = response.json()
        assert activated["status"] == "activated"

        response = invitee.post(
            "/singles/onboarding/activate",
            json={"token": activation_token, "password": "s3cure-pass"},
        )
        assert response.json()["status"] == "consumed"

        # Single sees the profile built from the submission
        single_client = env.client_for(activated["user_id"], kind=AccountKind.SINGLE)
        response = single_client.get("/singles/me/profile")
        assert response.status_code == 200
        assert response.json()["nickname"] == "Robin"

        response = single_client.put("/singles/me/profile", json={"interests": "Dancing"})
        assert response.json()["interests"] == "Dancing"
        assert response.json()["city"] == "Valencia"

        # Couple confirms and leaves feedback
        response = couple_client.post(f"/singles/invites/{created['invite_id']}/confirm")
        assert response.json()["invite"]["status"] == "completed"

        response = couple_client.post(
            f"/singles/{activated['user_id']}/reviews", json={"score": 5}
        )
        assert response.status_code == 201
        assert response.json()["review_count"] == 1

        response = couple_client.post(
            f"/singles/{activated['user_id']}/reviews", json={"score": 4}
        )
        assert response.status_code == 409

        # The original invite link is spent
        response = invitee.post("/singles/onboarding/validate", json={"token": invite_token})
        assert response.json()["token_status"] == "consumed"


class TestInviteRoutes:
    """Access control and error mapping on the invite routes."""

    def test_requires_authentication(self, env):
        response = env.client_for().get("/singles/invites/")

        assert response.status_code == 401

    def test_single_cannot_invite(self, env):
        single = env.single()
        client = env.client_for(single.id, kind=AccountKind.SINGLE)

        response = client.post(
            "/singles/invites/",
            json={"invitee_email": "a@example.com", "requested_role": "single_male"},
        )

        assert response.status_code == 403

    def test_quota_exceeded(self, env):
        client = env.client_for(env.couple().id)
        for i in range(3):
            response = client.post(
                "/singles/invites/",
                json={"invitee_email": f"s{i}@example.com", "requested_role": "single_male"},
            )
            assert response.status_code == 201

        response = client.post(
            "/singles/invites/",
            json={"invitee_email": "s3@example.com", "requested_role": "single_male"},
        )

        assert response.status_code == 429
        assert "Please revoke one" in response.json()["detail"]

        listing = client.get("/singles/invites/").json()
        assert listing["total"] == 3
        assert listing["remaining_quota"] == 0

    def test_unpaid_couple_is_ineligible(self, env):
        client = env.client_for(env.couple(membership_type="free").id)

        response = client.post(
            "/singles/invites/",
            json={"invitee_email": "a@example.com", "requested_role": "single_male"},
        )

        assert response.status_code == 403
        assert "paid membership" in response.json()["detail"]

    def test_invalid_role(self, env):
        client = env.client_for(env.couple().id)

        response = client.post(
            "/singles/invites/",
            json={"invitee_email": "a@example.com", "requested_role": "couple"},
        )

        assert response.status_code == 400

    def test_revoke_someone_elses_invite(self, env):
        owner = env.client_for(env.couple().id)
        stranger = env.client_for(env.couple().id)
        invite_id = owner.post(
            "/singles/invites/",
            json={"invitee_email": "a@example.com", "requested_role": "single_male"},
        ).json()["invite_id"]

        response = stranger.delete(f"/singles/invites/{invite_id}")

        assert response.status_code == 403
        assert owner.delete(f"/singles/invites/{invite_id}").json()["invite"][
            "status"
        ] == "revoked"


class TestModerationRoutes:
    """Access control on the moderator routes."""

    def test_moderator_claim_required(self, env):
        client = env.client_for(env.couple().id)

        response = client.get("/singles/admin/invites")

        assert response.status_code == 403

    def test_unknown_invite(self, env):
        moderator = env.client_for(uuid4(), is_moderator=True)

        response = moderator.post(f"/singles/admin/invites/{uuid4()}/approve")

        assert response.status_code == 404


class TestOnboardingRoutes:
    """Token outcomes on the public onboarding routes."""

    def test_bad_token_is_not_an_error(self, env):
        response = env.client_for().post(
            "/singles/onboarding/validate", json={"token": "garbage"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": False,
            "token_status": "invalid",
            "message": "This link is invalid.",
            "status": None,
            "invitee_email": None,
            "requested_role": None,
            "role_label": None,
            "inviter_name": None,
            "expires_at": None,
        }


class TestHealth:
    def test_health(self, env):
        response = env.client_for().get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
