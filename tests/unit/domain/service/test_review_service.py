"""Unit tests for ReviewService."""

from uuid import uuid4

import pytest

from singles.domain.error import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from singles.domain.repository import AccountRepository
from singles.domain.service import ReviewService
from singles.domain.value import UserId
from tests.conftest import make_couple, make_single
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateReview:
    """Tests for create_review method."""

    @pytest.mark.asyncio
    async def test_review_updates_stats(self, unit_env):
        # Arrange
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        single = await make_single(accounts)
        first, second = await make_couple(accounts), await make_couple(accounts)

        # Act
        await reviews.create_review(single.id, first.id, 5, "Lovely evening")
        result = await reviews.create_review(single.id, second.id, 3.6)

        # Assert
        assert result.review.score == 4
        assert result.review.comment is None
        assert result.stats.review_count == 2
        assert result.stats.average_score == 4.5

    @pytest.mark.asyncio
    async def test_one_review_per_couple(self, unit_env):
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        single, couple = await make_single(accounts), await make_couple(accounts)
        await reviews.create_review(single.id, couple.id, 4)

        with pytest.raises(DuplicateError) as exc_info:
            await reviews.create_review(single.id, couple.id, 2)

        assert str(exc_info.value) == "You have already shared feedback for this single."
        assert (await reviews.get_stats(single.id)).review_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "score, stored", [(2.5, 3), (4.5, 5), (1.5, 2), (3.49, 3), (5, 5)]
    )
    async def test_half_scores_round_up(self, unit_env, score, stored):
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        single, couple = await make_single(accounts), await make_couple(accounts)

        result = await reviews.create_review(single.id, couple.id, score)

        assert result.review.score == stored
        assert result.stats.average_score == stored

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", [0, 5.5, -1, True, "4"])
    async def test_score_out_of_range(self, unit_env, score):
        reviews = await unit_env.get(ReviewService)

        with pytest.raises(ValidationError):
            await reviews.create_review(UserId(uuid4()), UserId(uuid4()), score)

    @pytest.mark.asyncio
    async def test_comment_is_trimmed_and_truncated(self, unit_env):
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        single, couple = await make_single(accounts), await make_couple(accounts)

        result = await reviews.create_review(single.id, couple.id, 4, "  " + "x" * 1200)

        assert result.review.comment == "x" * 1000

    @pytest.mark.asyncio
    async def test_single_cannot_review(self, unit_env):
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        single, other = await make_single(accounts), await make_single(accounts)

        with pytest.raises(ForbiddenError):
            await reviews.create_review(single.id, other.id, 4)

    @pytest.mark.asyncio
    async def test_subject_must_be_single(self, unit_env):
        reviews = await unit_env.get(ReviewService)
        accounts = await unit_env.get(AccountRepository)
        couple, other = await make_couple(accounts), await make_couple(accounts)

        with pytest.raises(NotFoundError):
            await reviews.create_review(couple.id, other.id, 4)


class TestListReviews:
    """Tests for list_reviews and get_stats methods."""

    @pytest.mark.asyncio
    async def test_no_reviews(self, unit_env):
        reviews = await unit_env.get(ReviewService)

        stats = await reviews.get_stats(UserId(uuid4()))

        assert stats.review_count == 0
        assert stats.average_score is None
        assert await reviews.list_reviews(UserId(uuid4())) == []
