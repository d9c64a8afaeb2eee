"""Unit tests for ModerationService and ban enforcement."""

from datetime import timedelta

import pytest

from memex.domain.error import (
    AccountBanned,
    AdminRequired,
    ContentDeletedException,
    NotFoundError,
    ValidationError,
)
from memex.domain.model.common import utc_now
from memex.domain.repository import PostRepository, UserRepository
from memex.domain.repository.document_store import Collection
from memex.domain.service import ModerationService, PostService, VoteService
from memex.domain.value import PostId, SubjectKind, UserId
from memex.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import (
    hours_ago,
    make_identity,
    put_document,
    seed_comment,
    seed_community,
    seed_post,
    seed_user,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def ban(env, uid: str, **kwargs):
    moderation_service = await env.get(ModerationService)
    return await moderation_service.ban_user(UserId("admin"), UserId(uid), **kwargs)


class TestEnsureAdmin:
    """Tests for the admin gate."""

    @pytest.mark.asyncio
    async def test_token_claim_is_enough(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        admin_id = await moderation_service.ensure_admin(
            make_identity("root", is_admin=True)
        )

        assert admin_id == UserId("root")

    @pytest.mark.asyncio
    async def test_profile_flag_grants_access(self, unit_env):
        await seed_user(unit_env, "admin")
        await seed_user(unit_env, "bob")
        moderation_service = await unit_env.get(ModerationService)
        await moderation_service.set_admin(UserId("admin"), UserId("bob"), True)

        assert await moderation_service.ensure_admin(make_identity("bob")) == "bob"

    @pytest.mark.asyncio
    async def test_plain_user_refused(self, unit_env):
        await seed_user(unit_env, "bob")
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(AdminRequired):
            await moderation_service.ensure_admin(make_identity("bob"))

    @pytest.mark.asyncio
    async def test_unregistered_caller_refused(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(AdminRequired):
            await moderation_service.ensure_admin(make_identity("ghost"))


class TestBanUser:
    """Tests for banning and unbanning."""

    @pytest.mark.asyncio
    async def test_permanent_ban_is_stored(self, unit_env):
        # Arrange
        await seed_user(unit_env, "admin")
        await seed_user(unit_env, "bob")
        user_repo = await unit_env.get(UserRepository)

        # Act
        banned = await ban(unit_env, "bob", reason="  spam ")

        # Assert
        stored = await user_repo.find_by_id(UserId("bob"))
        assert banned.is_banned and stored.is_banned
        assert stored.ban_reason == "spam"
        assert stored.banned_until is None
        assert stored.banned_by == UserId("admin")

    @pytest.mark.asyncio
    async def test_temporary_ban_has_expiry(self, unit_env):
        await seed_user(unit_env, "bob")
        before = utc_now()

        banned = await ban(unit_env, "bob", duration_days=7)

        assert banned.ban_reason == "Violation of community guidelines"
        assert banned.banned_until >= before + timedelta(days=7)
        assert banned.is_banned_at(utc_now())
        assert not banned.is_banned_at(utc_now() + timedelta(days=8))

    @pytest.mark.asyncio
    async def test_unban_clears_ban_details(self, unit_env):
        await seed_user(unit_env, "bob")
        await ban(unit_env, "bob", reason="spam", duration_days=1)
        moderation_service = await unit_env.get(ModerationService)
        user_repo = await unit_env.get(UserRepository)

        await moderation_service.unban_user(UserId("admin"), UserId("bob"))

        stored = await user_repo.find_by_id(UserId("bob"))
        assert not stored.is_banned
        assert (stored.ban_reason, stored.banned_until, stored.banned_by) == (
            None,
            None,
            None,
        )

    @pytest.mark.asyncio
    async def test_cannot_ban_yourself(self, unit_env):
        await seed_user(unit_env, "admin")

        with pytest.raises(ValidationError):
            await ban(unit_env, "admin")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, -3])
    async def test_duration_must_be_positive(self, unit_env, days):
        await seed_user(unit_env, "bob")

        with pytest.raises(ValidationError):
            await ban(unit_env, "bob", duration_days=days)

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        with pytest.raises(NotFoundError):
            await ban(unit_env, "ghost")


class TestBanEnforcement:
    """Banned users can read but not write."""

    @pytest.mark.asyncio
    async def test_banned_user_cannot_post(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        await ban(unit_env, "bob")

        with pytest.raises(AccountBanned):
            await seed_post(unit_env, "bob", community.id)

    @pytest.mark.asyncio
    async def test_banned_user_cannot_comment(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        await ban(unit_env, "bob")

        with pytest.raises(AccountBanned):
            await seed_comment(unit_env, "bob", post.id)

    @pytest.mark.asyncio
    async def test_banned_user_cannot_vote(self, unit_env):
        # Arrange
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        await ban(unit_env, "bob")
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        # Act / Assert
        with pytest.raises(AccountBanned):
            await vote_service.vote(SubjectKind.POST, post.id, UserId("bob"), "upvote")

        stored = await post_repo.find_by_id(post.id)
        assert (stored.upvotes, stored.downvotes, stored.score) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_lapsed_ban_no_longer_blocks(self, unit_env):
        await seed_user(unit_env, "alice")
        bob = await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        database = await unit_env.get(InMemoryDatabase)
        put_document(
            database,
            Collection.USERS,
            bob.model_copy(update={"is_banned": True, "banned_until": hours_ago(1)}),
        )

        post = await seed_post(unit_env, "bob", community.id)

        assert post.author_id == UserId("bob")

    @pytest.mark.asyncio
    async def test_unbanned_user_can_post_again(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        await ban(unit_env, "bob")
        moderation_service = await unit_env.get(ModerationService)

        await moderation_service.unban_user(UserId("admin"), UserId("bob"))
        post = await seed_post(unit_env, "bob", community.id)

        assert post.author_id == UserId("bob")


class TestAdminRights:
    """Tests for granting and revoking admin rights."""

    @pytest.mark.asyncio
    async def test_grant_then_revoke(self, unit_env):
        await seed_user(unit_env, "bob")
        moderation_service = await unit_env.get(ModerationService)
        user_repo = await unit_env.get(UserRepository)

        await moderation_service.set_admin(UserId("admin"), UserId("bob"), True)
        granted = await user_repo.find_by_id(UserId("bob"))
        await moderation_service.set_admin(UserId("admin"), UserId("bob"), False)
        revoked = await user_repo.find_by_id(UserId("bob"))

        assert granted.is_admin
        assert not revoked.is_admin

    @pytest.mark.asyncio
    async def test_cannot_revoke_own_rights(self, unit_env):
        await seed_user(unit_env, "admin")
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(ValidationError):
            await moderation_service.set_admin(UserId("admin"), UserId("admin"), False)


class TestFeaturePost:
    """Tests for featuring posts."""

    @pytest.mark.asyncio
    async def test_feature_then_unfeature(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        moderation_service = await unit_env.get(ModerationService)
        post_repo = await unit_env.get(PostRepository)

        featured = await moderation_service.set_featured(post.id, True)
        assert featured.is_featured
        assert (await post_repo.find_by_id(post.id)).is_featured

        await moderation_service.set_featured(post.id, False)
        assert not (await post_repo.find_by_id(post.id)).is_featured

    @pytest.mark.asyncio
    async def test_deleted_post_cannot_be_featured(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        post_service = await unit_env.get(PostService)
        moderation_service = await unit_env.get(ModerationService)
        await post_service.delete_post(post.id, UserId("alice"))

        with pytest.raises(ContentDeletedException):
            await moderation_service.set_featured(post.id, True)

    @pytest.mark.asyncio
    async def test_unknown_post(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await moderation_service.set_featured(PostId("ghost"), True)


class TestStatsAndListing:
    """Tests for the dashboard reads."""

    @pytest.mark.asyncio
    async def test_stats_skip_deleted_content(self, unit_env):
        # Arrange
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        kept = await seed_post(unit_env, "alice", community.id)
        dropped = await seed_post(unit_env, "alice", community.id, title="Gone")
        await seed_comment(unit_env, "bob", kept.id)
        post_service = await unit_env.get(PostService)
        await post_service.delete_post(dropped.id, UserId("alice"))
        moderation_service = await unit_env.get(ModerationService)

        # Act
        stats = await moderation_service.stats()

        # Assert
        assert (
            stats.total_users,
            stats.total_posts,
            stats.total_comments,
            stats.total_communities,
        ) == (2, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_list_filters_by_ban_and_search(self, unit_env):
        for uid in ("alice", "bob", "carol"):
            await seed_user(unit_env, uid)
        await ban(unit_env, "bob")
        moderation_service = await unit_env.get(ModerationService)

        banned = await moderation_service.list_users(banned=True)
        unbanned = await moderation_service.list_users(banned=False)
        by_email = await moderation_service.list_users(search=" CAROL@ ")

        assert [u.id for u in banned] == ["bob"]
        assert sorted(u.id for u in unbanned) == ["alice", "carol"]
        assert [u.id for u in by_email] == ["carol"]
