"""Unit tests for CommunityService."""

import pytest

from memex.domain.error import ConflictError, NotFoundError, ValidationError
from memex.domain.repository import (
    CommunityRepository,
    MembershipRepository,
    UserRepository,
)
from memex.domain.service import CommunityService
from memex.domain.value import CommunityId, MembershipRole, UserId
from memex.persistence.repository.inmemory import (
    InMemoryCommunityRepository,
    InMemoryDatabase,
)
from tests.conftest import seed_community, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateCommunity:
    """Tests for creating communities."""

    @pytest.mark.asyncio
    async def test_creator_is_first_moderator(self, unit_env):
        # Arrange
        await seed_user(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)
        membership_repo = await unit_env.get(MembershipRepository)
        user_repo = await unit_env.get(UserRepository)

        # Act
        community = await community_service.create_community(
            creator_id=UserId("alice"),
            name="  DankMemes ",
            description="Only the dankest",
            rules=["Be nice", "  "],
        )

        # Assert
        assert community.name.root == "dankmemes"
        assert community.display_name == "dankmemes"
        assert community.rules == ["Be nice"]
        assert community.member_count == 1
        assert community.moderators == [UserId("alice")]
        membership = await membership_repo.find(community.id, UserId("alice"))
        assert membership.role is MembershipRole.MODERATOR
        user = await user_repo.find_by_id(UserId("alice"))
        assert user.joined_communities == [community.id]

    @pytest.mark.asyncio
    async def test_name_taken_case_insensitively(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_community(unit_env, "alice", "dankmemes")

        with pytest.raises(ConflictError):
            await seed_community(unit_env, "alice", "DANKMEMES")

    @pytest.mark.asyncio
    async def test_name_taken_between_check_and_commit(self, unit_env, monkeypatch):
        """The unique name is enforced by the store, not only by the read."""
        # Arrange - the name lookup misses, as if the other create hadn't landed
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community_service = await unit_env.get(CommunityService)
        community_repo = await unit_env.get(CommunityRepository)
        database = await unit_env.get(InMemoryDatabase)
        await seed_community(unit_env, "alice", "dankmemes")
        batches_before = database.committed_batches

        async def stale_lookup(self, name):
            return None

        monkeypatch.setattr(InMemoryCommunityRepository, "find_by_name", stale_lookup)

        # Act / Assert
        with pytest.raises(ConflictError, match="already taken"):
            await community_service.create_community(UserId("bob"), "dankmemes", "Again")

        assert database.committed_batches == batches_before
        assert len(await community_repo.find_active(limit=10)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["ab", "has space", "x" * 22, "émoji"])
    async def test_malformed_name(self, unit_env, name):
        await seed_user(unit_env, "alice")

        with pytest.raises(ValidationError):
            await seed_community(unit_env, "alice", name)

    @pytest.mark.asyncio
    async def test_description_required(self, unit_env):
        await seed_user(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)

        with pytest.raises(ValidationError):
            await community_service.create_community(UserId("alice"), "dankmemes", "  ")


class TestMembership:
    """Tests for joining and leaving."""

    @pytest.mark.asyncio
    async def test_join_then_leave(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)
        community_repo = await unit_env.get(CommunityRepository)
        user_repo = await unit_env.get(UserRepository)

        await community_service.join_community(community.id, UserId("bob"))

        assert (await community_repo.find_by_id(community.id)).member_count == 2
        assert (await user_repo.find_by_id(UserId("bob"))).joined_communities == [
            community.id
        ]
        joined = await community_service.get_joined_communities(UserId("bob"))
        assert [c.id for c in joined] == [community.id]

        await community_service.leave_community(community.id, UserId("bob"))

        assert (await community_repo.find_by_id(community.id)).member_count == 1
        assert (await user_repo.find_by_id(UserId("bob"))).joined_communities == []

    @pytest.mark.asyncio
    async def test_join_twice(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)

        with pytest.raises(ConflictError):
            await community_service.join_community(community.id, UserId("alice"))

    @pytest.mark.asyncio
    async def test_join_unknown_community(self, unit_env):
        await seed_user(unit_env, "bob")
        community_service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError):
            await community_service.join_community(CommunityId("nope"), UserId("bob"))

    @pytest.mark.asyncio
    async def test_leave_without_membership(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError):
            await community_service.leave_community(community.id, UserId("bob"))

    @pytest.mark.asyncio
    async def test_moderator_leaving_loses_role(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)
        community_repo = await unit_env.get(CommunityRepository)

        await community_service.leave_community(community.id, UserId("alice"))

        stored = await community_repo.find_by_id(community.id)
        assert stored.moderators == []
        assert stored.member_count == 0


class TestListCommunities:
    """Tests for listing and looking up communities."""

    @pytest.mark.asyncio
    async def test_largest_first_with_prefix_search(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        dank = await seed_community(unit_env, "alice", "dankmemes")
        await seed_community(unit_env, "alice", "catmemes")
        await seed_community(unit_env, "alice", "dadjokes")
        community_service = await unit_env.get(CommunityService)
        await community_service.join_community(dank.id, UserId("bob"))

        everything = await community_service.list_communities()
        searched = await community_service.list_communities(search=" DA ")

        assert [c.name.root for c in everything] == ["dankmemes", "catmemes", "dadjokes"]
        assert [c.name.root for c in searched] == ["dankmemes", "dadjokes"]

    @pytest.mark.asyncio
    async def test_get_by_name(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        community_service = await unit_env.get(CommunityService)

        found = await community_service.get_community_by_name("DankMemes")

        assert found.id == community.id
        with pytest.raises(NotFoundError):
            await community_service.get_community_by_name("no such name!")
