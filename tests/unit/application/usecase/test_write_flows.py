"""Unit tests for the write use cases."""

import pytest

from memex.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    RegisterUserRequest,
    RegisterUserUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from memex.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from memex.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesUseCase,
    MembershipRequest,
)
from memex.application.usecase.media import UploadMediaRequest, UploadMediaUseCase
from memex.application.usecase.post import CreatePostRequest, CreatePostUseCase
from memex.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from memex.domain.error import ConflictError, InvalidVoteType, ValidationError
from memex.domain.repository import CommentRepository, PostRepository
from memex.domain.value import MediaType, SubjectKind, VoteType
from tests.conftest import make_identity, seed_community, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestAuthUseCases:
    """Tests for registration and profile use cases."""

    @pytest.mark.asyncio
    async def test_register_then_read_profile(self, unit_env):
        register = await unit_env.get(RegisterUserUseCase)
        current = await unit_env.get(GetCurrentUserUseCase)

        created = await register.execute(
            RegisterUserRequest(identity=make_identity("alice"), bio="memes only")
        )
        fetched = await current.execute(GetCurrentUserRequest(user_id="alice"))

        assert created.message == "User profile created successfully"
        assert fetched.user.uid == "alice"
        assert fetched.user.email == "alice@example.com"
        assert fetched.user.bio == "memes only"

    @pytest.mark.asyncio
    async def test_register_twice(self, unit_env):
        register = await unit_env.get(RegisterUserUseCase)
        await register.execute(RegisterUserRequest(identity=make_identity("alice")))

        with pytest.raises(ConflictError):
            await register.execute(RegisterUserRequest(identity=make_identity("alice")))

    @pytest.mark.asyncio
    async def test_update_profile(self, unit_env):
        await seed_user(unit_env, "alice")
        update = await unit_env.get(UpdateProfileUseCase)
        current = await unit_env.get(GetCurrentUserUseCase)

        response = await update.execute(
            UpdateProfileRequest(user_id="alice", display_name="Memelord")
        )

        assert response.message == "Profile updated successfully"
        fetched = await current.execute(GetCurrentUserRequest(user_id="alice"))
        assert fetched.user.display_name == "Memelord"


class TestContentUseCases:
    """Tests for creating posts and comments."""

    @pytest.mark.asyncio
    async def test_create_post_with_uploaded_media(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        upload = await unit_env.get(UploadMediaUseCase)
        create_post = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)

        media = await upload.execute(UploadMediaRequest(data=b"GIF89a", mimetype="image/gif"))
        response = await create_post.execute(
            CreatePostRequest(
                title="Cat",
                community_id=community.id,
                media_url=media.url,
                media_type=media.type,
                author_id="alice",
            )
        )

        post = await post_repo.find_by_id(response.post_id)
        assert post.media_url == media.url
        assert post.media_type is MediaType.IMAGE

    @pytest.mark.asyncio
    async def test_media_url_without_type(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        create_post = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValidationError):
            await create_post.execute(
                CreatePostRequest(
                    title="Cat",
                    community_id=community.id,
                    media_url="https://media.example.com/cat.gif",
                    author_id="alice",
                )
            )

    @pytest.mark.asyncio
    async def test_create_and_edit_comment(self, unit_env):
        await seed_user(unit_env, "alice")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        create_comment = await unit_env.get(CreateCommentUseCase)
        update_comment = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)

        created = await create_comment.execute(
            CreateCommentRequest(post_id=post.id, content="lol", author_id="alice")
        )
        await update_comment.execute(
            UpdateCommentRequest(comment_id=created.comment_id, content="lmao", user_id="alice")
        )

        comment = await comment_repo.find_by_id(created.comment_id)
        assert comment.content == "lmao"
        assert comment.is_edited


class TestCastVote:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_response(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        community = await seed_community(unit_env, "alice")
        post = await seed_post(unit_env, "alice", community.id)
        use_case = await unit_env.get(CastVoteUseCase)

        response = await use_case.execute(
            CastVoteRequest(
                subject_kind=SubjectKind.POST,
                subject_id=post.id,
                user_id="bob",
                vote_type="upvote",
            )
        )

        assert response.message == "Vote recorded successfully"
        assert (response.new_score, response.upvotes, response.downvotes) == (2, 2, 0)
        assert response.user_vote is VoteType.UPVOTE

    @pytest.mark.asyncio
    async def test_invalid_vote_type(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(InvalidVoteType):
            await use_case.execute(
                CastVoteRequest(
                    subject_kind=SubjectKind.POST,
                    subject_id="anything",
                    user_id="bob",
                    vote_type="",
                )
            )


class TestCommunityUseCases:
    """Tests for community use cases."""

    @pytest.mark.asyncio
    async def test_create_join_leave(self, unit_env):
        await seed_user(unit_env, "alice")
        await seed_user(unit_env, "bob")
        create = await unit_env.get(CreateCommunityUseCase)
        join = await unit_env.get(JoinCommunityUseCase)
        leave = await unit_env.get(LeaveCommunityUseCase)
        listing = await unit_env.get(ListCommunitiesUseCase)

        created = await create.execute(
            CreateCommunityRequest(
                name="WholesomeMemes", description="Be kind", creator_id="alice"
            )
        )
        joined = await join.execute(
            MembershipRequest(community_id=created.community_id, user_id="bob")
        )
        after_join = await listing.execute(ListCommunitiesRequest())
        left = await leave.execute(
            MembershipRequest(community_id=created.community_id, user_id="bob")
        )

        assert created.name == "wholesomememes"
        assert joined.message == "Successfully joined community"
        assert after_join.communities[0].member_count == 2
        assert left.message == "Successfully left community"
