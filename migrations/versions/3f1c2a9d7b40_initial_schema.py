"""initial_schema

Create the MemeX schema, one table per document collection:
- Users (id is the Firebase uid, karma and joined communities)
- Communities and memberships
- Posts (denormalized vote counters and hot score)
- Comments (threaded through parent_id)
- Post votes and comment votes (one row per subject and user)

Counters carry CHECK constraints so a batch that would drive one
negative is rejected as a whole.

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def _votes_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(length=200), nullable=False),
        sa.Column("subject_kind", sa.String(length=10), nullable=False),
        sa.Column("subject_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("type IN ('upvote', 'downvote')", name=f"{name}_type_valid"),
    )
    op.create_index(f"idx_{name}_user_id", name, ["user_id"])


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("bio", sa.Text(), server_default="", nullable=False),
        sa.Column("photo_url", sa.Text(), server_default="", nullable=False),
        sa.Column("karma", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "joined_communities",
            postgresql.ARRAY(sa.String()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("is_admin", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_banned", sa.Boolean(), server_default="false", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("karma >= 0", name="users_karma_non_negative"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # COMMUNITIES table
    # ========================================================================
    op.create_table(
        "communities",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=21), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column(
            "rules", postgresql.ARRAY(sa.Text()), server_default="{}", nullable=False
        ),
        sa.Column("creator_id", sa.String(length=128), nullable=False),
        sa.Column(
            "moderators",
            postgresql.ARRAY(sa.String()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("member_count", sa.Integer(), server_default="1", nullable=False),
        sa.Column("post_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("is_nsfw", sa.Boolean(), server_default="false", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "member_count >= 0", name="communities_member_count_non_negative"
        ),
        sa.CheckConstraint("post_count >= 0", name="communities_post_count_non_negative"),
    )
    op.create_index("idx_communities_name", "communities", ["name"], unique=True)
    op.create_index(
        "idx_communities_active_members",
        "communities",
        ["is_active", sa.text("member_count DESC")],
    )

    # ========================================================================
    # MEMBERSHIPS table (id is "{community_id}_{user_id}")
    # ========================================================================
    op.create_table(
        "memberships",
        sa.Column("id", sa.String(length=200), nullable=False),
        sa.Column("community_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("role", sa.String(length=20), server_default="member", nullable=False),
        _timestamp("joined_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_memberships_user_id", "memberships", ["user_id"])
    op.create_index("idx_memberships_community_id", "memberships", ["community_id"])

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("community_id", sa.String(length=64), nullable=False),
        sa.Column(
            "tags", postgresql.ARRAY(sa.String()), server_default="{}", nullable=False
        ),
        sa.Column("author_id", sa.String(length=128), nullable=False),
        sa.Column("media_url", sa.Text(), nullable=True),
        sa.Column("media_type", sa.String(length=10), nullable=True),
        sa.Column("upvotes", sa.Integer(), server_default="1", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="1", nullable=False),
        sa.Column("hot_score", sa.Float(), server_default="0", nullable=False),
        sa.Column("comment_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_featured", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="false", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="posts_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="posts_downvotes_non_negative"),
        sa.CheckConstraint("score = upvotes - downvotes", name="posts_score_consistent"),
        sa.CheckConstraint(
            "comment_count >= 0", name="posts_comment_count_non_negative"
        ),
    )
    op.create_index("idx_posts_hot_score", "posts", [sa.text("hot_score DESC")])
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])
    op.create_index("idx_posts_score", "posts", [sa.text("score DESC")])
    op.create_index("idx_posts_community_id", "posts", ["community_id"])
    op.create_index("idx_posts_author_id", "posts", ["author_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("post_id", sa.String(length=64), nullable=False),
        sa.Column("author_id", sa.String(length=128), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.String(length=64), nullable=True),
        sa.Column("upvotes", sa.Integer(), server_default="1", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="1", nullable=False),
        sa.Column("reply_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_edited", sa.Boolean(), server_default="false", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="comments_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="comments_downvotes_non_negative"),
        sa.CheckConstraint(
            "score = upvotes - downvotes", name="comments_score_consistent"
        ),
        sa.CheckConstraint(
            "reply_count >= 0", name="comments_reply_count_non_negative"
        ),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])
    op.create_index("idx_comments_created_at", "comments", [sa.text("created_at DESC")])

    # ========================================================================
    # VOTES tables (id is "{subject_id}_{user_id}")
    # ========================================================================
    _votes_table("post_votes")
    _votes_table("comment_votes")


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comment_votes")
    op.drop_table("post_votes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("memberships")
    op.drop_table("communities")
    op.drop_table("users")
