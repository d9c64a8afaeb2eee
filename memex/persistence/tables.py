"""SQLAlchemy table definitions for MemeX.

One table per document collection. Columns mirror the fields of the
domain models so a document's fields map one-to-one onto a row; ids are
opaque strings. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP

from memex.domain.repository.document_store import Collection

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (id is the identity provider uid)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("email", String(255), nullable=True),
    Column("display_name", String(100), nullable=False),
    Column("bio", Text, nullable=False, server_default=""),
    Column("photo_url", Text, nullable=False, server_default=""),
    Column("karma", Integer, nullable=False, server_default="0"),
    Column("joined_communities", ARRAY(String), nullable=False, server_default="{}"),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column("is_banned", Boolean, nullable=False, server_default="false"),
    Column("ban_reason", Text, nullable=True),
    Column("banned_until", TIMESTAMP(timezone=True), nullable=True),
    Column("banned_by", String(128), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("karma >= 0", name="users_karma_non_negative"),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(21), nullable=False),
    Column("display_name", String(100), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("rules", ARRAY(Text), nullable=False, server_default="{}"),
    Column("creator_id", String(128), nullable=False),
    Column("moderators", ARRAY(String), nullable=False, server_default="{}"),
    Column("member_count", Integer, nullable=False, server_default="1"),
    Column("post_count", Integer, nullable=False, server_default="0"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_nsfw", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("member_count >= 0", name="communities_member_count_non_negative"),
    CheckConstraint("post_count >= 0", name="communities_post_count_non_negative"),
)

Index("idx_communities_name", communities_table.c.name, unique=True)

# Unique indexes whose violation the document store reports as a duplicate
UNIQUE_INDEX_FIELDS = {"idx_communities_name": "name"}

Index(
    "idx_communities_active_members",
    communities_table.c.is_active,
    communities_table.c.member_count.desc(),
)

# ============================================================================
# MEMBERSHIPS TABLE (id is "{community_id}_{user_id}")
# ============================================================================
memberships_table = Table(
    "memberships",
    metadata,
    Column("id", String(200), primary_key=True),
    Column("community_id", String(64), nullable=False),
    Column("user_id", String(128), nullable=False),
    Column("role", String(20), nullable=False, server_default="member"),
    Column(
        "joined_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_memberships_user_id", memberships_table.c.user_id)
Index("idx_memberships_community_id", memberships_table.c.community_id)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column("community_id", String(64), nullable=False),
    Column("tags", ARRAY(String), nullable=False, server_default="{}"),
    Column("author_id", String(128), nullable=False),
    Column("media_url", Text, nullable=True),
    Column("media_type", String(10), nullable=True),
    Column("upvotes", Integer, nullable=False, server_default="1"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="1"),
    Column("hot_score", Float, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="posts_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="posts_downvotes_non_negative"),
    CheckConstraint("score = upvotes - downvotes", name="posts_score_consistent"),
    CheckConstraint("comment_count >= 0", name="posts_comment_count_non_negative"),
)

Index("idx_posts_hot_score", posts_table.c.hot_score.desc())
Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_score", posts_table.c.score.desc())
Index("idx_posts_community_id", posts_table.c.community_id)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("post_id", String(64), nullable=False),
    Column("author_id", String(128), nullable=False),
    Column("content", Text, nullable=False),
    Column("parent_id", String(64), nullable=True),
    Column("upvotes", Integer, nullable=False, server_default="1"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="1"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="comments_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="comments_downvotes_non_negative"),
    CheckConstraint("score = upvotes - downvotes", name="comments_score_consistent"),
    CheckConstraint("reply_count >= 0", name="comments_reply_count_non_negative"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at.desc())

# ============================================================================
# VOTES TABLES (id is "{subject_id}_{user_id}")
# ============================================================================


def _votes_table(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", String(200), primary_key=True),
        Column("subject_kind", String(10), nullable=False),
        Column("subject_id", String(64), nullable=False),
        Column("user_id", String(128), nullable=False),
        Column("type", String(10), nullable=False),
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        CheckConstraint("type IN ('upvote', 'downvote')", name=f"{name}_type_valid"),
    )


post_votes_table = _votes_table("post_votes")
comment_votes_table = _votes_table("comment_votes")

Index("idx_post_votes_user_id", post_votes_table.c.user_id)
Index("idx_comment_votes_user_id", comment_votes_table.c.user_id)

COLLECTION_TABLES: dict[Collection, Table] = {
    Collection.USERS: users_table,
    Collection.COMMUNITIES: communities_table,
    Collection.MEMBERSHIPS: memberships_table,
    Collection.POSTS: posts_table,
    Collection.COMMENTS: comments_table,
    Collection.POST_VOTES: post_votes_table,
    Collection.COMMENT_VOTES: comment_votes_table,
}
