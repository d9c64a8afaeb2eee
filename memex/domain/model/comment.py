"""Comment entity.

Comments are threaded discussions on posts. A reply points at its parent
through `parent_id`; the parent tracks how many direct replies it has.
"""

from typing import Optional

from pydantic import Field

from memex.domain.model.common import VotableModel
from memex.domain.value import CommentId, PostId, SubjectKind


class Comment(VotableModel):
    """Comment entity."""

    kind = SubjectKind.COMMENT

    id: CommentId
    post_id: PostId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    reply_count: int = Field(default=0, ge=0)
    is_edited: bool = False
