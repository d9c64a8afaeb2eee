"""Post aggregate root.

Posts are the primary content type in MemeX: a titled submission to a
community, optionally carrying an image or video.
"""

from typing import Optional

from pydantic import Field, model_validator

from memex.domain.model.common import VotableModel
from memex.domain.value import CommunityId, MediaType, PostId, SubjectKind


class Post(VotableModel):
    """Post aggregate root.

    `hot_score` is derived from score and age; it is recomputed on every
    vote and never set independently.
    """

    kind = SubjectKind.POST

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=40000)
    community_id: CommunityId
    tags: list[str] = Field(default_factory=list)
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    hot_score: float = 0.0
    comment_count: int = Field(default=0, ge=0)
    is_featured: bool = False

    @model_validator(mode="after")
    def validate_media(self) -> "Post":
        """Media URL and media type come together."""
        if bool(self.media_url) != (self.media_type is not None):
            raise ValueError("media_url and media_type must be set together")
        return self
