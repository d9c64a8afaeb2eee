"""Denormalized counters touched by each kind of mutation.

Every counter kept on a related document (comment count on a post, reply
count on a parent comment, karma on a user, member and post counts on a
community) is listed here against the mutation that moves it. Flows add
their primary write to a batch and call `apply_counter_effects` to add the
matching increments to the same batch.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from memex.domain.batch import BatchedMutation
from memex.domain.error import BusinessRuleViolationError
from memex.domain.repository.document_store import Collection, DocumentRef, Increment


class MutationKind(str, Enum):
    """Mutations that carry counter side effects."""

    POST_CREATED = "post_created"
    COMMENT_CREATED = "comment_created"
    COMMUNITY_JOINED = "community_joined"
    COMMUNITY_LEFT = "community_left"


class CounterTarget(str, Enum):
    """Role of the document whose counter moves."""

    AUTHOR = "author"
    POST = "post"
    PARENT = "parent"
    COMMUNITY = "community"


@dataclass(frozen=True)
class CounterEffect:
    """One counter increment caused by a mutation."""

    target: CounterTarget
    collection: Collection
    field: str
    amount: int
    touches_updated_at: bool = True
    optional: bool = False


COUNTER_EFFECTS: dict[MutationKind, tuple[CounterEffect, ...]] = {
    MutationKind.POST_CREATED: (
        CounterEffect(
            CounterTarget.AUTHOR, Collection.USERS, "karma", 1, touches_updated_at=False
        ),
        CounterEffect(CounterTarget.COMMUNITY, Collection.COMMUNITIES, "post_count", 1),
    ),
    MutationKind.COMMENT_CREATED: (
        CounterEffect(CounterTarget.POST, Collection.POSTS, "comment_count", 1),
        CounterEffect(
            CounterTarget.PARENT, Collection.COMMENTS, "reply_count", 1, optional=True
        ),
        CounterEffect(
            CounterTarget.AUTHOR, Collection.USERS, "karma", 1, touches_updated_at=False
        ),
    ),
    MutationKind.COMMUNITY_JOINED: (
        CounterEffect(CounterTarget.COMMUNITY, Collection.COMMUNITIES, "member_count", 1),
    ),
    MutationKind.COMMUNITY_LEFT: (
        CounterEffect(
            CounterTarget.COMMUNITY, Collection.COMMUNITIES, "member_count", -1
        ),
    ),
}


def apply_counter_effects(
    batch: BatchedMutation,
    kind: MutationKind,
    targets: Mapping[CounterTarget, str | None],
    now: datetime,
) -> None:
    """Add the counter increments for `kind` to `batch`.

    Args:
        batch: Batch holding the mutation's primary write
        kind: Mutation being performed
        targets: Document id for each target role; optional roles may be None
        now: Timestamp written to `updated_at` where the effect asks for it

    Raises:
        BusinessRuleViolationError: If a required target id is missing
    """
    for effect in COUNTER_EFFECTS[kind]:
        target_id = targets.get(effect.target)
        if target_id is None:
            if effect.optional:
                continue
            raise BusinessRuleViolationError(
                f"{kind.value} requires a {effect.target.value} target"
            )

        payload: dict[str, Any] = {effect.field: Increment(amount=effect.amount)}
        if effect.touches_updated_at:
            payload["updated_at"] = now
        batch.update(DocumentRef(collection=effect.collection, id=target_id), payload)
