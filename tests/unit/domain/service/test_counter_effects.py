"""Unit tests for the counter side effects table."""

from datetime import datetime, timezone

import pytest

from memex.domain.batch import BatchedMutation
from memex.domain.error import BusinessRuleViolationError
from memex.domain.repository.document_store import Collection, Increment, WriteOperation
from memex.domain.service.counter_effects import (
    COUNTER_EFFECTS,
    CounterTarget,
    MutationKind,
    apply_counter_effects,
)
from memex.persistence.repository.inmemory import InMemoryDatabase, InMemoryDocumentStore

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def batch():
    return BatchedMutation(InMemoryDocumentStore(InMemoryDatabase()), "test")


def test_every_mutation_kind_has_effects():
    assert set(COUNTER_EFFECTS) == set(MutationKind)


def test_comment_reply_moves_three_counters(batch):
    apply_counter_effects(
        batch,
        MutationKind.COMMENT_CREATED,
        {
            CounterTarget.POST: "p1",
            CounterTarget.PARENT: "c1",
            CounterTarget.AUTHOR: "alice",
        },
        NOW,
    )

    writes = batch.writes
    assert all(w.operation is WriteOperation.UPDATE for w in writes)
    assert [(w.target.collection, w.target.id) for w in writes] == [
        (Collection.POSTS, "p1"),
        (Collection.COMMENTS, "c1"),
        (Collection.USERS, "alice"),
    ]
    assert writes[0].payload == {"comment_count": Increment(amount=1), "updated_at": NOW}
    assert writes[1].payload == {"reply_count": Increment(amount=1), "updated_at": NOW}
    # Karma doesn't touch the profile timestamp
    assert writes[2].payload == {"karma": Increment(amount=1)}


def test_top_level_comment_skips_parent(batch):
    apply_counter_effects(
        batch,
        MutationKind.COMMENT_CREATED,
        {CounterTarget.POST: "p1", CounterTarget.PARENT: None, CounterTarget.AUTHOR: "alice"},
        NOW,
    )

    assert [w.target.collection for w in batch.writes] == [
        Collection.POSTS,
        Collection.USERS,
    ]


def test_missing_required_target(batch):
    with pytest.raises(BusinessRuleViolationError):
        apply_counter_effects(
            batch, MutationKind.POST_CREATED, {CounterTarget.AUTHOR: "alice"}, NOW
        )


def test_leaving_decrements_member_count(batch):
    apply_counter_effects(
        batch, MutationKind.COMMUNITY_LEFT, {CounterTarget.COMMUNITY: "c1"}, NOW
    )

    (write,) = batch.writes
    assert write.target.collection is Collection.COMMUNITIES
    assert write.payload["member_count"] == Increment(amount=-1)
