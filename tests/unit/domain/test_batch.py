"""Unit tests for BatchedMutation."""

import pytest

from memex.domain.batch import MAX_WRITES_PER_BATCH, BatchedMutation
from memex.domain.error import (
    BatchCommitFailed,
    BatchConflict,
    BusinessRuleViolationError,
)
from memex.domain.repository.document_store import (
    ArrayRemove,
    ArrayUnion,
    Collection,
    DocumentRef,
    Increment,
)
from memex.persistence.repository.inmemory import InMemoryDatabase, InMemoryDocumentStore


def post_ref(post_id: str = "p1") -> DocumentRef:
    return DocumentRef(collection=Collection.POSTS, id=post_id)


@pytest.fixture
def database():
    return InMemoryDatabase()


@pytest.fixture
def store(database):
    return InMemoryDocumentStore(database)


class TestBatchedMutation:
    """Tests for staging and committing batches."""

    @pytest.mark.asyncio
    async def test_writes_apply_in_order(self, database, store):
        batch = BatchedMutation(store, "test")
        batch.set(post_ref(), {"comment_count": 0, "tags": ["a"]})
        batch.update(post_ref(), {"comment_count": Increment(amount=2)})
        batch.update(post_ref(), {"tags": ArrayUnion(values=("a", "b"))})
        batch.update(post_ref(), {"tags": ArrayRemove(values=("a",))})

        await batch.commit()

        assert database.get(post_ref()) == {"id": "p1", "comment_count": 2, "tags": ["b"]}
        assert database.committed_batches == 1

    @pytest.mark.asyncio
    async def test_failed_write_discards_whole_batch(self, database, store):
        """An update to a missing document rejects the earlier set too."""
        batch = BatchedMutation(store, "test")
        batch.set(post_ref("p1"), {"comment_count": 0})
        batch.update(post_ref("missing"), {"comment_count": Increment(amount=1)})

        with pytest.raises(BatchCommitFailed) as exc_info:
            await batch.commit()

        assert exc_info.value.label == "test"
        assert database.get(post_ref("p1")) is None
        assert database.committed_batches == 0

    @pytest.mark.asyncio
    async def test_duplicate_unique_value_is_a_conflict(self, database, store):
        first = BatchedMutation(store, "create_community")
        first.set(DocumentRef(collection=Collection.COMMUNITIES, id="c1"), {"name": "memes"})
        await first.commit()

        second = BatchedMutation(store, "create_community")
        second.set(DocumentRef(collection=Collection.COMMUNITIES, id="c2"), {"name": "memes"})

        with pytest.raises(BatchConflict) as exc_info:
            await second.commit()

        assert exc_info.value.field == "name"
        assert isinstance(exc_info.value, BatchCommitFailed)
        assert database.get(DocumentRef(collection=Collection.COMMUNITIES, id="c2")) is None

    @pytest.mark.asyncio
    async def test_negative_counter_rejected(self, database, store):
        database.collections[Collection.POSTS]["p1"] = {"comment_count": 0}
        batch = BatchedMutation(store, "test")
        batch.update(post_ref(), {"comment_count": Increment(amount=-1)})

        with pytest.raises(BatchCommitFailed):
            await batch.commit()

        assert database.get(post_ref()) == {"id": "p1", "comment_count": 0}

    @pytest.mark.asyncio
    async def test_delete_missing_document_is_fine(self, database, store):
        batch = BatchedMutation(store, "test")
        batch.delete(post_ref("never-existed"))

        await batch.commit()

        assert database.committed_batches == 1

    @pytest.mark.asyncio
    async def test_commits_only_once(self, store):
        batch = BatchedMutation(store, "test")
        batch.set(post_ref(), {"score": 1})
        await batch.commit()

        with pytest.raises(BusinessRuleViolationError):
            await batch.commit()
        with pytest.raises(BusinessRuleViolationError):
            batch.set(post_ref("p2"), {"score": 1})

    @pytest.mark.asyncio
    async def test_empty_batch_refused(self, store):
        with pytest.raises(BusinessRuleViolationError):
            await BatchedMutation(store, "test").commit()

    def test_empty_update_refused(self, store):
        with pytest.raises(BusinessRuleViolationError):
            BatchedMutation(store, "test").update(post_ref(), {})

    def test_write_limit(self, store):
        batch = BatchedMutation(store, "test")
        for i in range(MAX_WRITES_PER_BATCH):
            batch.delete(post_ref(f"p{i}"))

        assert len(batch) == MAX_WRITES_PER_BATCH
        with pytest.raises(BusinessRuleViolationError):
            batch.delete(post_ref("one-too-many"))
