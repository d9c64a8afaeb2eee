"""In-memory document database for testing.

Documents are plain dicts keyed by id, one dict per collection, with the
same field names as the PostgreSQL columns. The store applies a batch to
copies of the touched collections and swaps them in only if every write
succeeded, so a rejected batch changes nothing.
"""

import copy
from typing import Any, Sequence

from memex.domain.repository.document_store import (
    ArrayRemove,
    ArrayUnion,
    Collection,
    DocumentRef,
    DocumentStore,
    DuplicateValue,
    Increment,
    Write,
    WriteOperation,
    WriteRejected,
)

# Mirrors the CHECK constraints on the PostgreSQL tables
NON_NEGATIVE_FIELDS = frozenset(
    {
        "upvotes",
        "downvotes",
        "karma",
        "comment_count",
        "reply_count",
        "member_count",
        "post_count",
    }
)


# Mirrors the unique indexes on the PostgreSQL tables
UNIQUE_FIELDS: dict[Collection, tuple[str, ...]] = {Collection.COMMUNITIES: ("name",)}


class InMemoryDatabase:
    """Collections of documents shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.collections: dict[Collection, dict[str, dict[str, Any]]] = {
            collection: {} for collection in Collection
        }
        self.committed_batches = 0
        self.reject_next_commit: str | None = None

    def get(self, ref: DocumentRef) -> dict[str, Any] | None:
        """Copy of a document with its id, or None."""
        doc = self.collections[ref.collection].get(ref.id)
        return {"id": ref.id, **copy.deepcopy(doc)} if doc is not None else None

    def all(self, collection: Collection) -> list[dict[str, Any]]:
        """Copies of every document in a collection, with ids."""
        return [
            {"id": doc_id, **copy.deepcopy(doc)}
            for doc_id, doc in self.collections[collection].items()
        ]


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def commit(self, writes: Sequence[Write]) -> None:
        """Apply all writes to staged copies, then publish them together.

        Raises:
            WriteRejected: If any write fails; nothing is published
        """
        if self.database.reject_next_commit is not None:
            reason, self.database.reject_next_commit = (
                self.database.reject_next_commit,
                None,
            )
            raise WriteRejected(reason)

        staged = {
            collection: copy.deepcopy(self.database.collections[collection])
            for collection in {w.target.collection for w in writes}
        }
        for write in writes:
            documents = staged[write.target.collection]
            self._apply(documents, write)
            self._check_unique(documents, write)

        self.database.collections.update(staged)
        self.database.committed_batches += 1

    @staticmethod
    def _check_unique(documents: dict[str, dict[str, Any]], write: Write) -> None:
        doc = documents.get(write.target.id)
        if doc is None:
            return
        for field in UNIQUE_FIELDS.get(write.target.collection, ()):
            for other_id, other in documents.items():
                if other_id != write.target.id and other.get(field) == doc.get(field):
                    raise DuplicateValue(
                        f"{field} already used by {write.target.collection.value}/{other_id}",
                        field,
                        write.target,
                    )

    @staticmethod
    def _apply(documents: dict[str, dict[str, Any]], write: Write) -> None:
        doc_id = write.target.id

        if write.operation is WriteOperation.SET:
            documents[doc_id] = copy.deepcopy(write.payload)
            return

        if write.operation is WriteOperation.DELETE:
            documents.pop(doc_id, None)
            return

        doc = documents.get(doc_id)
        if doc is None:
            raise WriteRejected(f"No document to update: {write.target}", write.target)

        for field, value in write.payload.items():
            if isinstance(value, Increment):
                doc[field] = doc.get(field, 0) + value.amount
            elif isinstance(value, ArrayUnion):
                current = list(doc.get(field) or [])
                doc[field] = current + [v for v in value.values if v not in current]
            elif isinstance(value, ArrayRemove):
                doc[field] = [v for v in doc.get(field) or [] if v not in value.values]
            else:
                doc[field] = copy.deepcopy(value)

            if field in NON_NEGATIVE_FIELDS and doc[field] < 0:
                raise WriteRejected(
                    f"{field} would become negative on {write.target}", write.target
                )
