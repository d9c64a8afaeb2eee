"""Batched mutation: an all-or-nothing unit of work over the document store."""

from typing import Any

import logfire

from memex.domain.error import (
    BatchCommitFailed,
    BatchConflict,
    BusinessRuleViolationError,
)
from memex.domain.repository.document_store import (
    DocumentRef,
    DocumentStore,
    DuplicateValue,
    Write,
    WriteOperation,
    WriteRejected,
)

MAX_WRITES_PER_BATCH = 500


class BatchedMutation:
    """Collects writes and commits them together.

    Usage:
        batch = BatchedMutation(store, "create_comment")
        batch.set(comment_ref, comment_document)
        batch.update(post_ref, {"comment_count": Increment(amount=1)})
        await batch.commit()

    A batch commits once. If the store rejects it, `commit` raises
    `BatchCommitFailed` and none of the writes are visible. There is no
    retry at this level.
    """

    def __init__(self, store: DocumentStore, label: str) -> None:
        self.store = store
        self.label = label
        self._writes: list[Write] = []
        self._committed = False

    @property
    def writes(self) -> list[Write]:
        """Writes staged so far, in order."""
        return list(self._writes)

    def __len__(self) -> int:
        return len(self._writes)

    def set(self, target: DocumentRef, payload: dict[str, Any]) -> "BatchedMutation":
        """Create or replace a document."""
        return self._add(Write(target=target, operation=WriteOperation.SET, payload=payload))

    def update(self, target: DocumentRef, payload: dict[str, Any]) -> "BatchedMutation":
        """Merge fields into an existing document."""
        if not payload:
            raise BusinessRuleViolationError(f"Empty update for {target}")
        return self._add(
            Write(target=target, operation=WriteOperation.UPDATE, payload=payload)
        )

    def delete(self, target: DocumentRef) -> "BatchedMutation":
        """Delete a document if it exists."""
        return self._add(Write(target=target, operation=WriteOperation.DELETE))

    def _add(self, write: Write) -> "BatchedMutation":
        if self._committed:
            raise BusinessRuleViolationError(f"Batch '{self.label}' already committed")
        if len(self._writes) >= MAX_WRITES_PER_BATCH:
            raise BusinessRuleViolationError(
                f"Batch '{self.label}' exceeds {MAX_WRITES_PER_BATCH} writes"
            )
        self._writes.append(write)
        return self

    async def commit(self) -> None:
        """Commit all staged writes atomically.

        Raises:
            BusinessRuleViolationError: If the batch is empty or already committed
            BatchConflict: If a write repeated a unique value
            BatchCommitFailed: If the store rejected the batch for another reason
        """
        if self._committed:
            raise BusinessRuleViolationError(f"Batch '{self.label}' already committed")
        if not self._writes:
            raise BusinessRuleViolationError(f"Batch '{self.label}' has no writes")

        with logfire.span(
            "batch.commit",
            label=self.label,
            write_count=len(self._writes),
            targets=[str(w.target) for w in self._writes],
        ):
            try:
                await self.store.commit(self._writes)
            except DuplicateValue as e:
                logfire.warn(
                    "Batch rejected as duplicate", label=self.label, field=e.field
                )
                raise BatchConflict(self.label, str(e), e.field) from e
            except WriteRejected as e:
                logfire.error(
                    "Batch commit failed",
                    label=self.label,
                    target=str(e.target) if e.target else None,
                    error=str(e),
                )
                raise BatchCommitFailed(self.label, str(e)) from e

            self._committed = True
            logfire.info("Batch committed", label=self.label, write_count=len(self._writes))
