"""Document store interface and write primitives.

Every multi-document mutation is expressed as an ordered list of `Write`s
and handed to `DocumentStore.commit`, which applies all of them or none.
Field values may be relative (`Increment`, `ArrayUnion`, `ArrayRemove`)
and are resolved by the store at commit time, so no write depends on a
value read earlier in the request.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Sequence

from memex.domain.value.common import ValueObject


class Collection(str, Enum):
    """Document collections."""

    USERS = "users"
    POSTS = "posts"
    COMMENTS = "comments"
    POST_VOTES = "post_votes"
    COMMENT_VOTES = "comment_votes"
    COMMUNITIES = "communities"
    MEMBERSHIPS = "memberships"


class WriteOperation(str, Enum):
    """Kind of write inside a batch.

    SET replaces the whole document (creating it if needed), UPDATE merges
    fields into an existing document, DELETE removes a document if present.
    """

    SET = "set"
    UPDATE = "update"
    DELETE = "delete"


class DocumentRef(ValueObject):
    """Address of a single document."""

    collection: Collection
    id: str

    def __str__(self) -> str:
        return f"{self.collection.value}/{self.id}"


class Increment(ValueObject):
    """Add `amount` to a numeric field."""

    amount: int


class ArrayUnion(ValueObject):
    """Append values missing from an array field."""

    values: tuple[str, ...]


class ArrayRemove(ValueObject):
    """Remove every occurrence of the values from an array field."""

    values: tuple[str, ...]


FieldTransform = Increment | ArrayUnion | ArrayRemove


class Write(ValueObject):
    """One write inside a batch."""

    target: DocumentRef
    operation: WriteOperation
    payload: dict[str, Any] = {}


class WriteRejected(Exception):
    """Raised by a document store that refused a batch.

    The store guarantees that none of the batch's writes were applied.
    """

    def __init__(self, message: str, target: DocumentRef | None = None):
        self.target = target
        super().__init__(message)


class DuplicateValue(WriteRejected):
    """Raised when a write would repeat a value that must be unique.

    `field` names the unique field, e.g. `name` for communities.
    """

    def __init__(self, message: str, field: str, target: DocumentRef | None = None):
        self.field = field
        super().__init__(message, target)


class DocumentStore(ABC):
    """Atomic multi-document writer.

    Reads go through the typed repositories; this interface only commits.
    """

    @abstractmethod
    async def commit(self, writes: Sequence[Write]) -> None:
        """Apply every write in order, atomically.

        Args:
            writes: Ordered writes

        Raises:
            WriteRejected: If any write cannot be applied; nothing is applied
        """
        pass
