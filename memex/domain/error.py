"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidVoteType(ValidationError):
    """Raised when a vote action is not one of upvote, downvote or remove."""

    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid vote type")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class ConflictError(DomainError):
    """Raised when a write would duplicate an existing resource."""

    pass


class Unauthorized(DomainError):
    """Raised when a request carries no valid identity token."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str, action: str = "edit"):
        self.resource = resource
        self.action = action
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class AdminRequired(DomainError):
    """Raised when a non-admin calls a moderation operation."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Admin access required")


class AccountBanned(DomainError):
    """Raised when a banned user tries to post, comment or vote."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Your account has been banned")


class ContentDeletedException(DomainError):
    """Raised when attempting to edit deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot edit deleted {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SubjectNotFound(NotFoundError):
    """Raised when a vote targets a post or comment that does not exist."""

    pass


class BatchCommitFailed(DomainError):
    """Raised when the document store rejects a batch.

    None of the batch's writes are visible after this error.
    """

    def __init__(self, label: str, reason: str):
        self.label = label
        self.reason = reason
        super().__init__(f"Batch '{label}' failed to commit: {reason}")


class BatchConflict(BatchCommitFailed):
    """Raised when a batch was rejected for repeating a unique value."""

    def __init__(self, label: str, reason: str, field: str):
        self.field = field
        super().__init__(label, reason)
