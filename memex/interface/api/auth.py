"""Bearer token authentication for routes."""

from memex.adapter.error import AdapterError
from memex.domain.error import DomainError
from memex.domain.service import IdentityService, ModerationService
from memex.domain.value import UserId, VerifiedIdentity
from memex.interface.error import http_error


async def require_identity(
    identity_service: IdentityService, authorization: str | None
) -> VerifiedIdentity:
    """Verify the caller's bearer token.

    Raises:
        HTTPException: 401 for a missing or invalid token, 502 if the
            identity provider's keys can't be fetched
    """
    try:
        return await identity_service.authenticate(authorization)
    except (DomainError, AdapterError) as e:
        raise http_error(e) from e


async def optional_identity(
    identity_service: IdentityService, authorization: str | None
) -> VerifiedIdentity | None:
    """Identity of the caller on public reads.

    Anonymous callers get None. A token that is present must be valid.
    """
    if not authorization:
        return None
    return await require_identity(identity_service, authorization)


async def require_admin(
    identity_service: IdentityService,
    moderation_service: ModerationService,
    authorization: str | None,
) -> UserId:
    """Verify the caller's token and admin rights.

    Raises:
        HTTPException: 401 for a missing or invalid token, 403 for non-admins
    """
    identity = await require_identity(identity_service, authorization)
    try:
        return await moderation_service.ensure_admin(identity)
    except DomainError as e:
        raise http_error(e) from e
