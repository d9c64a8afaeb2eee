"""Identity domain service."""

import logfire

from memex.domain.error import Unauthorized
from memex.domain.value import VerifiedIdentity

from .base import Service

BEARER_PREFIX = "Bearer "


class TokenVerifier:
    """Identity provider interface for ID token verification."""

    async def verify_token(self, raw_token: str) -> VerifiedIdentity:
        """Verify a raw ID token.

        Args:
            raw_token: Encoded token from the Authorization header

        Returns:
            Identity carried by the token

        Raises:
            Unauthorized: If the token is invalid or expired
            UpstreamUnavailable: If signing keys cannot be fetched
        """
        raise NotImplementedError


class IdentityService(Service):
    """Turns an Authorization header into a verified identity."""

    def __init__(self, token_verifier: TokenVerifier) -> None:
        """Initialize identity service.

        Args:
            token_verifier: Identity provider token verifier
        """
        self.token_verifier = token_verifier

    async def authenticate(self, authorization: str | None) -> VerifiedIdentity:
        """Verify the bearer token in an Authorization header.

        Args:
            authorization: Raw header value (may be missing)

        Returns:
            The caller's identity

        Raises:
            Unauthorized: If the header is missing, malformed or the token is invalid
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise Unauthorized("No token provided")

        token = authorization[len(BEARER_PREFIX) :].strip()
        if not token:
            raise Unauthorized("No token provided")

        with logfire.span("identity_service.authenticate"):
            identity = await self.token_verifier.verify_token(token)
            logfire.info("Token verified", uid=identity.uid)
            return identity
