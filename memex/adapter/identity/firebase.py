"""Firebase ID token verification.

Tokens are verified locally against Google's published signing
certificates. The certificates are fetched with httpx and cached for as
long as the response's `Cache-Control: max-age` allows.
"""

import re
import time

import httpx
import logfire

from memex.adapter.error import UpstreamUnavailable
from memex.config import AuthSettings
from memex.domain.error import Unauthorized
from memex.domain.service.identity_service import TokenVerifier
from memex.domain.value import VerifiedIdentity
from memex.util.jwt import JWTError, get_key_id, verify_token

MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)")


class FirebaseTokenVerifier(TokenVerifier):
    """Verifies Firebase ID tokens (RS256, Google x509 certificates)."""

    def __init__(self, settings: AuthSettings) -> None:
        """Initialize verifier.

        Args:
            settings: Authentication settings (project id, certificate URL)
        """
        self.settings = settings
        self._certificates: dict[str, str] = {}
        self._expires_at = 0.0
        self._last_refresh = float("-inf")

    async def verify_token(self, raw_token: str) -> VerifiedIdentity:
        """Verify a Firebase ID token.

        Raises:
            Unauthorized: If the token is invalid or expired
            UpstreamUnavailable: If the certificates cannot be fetched
        """
        try:
            kid = get_key_id(raw_token)
        except JWTError as e:
            raise Unauthorized(str(e)) from e

        certificate = await self._certificate(kid)
        if certificate is None:
            logfire.warn("Unknown token signing key", kid=kid)
            raise Unauthorized("Invalid token")

        try:
            payload = verify_token(raw_token, certificate, self.settings)
        except JWTError as e:
            logfire.warn("Token verification failed", error=str(e))
            raise Unauthorized(str(e)) from e

        return VerifiedIdentity(
            uid=payload.sub,
            email=payload.email,
            name=payload.name,
            picture=payload.picture,
            is_admin=payload.admin,
        )

    async def _certificate(self, kid: str) -> str | None:
        # Keys rotate; an unknown kid may mean new keys, but refetching for it
        # is limited to once per cooldown while the cache is still fresh
        now = time.monotonic()
        unknown = kid not in self._certificates
        cooled_down = now - self._last_refresh >= self.settings.key_refetch_cooldown_seconds
        if now >= self._expires_at or (unknown and cooled_down):
            self._last_refresh = now
            await self._refresh_certificates()
        return self._certificates.get(kid)

    async def _refresh_certificates(self) -> None:
        """Fetch the current signing certificates.

        Raises:
            UpstreamUnavailable: If the request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self.settings.certs_url, timeout=10.0)
        except httpx.HTTPError as e:
            logfire.error("Certificate fetch HTTP error", error=str(e))
            raise UpstreamUnavailable("identity provider", str(e)) from e

        if response.status_code != 200:
            logfire.error(
                "Certificate fetch failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise UpstreamUnavailable(
                "identity provider", f"certificate fetch returned {response.status_code}"
            )

        self._certificates = response.json()
        match = MAX_AGE_PATTERN.search(response.headers.get("cache-control", ""))
        max_age = int(match.group(1)) if match else 0
        self._expires_at = time.monotonic() + max_age
        logfire.info(
            "Signing certificates refreshed",
            key_count=len(self._certificates),
            max_age=max_age,
        )


class MockTokenVerifier(TokenVerifier):
    """Mock verifier for testing.

    Accepts `mock-<uid>` and `mock-admin-<uid>` tokens without any
    signature check and rejects everything else.
    """

    PREFIX = "mock-"
    ADMIN_PREFIX = "mock-admin-"

    async def verify_token(self, raw_token: str) -> VerifiedIdentity:
        """Return a deterministic identity for a mock token.

        Raises:
            Unauthorized: If the token isn't a mock token
        """
        if raw_token.startswith(self.ADMIN_PREFIX):
            uid, is_admin = raw_token[len(self.ADMIN_PREFIX) :], True
        elif raw_token.startswith(self.PREFIX):
            uid, is_admin = raw_token[len(self.PREFIX) :], False
        else:
            raise Unauthorized("Invalid token")

        if not uid:
            raise Unauthorized("Invalid token")

        return VerifiedIdentity(
            uid=uid,
            email=f"{uid}@example.com",
            name=uid.capitalize(),
            picture=None,
            is_admin=is_admin,
        )
