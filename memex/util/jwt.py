"""ID token utilities.

Firebase ID tokens are RS256 JWTs signed with one of Google's rotating keys.
The key is picked by the token header's `kid` from the published x509
certificates.
"""

from datetime import datetime

import jwt
from cryptography.x509 import load_pem_x509_certificate
from pydantic import BaseModel

from memex.config import AuthSettings

ALGORITHM = "RS256"


class TokenPayload(BaseModel):
    """Claims of a verified Firebase ID token."""

    sub: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    admin: bool = False
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def get_key_id(token: str) -> str:
    """Read the signing key id from a token header.

    Raises:
        JWTError: If the token is malformed or uses another algorithm
    """
    try:
        header = jwt.get_unverified_header(token)
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if header.get("alg") != ALGORITHM:
        raise JWTError("Invalid token algorithm")
    kid = header.get("kid")
    if not kid:
        raise JWTError("Token has no key id")
    return kid


def verify_token(token: str, certificate_pem: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a Firebase ID token.

    Args:
        token: Encoded ID token
        certificate_pem: PEM x509 certificate matching the token's `kid`
        settings: Authentication settings (project id, leeway)

    Returns:
        Token payload if valid

    Raises:
        JWTError: If the token is invalid, expired or issued for another project
    """
    public_key = load_pem_x509_certificate(certificate_pem.encode()).public_key()
    try:
        payload = jwt.decode(
            token,
            public_key,
            algorithms=[ALGORITHM],
            audience=settings.firebase_project_id,
            issuer=settings.issuer,
            leeway=settings.leeway_seconds,
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if not payload.get("sub"):
        raise JWTError("Token has no subject")
    return TokenPayload(**payload)
