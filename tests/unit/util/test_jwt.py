"""Unit tests for ID token helpers."""

import jwt
import pytest

from memex.util.jwt import JWTError, get_key_id


def test_other_algorithms_rejected():
    token = jwt.encode(
        {"sub": "x"},
        "hmac-secret-long-enough-for-sha256-keys",
        algorithm="HS256",
        headers={"kid": "k1"},
    )

    with pytest.raises(JWTError, match="algorithm"):
        get_key_id(token)


def test_malformed_token():
    with pytest.raises(JWTError, match="Invalid token"):
        get_key_id("definitely-not-a-jwt")
