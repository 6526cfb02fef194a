"""Security utilities for verifying identity provider session tokens."""

import jwt

from agencyhub.core.config import settings


SESSION_TOKEN_ALGORITHMS = ["RS256"]


def decode_session_token(token: str) -> dict:
    """
    Decode and verify a session JWT issued by the identity provider.

    The token is signed with the provider's private key; we verify it with
    the configured PEM public key (networkless verification).

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired or no key is configured
    """
    if not settings.CLERK_JWT_KEY:
        raise jwt.InvalidTokenError("Session verification key not configured")

    payload = jwt.decode(
        token,
        settings.CLERK_JWT_KEY,
        algorithms=SESSION_TOKEN_ALGORITHMS,
        leeway=settings.CLERK_JWT_LEEWAY_SECONDS,
        options={"require": ["sub", "exp"]},
    )
    return payload


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token part of an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
