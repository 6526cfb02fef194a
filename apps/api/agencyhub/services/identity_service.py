"""
Identity Service - the external auth collaborator.

Resolves the current principal from a verified session token and pushes
role metadata / invitations back to the identity provider (Clerk Backend API).
"""

import logging
from typing import Any, Protocol

import httpx
import jwt
from pydantic import BaseModel

from agencyhub.core.config import settings
from agencyhub.core.security import decode_session_token


logger = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    """Raised when an operation needs a signed-in principal and there is none."""

    def __init__(self, message: str = "Sign in required"):
        super().__init__(message)
        self.message = message


class Principal(BaseModel):
    """Currently authenticated identity as reported by the provider."""

    id: str
    email: str  # First email address on the external profile
    first_name: str | None = None
    last_name: str | None = None
    image_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class IdentityProvider(Protocol):
    """Capability required from the external auth service."""

    def get_user(self, user_id: str) -> Principal | None: ...

    def update_user_metadata(self, user_id: str, private_metadata: dict[str, Any]) -> None: ...

    def create_invitation(
        self,
        email: str,
        redirect_url: str,
        public_metadata: dict[str, Any],
    ) -> None: ...


def principal_from_payload(data: dict) -> Principal | None:
    """
    Map a provider user object to a Principal.

    Returns None when the user has no email address (cannot be keyed locally).
    """
    addresses = data.get("email_addresses") or []
    if not addresses or not addresses[0].get("email_address"):
        return None
    return Principal(
        id=data["id"],
        email=addresses[0]["email_address"],
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        image_url=data.get("image_url") or "",
    )


class ClerkIdentityProvider:
    """IdentityProvider backed by the Clerk Backend REST API."""

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.secret_key = secret_key if secret_key is not None else settings.CLERK_SECRET_KEY
        self.base_url = (base_url or settings.CLERK_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CLERK_HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.secret_key}"},
            timeout=self.timeout,
            transport=self.transport,
        )

    def get_user(self, user_id: str) -> Principal | None:
        """
        Fetch a user by id.

        Raises:
            httpx.HTTPStatusError: For provider errors other than 404
        """
        with self._client() as client:
            response = client.get(f"/users/{user_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return principal_from_payload(response.json())

    def update_user_metadata(self, user_id: str, private_metadata: dict[str, Any]) -> None:
        """Merge private metadata into the external user (e.g. the resolved role)."""
        with self._client() as client:
            response = client.patch(
                f"/users/{user_id}/metadata",
                json={"private_metadata": private_metadata},
            )
        response.raise_for_status()

    def create_invitation(
        self,
        email: str,
        redirect_url: str,
        public_metadata: dict[str, Any],
    ) -> None:
        """Ask the provider to email a sign-up invitation."""
        with self._client() as client:
            response = client.post(
                "/invitations",
                json={
                    "email_address": email,
                    "redirect_url": redirect_url,
                    "public_metadata": public_metadata,
                },
            )
        response.raise_for_status()


def resolve_principal(identity: IdentityProvider, token: str | None) -> Principal | None:
    """
    Resolve the current principal from a session token.

    Returns None when unauthenticated: no token, invalid token, unknown user,
    or the provider being unreachable.
    """
    if not token:
        return None

    try:
        payload = decode_session_token(token)
    except jwt.InvalidTokenError as e:
        logger.info("Rejected session token: %s", e)
        return None

    try:
        return identity.get_user(payload["sub"])
    except httpx.HTTPError:
        logger.exception("Identity provider lookup failed")
        return None
