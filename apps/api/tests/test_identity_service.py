"""Tests for the identity provider client and principal resolution."""

import json

import httpx
import pytest

from agencyhub.services import identity_service
from agencyhub.services.identity_service import (
    ClerkIdentityProvider,
    Principal,
    principal_from_payload,
    resolve_principal,
)


CLERK_USER = {
    "id": "user_abc",
    "first_name": "Olive",
    "last_name": "Owner",
    "image_url": "https://img.test/o.png",
    "email_addresses": [
        {"email_address": "owner@agency.test"},
        {"email_address": "alt@agency.test"},
    ],
}


def _provider(handler) -> ClerkIdentityProvider:
    return ClerkIdentityProvider(
        secret_key="sk_test",
        base_url="https://clerk.test/v1",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


def test_principal_uses_first_email_address():
    principal = principal_from_payload(CLERK_USER)

    assert principal.email == "owner@agency.test"
    assert principal.full_name == "Olive Owner"


def test_principal_requires_an_email():
    assert principal_from_payload({"id": "user_x", "email_addresses": []}) is None


def test_get_user_sends_secret_and_maps_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(200, json=CLERK_USER)

    principal = _provider(handler).get_user("user_abc")

    assert principal.id == "user_abc"
    assert seen == {"path": "/v1/users/user_abc", "auth": "Bearer sk_test"}


def test_get_user_not_found_returns_none():
    provider = _provider(lambda request: httpx.Response(404, json={}))
    assert provider.get_user("user_missing") is None


def test_get_user_server_error_raises():
    provider = _provider(lambda request: httpx.Response(500, json={}))
    with pytest.raises(httpx.HTTPStatusError):
        provider.get_user("user_abc")


def test_update_user_metadata_patches_private_metadata():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=CLERK_USER)

    _provider(handler).update_user_metadata("user_abc", {"role": "AGENCY_OWNER"})

    assert seen == {
        "method": "PATCH",
        "path": "/v1/users/user_abc/metadata",
        "body": {"private_metadata": {"role": "AGENCY_OWNER"}},
    }


def test_create_invitation_posts_redirect_and_metadata():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "inv_1"})

    _provider(handler).create_invitation(
        email="new@agency.test",
        redirect_url="http://frontend.test/agency/sign-up",
        public_metadata={"throughInvitation": True, "role": "SUBACCOUNT_USER"},
    )

    assert seen["path"] == "/v1/invitations"
    assert seen["body"] == {
        "email_address": "new@agency.test",
        "redirect_url": "http://frontend.test/agency/sign-up",
        "public_metadata": {"throughInvitation": True, "role": "SUBACCOUNT_USER"},
    }


# =============================================================================
# resolve_principal
# =============================================================================

def test_resolve_without_token(identity):
    assert resolve_principal(identity, None) is None
    assert resolve_principal(identity, "") is None


def test_resolve_with_invalid_token(identity, monkeypatch):
    monkeypatch.setattr(identity_service.settings, "CLERK_JWT_KEY", "")
    assert resolve_principal(identity, "not-a-jwt") is None


def test_resolve_looks_up_token_subject(identity, monkeypatch):
    principal = Principal(id="user_abc", email="owner@agency.test")
    identity.users["user_abc"] = principal
    monkeypatch.setattr(
        identity_service, "decode_session_token", lambda token: {"sub": "user_abc"}
    )

    assert resolve_principal(identity, "token") == principal


def test_resolve_swallows_provider_errors(monkeypatch):
    class BrokenProvider:
        def get_user(self, user_id):
            raise httpx.ConnectError("down")

    monkeypatch.setattr(
        identity_service, "decode_session_token", lambda token: {"sub": "user_abc"}
    )

    assert resolve_principal(BrokenProvider(), "token") is None
