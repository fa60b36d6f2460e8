"""Tests for bearer token acquisition and expiry checks."""

from datetime import timedelta
from urllib.parse import parse_qs

import httpx
import pytest

from travel_gateway.errors import AuthError, ConfigurationError
from travel_gateway.travel import Credential, CredentialManager

from .conftest import TOKEN_PATH


def test_first_call_authenticates(credentials, travel_api, clock):
    token = credentials.ensure_valid()

    assert token == "token-1"
    assert travel_api.token_calls == 1
    assert credentials.credential.expires_at == clock.now + timedelta(seconds=1799 - 60)


def test_token_request_uses_client_credentials(credentials, travel_api):
    credentials.ensure_valid()

    request = travel_api.requests[0]
    assert request.method == "POST"
    assert request.url.path == TOKEN_PATH
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    form = parse_qs(request.content.decode())
    assert form == {
        "grant_type": ["client_credentials"],
        "client_id": ["client-id"],
        "client_secret": ["client-secret"],
    }


def test_valid_token_is_reused(credentials, travel_api, clock):
    credentials.ensure_valid()
    clock.advance(1799 - 60 - 1)

    assert credentials.ensure_valid() == "token-1"
    assert travel_api.token_calls == 1


def test_token_refreshed_at_expiry(credentials, travel_api, clock):
    credentials.ensure_valid()
    clock.advance(1799 - 60)

    assert credentials.ensure_valid() == "token-2"
    assert travel_api.token_calls == 2


@pytest.mark.parametrize("offset_seconds, expected", [
    (-3600, False),
    (-1, False),
    (0, True),
    (1, True),
    (86400, True),
])
def test_needs_refresh_iff_now_at_or_after_expiry(credentials, clock, offset_seconds, expected):
    credential = credentials.authenticate()
    now = credential.expires_at + timedelta(seconds=offset_seconds)

    assert credentials.needs_refresh(now) is expected
    assert credential.is_expired(now) is expected


def test_short_lived_token_expires_in_the_future(credentials, travel_api, clock):
    travel_api.token_body = {"access_token": "short", "expires_in": 30}

    assert credentials.ensure_valid() == "short"
    assert credentials.credential.expires_at == clock.now + timedelta(seconds=15)
    assert credentials.needs_refresh() is False

    assert credentials.ensure_valid() == "short"
    assert travel_api.token_calls == 1

    clock.advance(15)
    assert credentials.needs_refresh() is True


def test_needs_refresh_without_credential(credentials, clock):
    assert credentials.credential is None
    assert credentials.needs_refresh(clock.now) is True


def test_invalidate_forces_refresh(credentials, travel_api):
    credentials.ensure_valid()
    credentials.invalidate()

    assert credentials.ensure_valid() == "token-2"
    assert travel_api.token_calls == 2


def test_rejected_exchange_raises_auth_error(credentials, travel_api):
    travel_api.token_status = 401
    travel_api.token_body = {"error": "invalid_client"}

    with pytest.raises(AuthError) as exc_info:
        credentials.ensure_valid()

    assert exc_info.value.status_code == 401
    assert credentials.credential is None


@pytest.mark.parametrize("body", [
    {"expires_in": 1799},
    {"access_token": "abc"},
    {"access_token": "abc", "expires_in": "soon"},
    {"access_token": None, "expires_in": 1799},
    {"access_token": "", "expires_in": 1799},
    {"access_token": "abc", "expires_in": 0},
    {"access_token": "abc", "expires_in": -5},
])
def test_unparsable_exchange_raises_auth_error(credentials, travel_api, body):
    travel_api.token_body = body

    with pytest.raises(AuthError):
        credentials.ensure_valid()


def test_failed_refresh_keeps_previous_credential(credentials, travel_api, clock):
    first = credentials.authenticate()
    clock.advance(3600)
    travel_api.token_body = {"unexpected": True}

    with pytest.raises(AuthError):
        credentials.ensure_valid()

    assert credentials.credential is first


def test_transport_failure_raises_auth_error(clock):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    http_client = httpx.Client(base_url="https://travel.test", transport=httpx.MockTransport(unreachable))
    manager = CredentialManager(http_client, "id", "secret", clock=clock)

    with pytest.raises(AuthError) as exc_info:
        manager.ensure_valid()

    assert isinstance(exc_info.value.cause, httpx.ConnectError)


def test_credential_is_immutable(clock):
    credential = Credential(access_token="abc", expires_at=clock.now)

    with pytest.raises(AttributeError):
        credential.access_token = "other"


@pytest.mark.parametrize("client_id, client_secret, setting_name", [
    ("", "secret", "AMADEUS_CLIENT_ID"),
    ("id", "", "AMADEUS_CLIENT_SECRET"),
])
def test_missing_client_credentials_raise_configuration_error(
    travel_http, travel_api, clock, client_id, client_secret, setting_name
):
    manager = CredentialManager(travel_http, client_id, client_secret, token_path=TOKEN_PATH, clock=clock)

    with pytest.raises(ConfigurationError) as exc_info:
        manager.ensure_valid()

    assert exc_info.value.setting_name == setting_name
    assert travel_api.requests == []
    assert manager.credential is None
