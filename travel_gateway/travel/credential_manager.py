# travel/credential_manager.py
"""
Bearer credential management for the travel API.

The CredentialManager owns the current access token and refreshes it with an
OAuth client-credentials exchange when it is missing or expired. One manager
is created per SearchClient and shared by every request that client serves.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx
from loguru import logger

from ..errors import AuthError, ConfigurationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Credential:
    """Access token plus the moment it stops being usable"""
    access_token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class CredentialManager:
    """
    Keeps a valid bearer token for outbound travel API calls.

    Check-then-refresh is best-effort: two requests that see an expired
    token at the same time both re-authenticate, and the last one wins.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        client_id: str,
        client_secret: str,
        token_path: str = "/v1/security/oauth2/token",
        expiry_margin_seconds: int = 60,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.http_client = http_client
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_path = token_path
        self.expiry_margin = timedelta(seconds=expiry_margin_seconds)
        self.clock = clock
        self._credential: Optional[Credential] = None

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def needs_refresh(self, now: Optional[datetime] = None) -> bool:
        """True iff there is no credential or it has expired at `now`"""
        if self._credential is None:
            return True
        return self._credential.is_expired(now or self.clock())

    def ensure_valid(self) -> str:
        """
        Return a usable access token, re-authenticating first if needed.

        Raises:
            AuthError: if the token exchange fails
        """
        if self.needs_refresh():
            logger.info("Travel API token missing or expired, re-authenticating")
            return self.authenticate().access_token
        return self._credential.access_token

    def invalidate(self):
        """Forget the current credential so the next call re-authenticates"""
        self._credential = None

    def authenticate(self) -> Credential:
        """
        Exchange client id/secret for a new access token and store it.

        Returns:
            The new Credential

        Raises:
            ConfigurationError: if the client id or secret is not configured
            AuthError: on transport failure, non-2xx status or unparsable body
        """
        for setting_name, value in (
            ("AMADEUS_CLIENT_ID", self.client_id),
            ("AMADEUS_CLIENT_SECRET", self.client_secret),
        ):
            if not value:
                logger.error(f"Travel API credentials incomplete: {setting_name} is not set")
                raise ConfigurationError(f"{setting_name} is not configured", setting_name=setting_name)

        try:
            response = self.http_client.post(
                self.token_path,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Travel API token request failed: {e}")
            raise AuthError("Travel API authentication failed", cause=e) from e

        if response.is_error:
            logger.error(f"Travel API token endpoint returned {response.status_code}: {response.text}")
            raise AuthError(
                f"Travel API authentication rejected ({response.status_code})",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            access_token = payload["access_token"]
            expires_in = int(payload["expires_in"])
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Could not parse travel API token response: {e}")
            raise AuthError("Could not parse travel API token response", cause=e) from e

        if not isinstance(access_token, str) or not access_token:
            logger.error("Travel API token response has no usable access_token")
            raise AuthError("Travel API token response has no usable access_token")

        if expires_in <= 0:
            logger.error(f"Travel API token response has non-positive expires_in: {expires_in}")
            raise AuthError(f"Travel API token response has non-positive expires_in ({expires_in})")

        # Short-lived tokens keep half their lifetime so expires_at stays in the future
        lifetime = timedelta(seconds=expires_in)
        margin = self.expiry_margin if lifetime > self.expiry_margin else lifetime / 2

        # Token and expiry are replaced together
        credential = Credential(
            access_token=access_token,
            expires_at=self.clock() + lifetime - margin,
        )
        self._credential = credential
        logger.info(f"Travel API token obtained, expires in {expires_in} seconds")
        return credential
