from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from modelgate import logger as logger_mod

from .errors import CredentialError

log = logger_mod.get_logger()

# refresh this many seconds before the token actually expires
EXPIRY_MARGIN_S = 60.0


@dataclass
class _CachedToken:
    value: str
    expires_at: float


class ClientCredentialsToken:
    """OAuth2 client-credentials bearer token for one client id.

    The token is reused until shortly before ``expires_in`` elapses. Any
    failure of the exchange itself is a ``CredentialError``.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_s: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.token_url = token_url
        self.client_id = client_id
        self._client_secret = client_secret
        self._session = session or requests.Session()
        self.timeout_s = timeout_s
        self._clock = clock
        self._cached: Optional[_CachedToken] = None

    def get(self) -> str:
        now = self._clock()
        if self._cached is not None and now < self._cached.expires_at:
            return self._cached.value

        log.debug(f"Fetching OAuth token from {self.token_url}")
        try:
            resp = self._session.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self._client_secret),
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            raise CredentialError(f"OAuth token request failed: {e}") from e

        if resp.status_code != 200:
            raise CredentialError(
                f"OAuth token request to {self.token_url} returned HTTP {resp.status_code}"
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise CredentialError("OAuth token response is not JSON") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise CredentialError("OAuth token response has no access_token")

        try:
            expires_in = float(payload.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0.0
        self._cached = _CachedToken(
            value=token, expires_at=now + max(0.0, expires_in - EXPIRY_MARGIN_S)
        )
        return token
