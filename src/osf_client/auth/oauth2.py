"""OAuth2 authorization-code flow (with PKCE) against the OSF CAS server.

``OsfOAuth2Client`` builds the authorization URL, exchanges the returned code
for tokens, refreshes and revokes them, and hands out a valid access token.
Its ``get_access_token`` method is a ready-made ``token_provider``:

    ```python
    oauth = OsfOAuth2Client(OAuth2Config(client_id="my-app", redirect_uri="https://example.com/cb"))
    auth = oauth.build_authorization_url(state="xyz", access_type="offline")
    # ... send the user to auth.url, receive ``code`` on the redirect URI ...
    await oauth.exchange_code(code, auth.code_verifier)

    async with OsfClient(token_provider=oauth.get_access_token) as client:
        me = await client.users.me()
    ```
"""

import asyncio
import dataclasses
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from osf_client.auth.exceptions import OAuth2Error
from osf_client.auth.pkce import CODE_CHALLENGE_METHOD, generate_pkce_challenge

logger = logging.getLogger(__name__)

DEFAULT_CAS_BASE_URL = "https://accounts.osf.io"
TOKEN_EXPIRY_BUFFER_SECONDS = 60

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class OAuth2Config:
    """Registered OAuth2 application settings."""

    client_id: str
    redirect_uri: str
    scope: str | None = None
    cas_base_url: str = DEFAULT_CAS_BASE_URL


@dataclass
class TokenSet:
    """Tokens issued by the token endpoint.

    ``expires_at`` is a Unix timestamp in seconds.
    """

    access_token: str
    expires_at: float
    refresh_token: str | None = None
    scope: str | None = None

    def __repr__(self) -> str:
        refresh = "***" if self.refresh_token else None
        return (
            f"TokenSet(access_token='***', expires_at={self.expires_at!r}, "
            f"refresh_token={refresh!r}, scope={self.scope!r})"
        )


@dataclass(frozen=True)
class AuthorizationRequest:
    """Authorization URL plus the PKCE pair needed to redeem its code."""

    url: str
    code_verifier: str
    code_challenge: str


class OsfOAuth2Client:
    """OAuth2 client for OSF's CAS server.

    Args:
        config: Application settings.
        transport: Optional ``httpx`` transport (tests pass ``httpx.MockTransport``).
        clock: Returns the current Unix time in seconds.

    Raises:
        ValueError: If ``client_id`` or ``redirect_uri`` is empty.
    """

    def __init__(
        self,
        config: OAuth2Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not config.client_id:
            raise ValueError("client_id is required")
        if not config.redirect_uri:
            raise ValueError("redirect_uri is required")

        self.config = config
        self._clock = clock
        self._token_set: TokenSet | None = None
        self._refresh_task: asyncio.Task[TokenSet] | None = None
        self._client = httpx.AsyncClient(transport=transport)

    async def __aenter__(self) -> "OsfOAuth2Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_authorization_url(
        self,
        *,
        state: str | None = None,
        access_type: str | None = None,
        approval_prompt: str | None = None,
    ) -> AuthorizationRequest:
        """Build the CAS authorization URL with a fresh PKCE challenge.

        Args:
            state: Opaque value echoed back on the redirect.
            access_type: ``"online"`` or ``"offline"`` (offline issues a refresh token).
            approval_prompt: ``"auto"`` or ``"force"``.
        """
        pkce = generate_pkce_challenge()
        params = {
            "response_type": "code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "code_challenge": pkce.code_challenge,
            "code_challenge_method": CODE_CHALLENGE_METHOD,
        }
        optional = {
            "scope": self.config.scope,
            "state": state,
            "access_type": access_type,
            "approval_prompt": approval_prompt,
        }
        params.update({key: value for key, value in optional.items() if value})

        url = httpx.URL(self.config.cas_base_url).join("/oauth2/authorize").copy_merge_params(params)
        return AuthorizationRequest(
            url=str(url),
            code_verifier=pkce.code_verifier,
            code_challenge=pkce.code_challenge,
        )

    async def exchange_code(self, code: str, code_verifier: str) -> TokenSet:
        """Redeem an authorization code and store the issued tokens."""
        payload = await self._post_form(
            "/oauth2/token",
            {
                "grant_type": "authorization_code",
                "code": code,
                "client_id": self.config.client_id,
                "redirect_uri": self.config.redirect_uri,
                "code_verifier": code_verifier,
            },
            failure="Token exchange failed",
        )
        self._token_set = self._to_token_set(payload)
        return self.get_token_set()

    async def refresh_access_token(self, refresh_token: str | None = None) -> TokenSet:
        """Obtain a new access token, defaulting to the stored refresh token.

        The stored refresh token is kept when the server does not issue a new one.

        Raises:
            OAuth2Error: If there is no refresh token or the request fails.
        """
        current_refresh = self._token_set.refresh_token if self._token_set else None
        token = refresh_token or current_refresh
        if not token:
            raise OAuth2Error("No refresh token available")

        payload = await self._post_form(
            "/oauth2/token",
            {"grant_type": "refresh_token", "refresh_token": token, "client_id": self.config.client_id},
            failure="Token refresh failed",
        )
        token_set = self._to_token_set(payload)
        if not token_set.refresh_token and current_refresh:
            token_set.refresh_token = current_refresh

        self._token_set = token_set
        logger.debug("Refreshed OSF access token (***)")
        return self.get_token_set()

    async def revoke_token(self, token: str | None = None) -> None:
        """Revoke ``token``, or the stored access token when omitted.

        Stored tokens are cleared when the stored access token is the one revoked.
        """
        current_access = self._token_set.access_token if self._token_set else None
        token_to_revoke = token or current_access
        if not token_to_revoke:
            raise OAuth2Error("No token to revoke")

        await self._post_form("/oauth2/revoke", {"token": token_to_revoke}, failure="Token revocation failed")

        if token_to_revoke == current_access:
            self._token_set = None

    async def get_access_token(self) -> str:
        """Return a valid access token, refreshing it when close to expiry.

        Concurrent callers share a single in-flight refresh.

        Raises:
            OAuth2Error: If no token set is stored or the refresh fails.
        """
        if self._token_set is None:
            raise OAuth2Error("No token set")

        if self.is_token_expired():
            if self._refresh_task is None:
                self._refresh_task = asyncio.ensure_future(self._refresh_once())
            # One cancelled caller must not abort the refresh the others wait on
            await asyncio.shield(self._refresh_task)

        return self._token_set.access_token

    def is_token_expired(self) -> bool:
        """True when no token is stored or it expires within the buffer window."""
        if self._token_set is None:
            return True
        return self._clock() >= self._token_set.expires_at - TOKEN_EXPIRY_BUFFER_SECONDS

    def set_token_set(self, token_set: TokenSet) -> None:
        """Store a token set, e.g. one restored from persistent storage."""
        self._token_set = dataclasses.replace(token_set)

    def get_token_set(self) -> TokenSet | None:
        """Return a copy of the stored token set, or None."""
        if self._token_set is None:
            return None
        return dataclasses.replace(self._token_set)

    async def _refresh_once(self) -> TokenSet:
        try:
            return await self.refresh_access_token()
        finally:
            self._refresh_task = None

    async def _post_form(self, path: str, data: dict[str, str], *, failure: str) -> Any:
        url = str(httpx.URL(self.config.cas_base_url).join(path))
        logger.debug(f"POST {url}")
        response = await self._client.post(url, data=data, headers={"Content-Type": FORM_CONTENT_TYPE})
        if response.is_error:
            raise OAuth2Error(f"{failure}: {response.status_code} {response.text}", status_code=response.status_code)
        if not response.content:
            return {}
        return response.json()

    def _to_token_set(self, payload: dict[str, Any]) -> TokenSet:
        return TokenSet(
            access_token=payload["access_token"],
            expires_at=self._clock() + payload["expires_in"],
            refresh_token=payload.get("refresh_token"),
            scope=payload.get("scope"),
        )
