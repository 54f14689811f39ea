"""Credential sources for bearer authentication.

A credential source is either a fixed token or a provider callable. Sources
are resolved on every request and never cached, so a provider that rotates
or refreshes its token is observed by the very next call.

Example:
    ```python
    from osf_client.auth.tokens import StaticToken, TokenProvider, resolve_token

    static = StaticToken("personal-access-token")

    async def current_token() -> str:
        return await oauth_session.access_token()

    dynamic = TokenProvider(current_token)

    token = await resolve_token(dynamic)
    ```
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from osf_client.auth.exceptions import CredentialError, CredentialNotFoundError

TokenFactory = Callable[[], str | Awaitable[str]]


@dataclass(frozen=True)
class StaticToken:
    """A token value fixed at construction time."""

    value: str

    def __repr__(self) -> str:
        return "StaticToken(value='***')"


@dataclass(frozen=True)
class TokenProvider:
    """A callable returning the current token, synchronously or as an awaitable."""

    factory: TokenFactory


CredentialSource = StaticToken | TokenProvider


async def resolve_token(source: CredentialSource) -> str:
    """Return the token a credential source currently yields."""
    if isinstance(source, StaticToken):
        return source.value

    value = source.factory()
    if inspect.isawaitable(value):
        value = await value
    return value


def credential_source_from(token: str | None = None, token_provider: TokenFactory | None = None) -> CredentialSource:
    """Build a credential source from exactly one of ``token`` or ``token_provider``.

    Raises:
        CredentialNotFoundError: If neither is supplied.
        CredentialError: If both are supplied.
    """
    if token is not None and token_provider is not None:
        raise CredentialError("Provide either a token or a token_provider, not both")
    if token_provider is not None:
        return TokenProvider(token_provider)
    if token is not None:
        return StaticToken(token)
    raise CredentialNotFoundError("Either a token or a token_provider must be provided")
