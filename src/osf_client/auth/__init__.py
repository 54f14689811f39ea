"""Authentication components for the OSF client.

This module provides:
- Credential sources (static token or token provider), resolved per request
- PKCE helpers and an OAuth2 authorization-code client for the OSF CAS server

Example:
    ```python
    from osf_client.auth import TokenProvider, generate_pkce_challenge

    pkce = generate_pkce_challenge()
    source = TokenProvider(lambda: session.access_token)
    ```
"""

from osf_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
    OAuth2Error,
)
from osf_client.auth.oauth2 import (
    AuthorizationRequest,
    OAuth2Config,
    OsfOAuth2Client,
    TokenSet,
)
from osf_client.auth.pkce import (
    PkceChallenge,
    compute_code_challenge,
    generate_code_verifier,
    generate_pkce_challenge,
)
from osf_client.auth.tokens import (
    CredentialSource,
    StaticToken,
    TokenProvider,
    credential_source_from,
    resolve_token,
)

__all__ = [
    "AuthorizationRequest",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialSource",
    "OAuth2Config",
    "OAuth2Error",
    "OsfOAuth2Client",
    "PkceChallenge",
    "StaticToken",
    "TokenProvider",
    "TokenSet",
    "compute_code_challenge",
    "credential_source_from",
    "generate_code_verifier",
    "generate_pkce_challenge",
    "resolve_token",
]
