"""Exceptions raised while configuring or resolving client credentials.

Example:
    ```python
    from osf_client.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("OSF token not found", env_var_name="OSF_TOKEN")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    Raised directly when a client is given conflicting credential sources.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when no credential source was supplied or could be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).

    Example:
        ```python
        try:
            settings = ClientSettings.from_env(required=True)
        except CredentialNotFoundError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a token file cannot be read."""

    pass


class OAuth2Error(CredentialError):
    """Raised when an OAuth2 token request fails or no usable token is held.

    Attributes:
        status_code: HTTP status of the failed token endpoint call (if any).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
