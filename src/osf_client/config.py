"""Environment-based configuration for the OSF client.

Settings are resolved with the following priority (highest first):
1. Explicit keyword arguments
2. Environment variables
3. ``.env`` file (python-dotenv)
4. Built-in defaults

Recognised variables:
    OSF_TOKEN: Personal access token.
    OSF_TOKEN_FILE: Path to a file holding the token (``~`` and ``$VAR`` expanded).
    OSF_BASE_URL: API root, defaults to ``https://api.osf.io/v2/``.
    OSF_TIMEOUT_MS: Request timeout in milliseconds.
    OSF_ALLOWED_HOSTS: Comma-separated extra hosts absolute URLs may target.

Example:
    ```python
    from osf_client.config import ClientSettings

    settings = ClientSettings.from_env()
    client = OsfClient(**settings.client_kwargs())
    ```

Tokens are never logged; only the source they came from is.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from osf_client.auth.exceptions import CredentialFileError, CredentialNotFoundError
from osf_client.transport.http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "OSF_TOKEN"
TOKEN_FILE_ENV_VAR = "OSF_TOKEN_FILE"
BASE_URL_ENV_VAR = "OSF_BASE_URL"
TIMEOUT_ENV_VAR = "OSF_TIMEOUT_MS"
ALLOWED_HOSTS_ENV_VAR = "OSF_ALLOWED_HOSTS"


def read_token_file(file_path: str | Path) -> str:
    """Read a token from ``file_path``, stripping surrounding whitespace.

    Raises:
        CredentialFileError: If the file is missing or unreadable.
    """
    path = Path(os.path.expanduser(os.path.expandvars(str(file_path))))
    try:
        token = path.read_text().strip()
    except FileNotFoundError:
        raise CredentialFileError(f"Token file not found: {path}") from None
    except PermissionError:
        raise CredentialFileError(f"Permission denied reading token file: {path}") from None
    except OSError as e:
        raise CredentialFileError(f"Error reading token file {path}: {e}") from e

    logger.debug(f"Loaded OSF token from file: {path} (***)")
    return token


@dataclass
class ClientSettings:
    """Resolved configuration for an ``OsfClient``."""

    token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    allowed_hosts: list[str] = field(default_factory=list)

    @classmethod
    def from_env(
        cls,
        *,
        token: str | None = None,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        allowed_hosts: list[str] | None = None,
        dotenv_path: str | None = None,
        load_env_file: bool = True,
        required: bool = True,
    ) -> "ClientSettings":
        """Resolve settings from arguments, the environment and ``.env``.

        Args:
            token: Explicit token; skips environment lookup when given.
            base_url: Explicit API root.
            timeout_ms: Explicit timeout.
            allowed_hosts: Explicit extra hosts.
            dotenv_path: Path to a ``.env`` file. If None, python-dotenv
                searches parent directories.
            load_env_file: Whether to load a ``.env`` file at all.
            required: Raise if no token can be found.

        Raises:
            CredentialNotFoundError: If ``required`` and no token was found.
            CredentialFileError: If ``OSF_TOKEN_FILE`` points to an unreadable file.
            ValueError: If ``OSF_TIMEOUT_MS`` is not an integer.
        """
        if load_env_file:
            # Existing environment variables are not overridden
            load_dotenv(dotenv_path=dotenv_path)

        resolved_token = token
        if resolved_token is not None:
            logger.debug("Using OSF token from explicit parameter (***)")
        elif os.environ.get(TOKEN_ENV_VAR):
            resolved_token = os.environ[TOKEN_ENV_VAR]
            logger.debug(f"Using OSF token from environment variable '{TOKEN_ENV_VAR}' (***)")
        elif os.environ.get(TOKEN_FILE_ENV_VAR):
            resolved_token = read_token_file(os.environ[TOKEN_FILE_ENV_VAR])

        if required and not resolved_token:
            raise CredentialNotFoundError(
                f"OSF token not found (checked env vars: {TOKEN_ENV_VAR}, {TOKEN_FILE_ENV_VAR})",
                env_var_name=TOKEN_ENV_VAR,
            )

        if timeout_ms is None and os.environ.get(TIMEOUT_ENV_VAR):
            raw_timeout = os.environ[TIMEOUT_ENV_VAR]
            try:
                timeout_ms = int(raw_timeout)
            except ValueError:
                raise ValueError(f"{TIMEOUT_ENV_VAR} must be an integer, got {raw_timeout!r}") from None

        if allowed_hosts is None:
            raw_hosts = os.environ.get(ALLOWED_HOSTS_ENV_VAR, "")
            allowed_hosts = [host.strip() for host in raw_hosts.split(",") if host.strip()]

        return cls(
            token=resolved_token,
            base_url=base_url or os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL,
            timeout_ms=timeout_ms if timeout_ms is not None else DEFAULT_TIMEOUT_MS,
            allowed_hosts=allowed_hosts,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``HttpClient`` or ``OsfClient``."""
        return {
            "token": self.token,
            "base_url": self.base_url,
            "timeout_ms": self.timeout_ms,
            "allowed_hosts": list(self.allowed_hosts),
        }

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return (
            f"ClientSettings(token={token!r}, base_url={self.base_url!r}, "
            f"timeout_ms={self.timeout_ms!r}, allowed_hosts={self.allowed_hosts!r})"
        )
