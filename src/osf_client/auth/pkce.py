"""PKCE (RFC 7636) helpers for the OAuth2 authorization-code flow."""

import base64
import hashlib
import secrets
from dataclasses import dataclass

# RFC 3986 unreserved characters
UNRESERVED_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"

MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128

CODE_CHALLENGE_METHOD = "S256"


@dataclass(frozen=True)
class PkceChallenge:
    """A code verifier and the S256 challenge derived from it."""

    code_verifier: str
    code_challenge: str
    code_challenge_method: str = CODE_CHALLENGE_METHOD


def generate_code_verifier(length: int = MAX_VERIFIER_LENGTH) -> str:
    """Generate a random code verifier of unreserved characters.

    Args:
        length: Verifier length, 43 to 128 characters.

    Raises:
        ValueError: If ``length`` is out of range.
    """
    if not MIN_VERIFIER_LENGTH <= length <= MAX_VERIFIER_LENGTH:
        raise ValueError(
            f"Code verifier length must be between {MIN_VERIFIER_LENGTH} and {MAX_VERIFIER_LENGTH} characters"
        )
    return "".join(secrets.choice(UNRESERVED_CHARACTERS) for _ in range(length))


def compute_code_challenge(code_verifier: str) -> str:
    """Return the unpadded base64url SHA-256 digest of ``code_verifier``."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def generate_pkce_challenge(verifier_length: int = MAX_VERIFIER_LENGTH) -> PkceChallenge:
    verifier = generate_code_verifier(verifier_length)
    return PkceChallenge(code_verifier=verifier, code_challenge=compute_code_challenge(verifier))
