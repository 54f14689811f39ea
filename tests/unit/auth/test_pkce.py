"""Tests for PKCE helpers (RFC 7636)."""

import pytest

from osf_client.auth.pkce import (
    UNRESERVED_CHARACTERS,
    compute_code_challenge,
    generate_code_verifier,
    generate_pkce_challenge,
)


class TestGenerateCodeVerifier:
    def test_default_length(self):
        assert len(generate_code_verifier()) == 128

    @pytest.mark.parametrize("length", [43, 64, 128])
    def test_custom_length(self, length):
        assert len(generate_code_verifier(length)) == length

    @pytest.mark.parametrize("length", [0, 42, 129])
    def test_out_of_range_length_raises(self, length):
        with pytest.raises(ValueError, match="between 43 and 128"):
            generate_code_verifier(length)

    def test_only_unreserved_characters(self):
        verifier = generate_code_verifier()

        assert set(verifier) <= set(UNRESERVED_CHARACTERS)

    def test_verifiers_are_random(self):
        assert generate_code_verifier() != generate_code_verifier()


class TestComputeCodeChallenge:
    def test_rfc7636_appendix_b_vector(self):
        """Test against the example in RFC 7636 Appendix B."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert compute_code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_challenge_is_unpadded_base64url(self):
        challenge = compute_code_challenge(generate_code_verifier())

        assert len(challenge) == 43
        assert "=" not in challenge
        assert "+" not in challenge
        assert "/" not in challenge


def test_generate_pkce_challenge_pairs_verifier_and_challenge():
    pkce = generate_pkce_challenge(verifier_length=64)

    assert len(pkce.code_verifier) == 64
    assert pkce.code_challenge == compute_code_challenge(pkce.code_verifier)
    assert pkce.code_challenge_method == "S256"
