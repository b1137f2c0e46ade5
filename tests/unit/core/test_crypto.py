"""
Unit tests for the license key and challenge cryptography.
"""

import uuid

import pytest

from core.domain.exceptions import DecryptionError, SigningError
from core.security.crypto import (
    decrypt_license_key,
    derive_lookup_key,
    encrypt_license_key,
    hash_api_key,
    sign_challenge,
    verify_challenge_signature,
)

LICENSE_KEY = "ABCDE-12345-FGHIJ-67890-KLMNO"


class TestLookupKey:
    """Tests for derive_lookup_key."""

    def test_deterministic(self):
        """Test same input yields the same hash."""
        team_id = uuid.uuid4()
        assert derive_lookup_key(LICENSE_KEY, team_id) == derive_lookup_key(LICENSE_KEY, team_id)

    def test_scoped_by_team(self):
        """Test the same key hashes differently for another team."""
        assert derive_lookup_key(LICENSE_KEY, uuid.uuid4()) != derive_lookup_key(
            LICENSE_KEY, uuid.uuid4()
        )

    def test_depends_on_secret(self):
        """Test the hash is keyed."""
        team_id = uuid.uuid4()
        assert derive_lookup_key(LICENSE_KEY, team_id, secret=b"one") != derive_lookup_key(
            LICENSE_KEY, team_id, secret=b"two"
        )

    def test_hex_sha256(self):
        """Test the output is a hex encoded SHA-256 digest."""
        lookup = derive_lookup_key(LICENSE_KEY, uuid.uuid4())
        assert len(lookup) == 64
        int(lookup, 16)


class TestEncryption:
    """Tests for license key encryption at rest."""

    def test_round_trip(self):
        """Test decrypt(encrypt(x)) == x."""
        assert decrypt_license_key(encrypt_license_key(LICENSE_KEY)) == LICENSE_KEY

    def test_format(self):
        """Test the stored format is iv:ciphertext:tag in hex."""
        iv_hex, ciphertext_hex, tag_hex = encrypt_license_key(LICENSE_KEY).split(":")
        assert len(bytes.fromhex(iv_hex)) == 16
        assert len(bytes.fromhex(ciphertext_hex)) == len(LICENSE_KEY)
        assert len(bytes.fromhex(tag_hex)) == 16

    def test_random_iv(self):
        """Test two encryptions of the same key differ."""
        assert encrypt_license_key(LICENSE_KEY) != encrypt_license_key(LICENSE_KEY)

    def test_tampered_ciphertext(self):
        """Test tampering is detected instead of returning garbage."""
        iv_hex, ciphertext_hex, tag_hex = encrypt_license_key(LICENSE_KEY).split(":")
        flipped = format(int(ciphertext_hex[:2], 16) ^ 0x01, "02x") + ciphertext_hex[2:]
        with pytest.raises(DecryptionError):
            decrypt_license_key(f"{iv_hex}:{flipped}:{tag_hex}")

    def test_tampered_tag(self):
        """Test a modified tag is rejected."""
        iv_hex, ciphertext_hex, tag_hex = encrypt_license_key(LICENSE_KEY).split(":")
        flipped = format(int(tag_hex[:2], 16) ^ 0x01, "02x") + tag_hex[2:]
        with pytest.raises(DecryptionError):
            decrypt_license_key(f"{iv_hex}:{ciphertext_hex}:{flipped}")

    def test_wrong_key(self):
        """Test decrypting with another key fails."""
        encrypted = encrypt_license_key(LICENSE_KEY, key=b"a" * 32)
        with pytest.raises(DecryptionError):
            decrypt_license_key(encrypted, key=b"b" * 32)

    @pytest.mark.parametrize("value", ["", "not-encrypted", "zz:zz:zz", "a:b"])
    def test_malformed(self, value):
        """Test malformed values raise DecryptionError."""
        with pytest.raises(DecryptionError):
            decrypt_license_key(value)


class TestChallengeSigning:
    """Tests for challenge signatures."""

    def test_signature_verifies(self, key_pair):
        """Test a signature verifies with the matching public key."""
        public_key, private_key = key_pair
        signature = sign_challenge("nonce-1234567890", private_key)
        assert verify_challenge_signature("nonce-1234567890", signature, public_key)

    def test_signature_bound_to_challenge(self, key_pair):
        """Test a signature does not verify another challenge."""
        public_key, private_key = key_pair
        signature = sign_challenge("nonce-1234567890", private_key)
        assert not verify_challenge_signature("nonce-0987654321", signature, public_key)

    def test_signature_is_hex(self, key_pair):
        """Test the signature is hex encoded RSA-2048 output."""
        _, private_key = key_pair
        signature = sign_challenge("nonce-1234567890", private_key)
        assert len(bytes.fromhex(signature)) == 256

    def test_invalid_private_key(self):
        """Test an unusable key raises SigningError."""
        with pytest.raises(SigningError):
            sign_challenge("nonce-1234567890", "not a pem")


def test_hash_api_key():
    """Test API keys are hashed with SHA-256."""
    assert hash_api_key("api_abc") == hash_api_key("api_abc")
    assert hash_api_key("api_abc") != hash_api_key("api_abd")
    assert len(hash_api_key("api_abc")) == 64
