"""
Cryptographic helpers for license keys and heartbeat challenges.

License keys are looked up by a keyed HMAC of ``"{key}:{team_id}"`` and stored
encrypted with AES-256-GCM as ``ivhex:ciphertexthex:taghex``. Heartbeat
challenges are signed with the team's RSA private key (PKCS#1 v1.5, SHA-256)
and returned hex encoded.
"""

import binascii
import hashlib
import hmac
import logging
import os
from typing import Optional, Tuple

from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from django.conf import settings

from core.domain.exceptions import DecryptionError, EncryptionError, SigningError

logger = logging.getLogger(__name__)

IV_LENGTH = 16
RSA_KEY_SIZE = 2048


def _hmac_secret() -> bytes:
    return settings.LICENSE_HMAC_KEY.encode("utf-8")


def _encryption_key() -> bytes:
    key = settings.LICENSE_ENCRYPTION_KEY
    if isinstance(key, str):
        key = key.encode("utf-8")
    if len(key) != 32:
        raise ValueError("LICENSE_ENCRYPTION_KEY must be exactly 32 bytes")
    return key


def derive_lookup_key(license_key: str, team_id, secret: Optional[bytes] = None) -> str:
    """
    Derive the lookup hash of a license key within a team.

    Args:
        license_key: Plaintext license key
        team_id: Owning team id
        secret: HMAC secret, defaults to ``settings.LICENSE_HMAC_KEY``

    Returns:
        Hex encoded HMAC-SHA256 of ``"{license_key}:{team_id}"``
    """
    message = f"{license_key}:{team_id}".encode("utf-8")
    return hmac.new(secret or _hmac_secret(), message, hashlib.sha256).hexdigest()


def encrypt_license_key(license_key: str, key: Optional[bytes] = None) -> str:
    """
    Encrypt a plaintext license key for storage.

    Args:
        license_key: Plaintext license key
        key: 32 byte AES key, defaults to ``settings.LICENSE_ENCRYPTION_KEY``

    Returns:
        ``ivhex:ciphertexthex:taghex``

    Raises:
        EncryptionError: If the key material is unusable
    """
    try:
        aesgcm = AESGCM(key or _encryption_key())
        iv = os.urandom(IV_LENGTH)
        sealed = aesgcm.encrypt(iv, license_key.encode("utf-8"), None)
    except (ValueError, TypeError) as e:
        logger.error("License key encryption failed: %s", e)
        raise EncryptionError() from e

    # AESGCM appends the 16 byte tag to the ciphertext
    ciphertext, tag = sealed[:-16], sealed[-16:]
    return f"{iv.hex()}:{ciphertext.hex()}:{tag.hex()}"


def decrypt_license_key(encrypted: str, key: Optional[bytes] = None) -> str:
    """
    Decrypt a stored license key.

    Raises:
        DecryptionError: If the value is malformed or fails authentication
    """
    try:
        iv_hex, ciphertext_hex, tag_hex = encrypted.split(":")
        iv = bytes.fromhex(iv_hex)
        sealed = bytes.fromhex(ciphertext_hex) + bytes.fromhex(tag_hex)
        plaintext = AESGCM(key or _encryption_key()).decrypt(iv, sealed, None)
        return plaintext.decode("utf-8")
    except (ValueError, TypeError, AttributeError, InvalidTag, binascii.Error) as e:
        logger.error("License key decryption failed: %s", type(e).__name__)
        raise DecryptionError() from e


def generate_key_pair() -> Tuple[str, str]:
    """
    Generate an RSA key pair for a team.

    Returns:
        Tuple of (public key PEM in SubjectPublicKeyInfo, private key PEM in PKCS#8)
    """
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=RSA_KEY_SIZE)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return public_pem, private_pem


def sign_challenge(challenge: str, private_key_pem: str) -> str:
    """
    Sign a client supplied challenge with a team private key.

    Args:
        challenge: Nonce sent by the licensed software
        private_key_pem: PKCS#8 PEM private key of the team

    Returns:
        Hex encoded RSA-SHA256 signature

    Raises:
        SigningError: If the key cannot be loaded or used
    """
    try:
        private_key = serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"), password=None
        )
        signature = private_key.sign(
            challenge.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256()
        )
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Challenge signing failed: %s", type(e).__name__)
        raise SigningError() from e
    return signature.hex()


def verify_challenge_signature(challenge: str, signature_hex: str, public_key_pem: str) -> bool:
    """Check a challenge signature against a team public key."""
    try:
        public_key = serialization.load_pem_public_key(public_key_pem.encode("utf-8"))
        public_key.verify(
            bytes.fromhex(signature_hex),
            challenge.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except (InvalidSignature, ValueError):
        return False
    return True


def hash_api_key(raw_key: str) -> str:
    """SHA-256 hex digest used to store API keys at rest."""
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()
