"""
License key generation.

Keys are five groups of five uppercase letters and digits, e.g.
``A1B2C-D3E4F-G5H6I-J7K8L-M9N0P``.
"""

import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 5
KEY_GROUP_LENGTH = 5
MAX_GENERATION_ATTEMPTS = 5


def generate_license_key() -> str:
    """
    Generate a license key in format: XXXXX-XXXXX-XXXXX-XXXXX-XXXXX.

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)
