"""Identifier generation"""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_uppercase


def generate_epoch_id(suffix_length: int = 4) -> str:
    """
    Time-ordered record ID: epoch milliseconds plus a random base-36 suffix.

    Example: 1718000000000K3ZQ
    """
    epoch_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(suffix_length))
    return f"{epoch_ms}{suffix}"
