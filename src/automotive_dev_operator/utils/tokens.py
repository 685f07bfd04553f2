"""Random token generation for OAuth proxy cookie secrets."""

from __future__ import annotations

import secrets
import string

from ..constants import COOKIE_SECRET_LENGTH
from .errors import GenerationError

# 64 symbols, so byte % len(ALPHABET) is uniform over the 256 byte values.
ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


def generate_random_secret(length: int = COOKIE_SECRET_LENGTH) -> str:
    """Generate a random cookie secret.

    Args:
        length: Number of characters to generate

    Returns:
        Random string drawn from ALPHABET

    Raises:
        ValueError: If length is not positive
        GenerationError: If the entropy source cannot supply bytes
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")

    try:
        raw = secrets.token_bytes(length)
    except (OSError, NotImplementedError) as e:
        raise GenerationError(f"entropy source failed to supply {length} bytes: {e}") from e

    return "".join(ALPHABET[b % len(ALPHABET)] for b in raw)
